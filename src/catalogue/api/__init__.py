"""Catalogue HTTP API: routers, schemas and error handling."""
