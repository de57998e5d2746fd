"""Catalogue bounded context: products and their reviews."""

from protean.domain import Domain

from catalogue.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="catalogue")

logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
