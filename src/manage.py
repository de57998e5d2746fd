"""Catalogue database management CLI.

Creates and drops the SQL schema of the catalogue domain. The memory provider
used in development and tests needs neither.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from catalogue.domain import catalogue
    from catalogue.utils.db import setup_db

    print("Initializing catalogue domain...")
    catalogue.init()
    print("Creating catalogue database schema...")
    setup_db(catalogue)
    print("Done.")


def drop_database():
    from catalogue.domain import catalogue
    from catalogue.utils.db import drop_db

    print("Initializing catalogue domain...")
    catalogue.init()
    print("Dropping catalogue database schema...")
    drop_db(catalogue)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Catalogue database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
