"""Pantry database management CLI.

Creates or drops the pantry tables for relational providers, using the
setup_db/drop_db utilities in ``pantry.utils.db``.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from pantry.domain import pantry
    from pantry.utils.db import setup_db

    print("Initializing pantry domain...")
    pantry.init()
    print("Creating pantry database schema...")
    setup_db(pantry)
    print("Done.")


def drop_database():
    from pantry.domain import pantry
    from pantry.utils.db import drop_db

    print("Initializing pantry domain...")
    pantry.init()
    print("Dropping pantry database schema...")
    drop_db(pantry)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pantry database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
