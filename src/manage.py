"""Shop Orders database management CLI.

Creates and drops the relational schema of the shoporders domain when a
sqlite or postgresql provider is configured.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    """Create the database schema of the shoporders domain."""
    from shoporders.domain import shoporders
    from shoporders.utils.db import setup_db

    print("Initializing shoporders domain...")
    shoporders.init()
    print("Creating shoporders database schema...")
    setup_db(shoporders)
    print("Done.")


def drop_databases():
    """Drop the database schema of the shoporders domain."""
    from shoporders.domain import shoporders
    from shoporders.utils.db import drop_db

    print("Initializing shoporders domain...")
    shoporders.init()
    print("Dropping shoporders database schema...")
    drop_db(shoporders)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Shop Orders database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
