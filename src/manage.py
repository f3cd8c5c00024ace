"""Campus Marketplace management CLI.

Creates and drops the database schema and loads the demo data set.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load demo campuses, accounts and listings

Set PROTEAN_ENV=production to target the SQLite database configured in
marketplace/domain.toml.
"""

import argparse
import sys


def _initialized_domain():
    from marketplace.domain import marketplace

    print("Initializing marketplace domain...")
    marketplace.init()
    return marketplace


def setup_database():
    from marketplace.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating marketplace database schema...")
    tables = setup_db(domain)
    print(f"Done. {len(tables)} table(s): {', '.join(tables) or 'none (memory provider)'}")


def drop_database():
    from marketplace.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping marketplace database schema...")
    tables = drop_db(domain)
    print(f"Done. {len(tables)} table(s) dropped.")


def seed_database():
    from marketplace.seed import seed

    domain = _initialized_domain()
    with domain.domain_context():
        if seed():
            print("Demo data loaded.")
        else:
            print("Demo data already present.")


def main():
    parser = argparse.ArgumentParser(description="Campus Marketplace management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load the demo data set")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
