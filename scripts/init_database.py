#!/usr/bin/env python3
"""
Create the Bookshelf tables, optionally with a couple of sample books.

Usage:
    python scripts/init_database.py [--drop-existing] [--seed] [--database-url URL]

Without ``--database-url`` the location comes from ``BOOKSHELF_DATABASE_PATH``
/ ``BOOKSHELF_DATABASE_URL``, as for the server.
"""

import argparse
import logging
import sys

from bookshelf_graphql.database import DatabaseManager
from bookshelf_graphql.database.seed import seed_sample_books

logger = logging.getLogger("init_database")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        help="drop users and books first (all data is lost)",
    )
    parser.add_argument(
        "--seed",
        "--sample-data",
        dest="seed",
        action="store_true",
        help="add the sample books when the catalog is empty",
    )
    parser.add_argument("--database-url", help="SQLAlchemy URL to initialise instead")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    db = DatabaseManager(args.database_url)
    try:
        if not db.verify_connection():
            return 1

        db.init_database(drop_existing=args.drop_existing)
        if args.seed:
            for book in seed_sample_books(db):
                logger.info("  #%d %s (%s)", book.id, book.title, book.author)

        logger.info("Tables present: %s", ", ".join(db.table_names()))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
