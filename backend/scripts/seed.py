#!/usr/bin/env python3
"""
Seed the configured database from the upstream APIs without starting the server.

Usage:
    python scripts/seed.py                  # products + 5 users
    python scripts/seed.py --users 10       # only users
    python scripts/seed.py --products       # only products
    python scripts/seed.py --if-empty       # same checks as server startup
"""
import argparse
import asyncio
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import settings
from app.db import Database
from app.logging_config import configure_logging
from app.services.bootstrap import bootstrap
from app.services.seed_service import SeedService


async def run(args) -> int:
    database = Database(args.database_url)
    database.ensure_schema()
    svc = SeedService(database, settings=settings)

    if args.if_empty:
        results = await bootstrap(database, svc, user_count=args.users or settings.SEED_USER_COUNT)
    else:
        results = {}
        # neither flag given: seed both
        both = not args.products and not args.users
        if args.products or both:
            results["products"] = await svc.fetch_all_products()
        if args.users or both:
            results["users"] = await svc.fetch_random_users(args.users or settings.SEED_USER_COUNT)

    database.dispose()
    for name, result in results.items():
        print(f"{name}: inserted={result.inserted} failed={result.failed} error={result.error}")
    return 0 if all(r.ok for r in results.values()) else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--database-url", default=settings.DATABASE_URL, help="SQLAlchemy URL of the database to seed")
    parser.add_argument("--users", type=int, default=0, help="Number of random users to generate")
    parser.add_argument("--products", action="store_true", help="Fetch the product catalogue")
    parser.add_argument("--if-empty", action="store_true", help="Only seed tables that are currently empty")
    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)
    sys.exit(asyncio.run(run(args)))
