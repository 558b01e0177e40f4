#!/usr/bin/env python3
"""
Import one page of creatures from the remote catalog.

By default the entries are only fetched and printed.  With ``--api`` each
entry is POSTed to a running Creature Catalog API; with ``--db`` it is
created directly in the given SQLite store.

Usage:
    python seed.py --limit 10
    python seed.py --api http://localhost:3000/api/v1
    python seed.py --db ./creature_catalog.db
"""

import argparse
import asyncio
import sys

from creature_catalog.app.core.config import get_settings
from creature_catalog.app.core.db import init_db
from creature_catalog.app.core.logging_config import setup_logging
from creature_catalog.app.services.creature_repository import CreatureRepository
from creature_catalog.app.services.creature_service import CreatureService
from creature_catalog.app.services.seed_service import SeedError, SeedService


async def run(args: argparse.Namespace) -> int:
    seeder = SeedService(args.source, limit=args.limit)
    if args.api:
        outcomes = await seeder.submit_to_api(args.api)
    elif args.db:
        init_db(args.db)
        service = CreatureService(CreatureRepository(args.db), default_limit=get_settings().default_limit)
        outcomes = (await seeder.execute(service)).outcomes
    else:
        for entry in await seeder.fetch_entries():
            print(f"{entry.no:>5}  {entry.name}")
        return 0

    for outcome in outcomes:
        mark = "+" if outcome.created else "!"
        detail = outcome.id if outcome.created else outcome.error
        print(f"[{mark}] {outcome.no:>5}  {outcome.name}  {detail}")
    return 0 if all(o.created for o in outcomes) else 1


def main():
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Seed the creature catalog from a remote catalog.")
    ap.add_argument("--source", default=settings.seed_source_url, help="Remote catalog endpoint")
    ap.add_argument("--limit", type=int, default=settings.seed_limit, help="Number of entries to fetch")
    target = ap.add_mutually_exclusive_group()
    target.add_argument("--api", help="Base URL of a running API, e.g. http://localhost:3000/api/v1")
    target.add_argument("--db", help="Path to a SQLite store to write into directly")
    args = ap.parse_args()

    setup_logging(settings.log_level)
    try:
        sys.exit(asyncio.run(run(args)))
    except SeedError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
