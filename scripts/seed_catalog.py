#!/usr/bin/env python3
"""
Seed the admin user and sample catalog badges into the configured database.

Users are inserted before badges so every ``created_by`` resolves. Rows whose
id already exists are left untouched, so the script can be re-run safely.

Run with:
    python scripts/seed_catalog.py [--create-tables]
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
import asyncio

from src.core.logging import setup_logging
from src.infrastructure.db import Base, get_session_factory, seed_catalog
from src.infrastructure.db.session import dispose_engine, get_engine


async def main(create_tables: bool) -> None:
    setup_logging(service="badger-catalog-seed")
    if create_tables:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await seed_catalog(session)
    await dispose_engine()

    print(f"Users created: {result.users_created}")
    print(f"Badges created: {result.badges_created}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (local SQLite/dev databases)",
    )
    args = parser.parse_args()
    asyncio.run(main(args.create_tables))
