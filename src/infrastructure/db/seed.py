from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.reference_data import CATALOG_BADGE_DEFINITIONS, USER_DEFINITIONS

from .models import CatalogBadge, UserModel

logger = structlog.get_logger()


@dataclass(slots=True)
class SeedResult:
    users_created: int
    badges_created: int


async def seed_catalog(
    session: AsyncSession,
    *,
    users: Iterable[Mapping[str, Any]] = USER_DEFINITIONS,
    badges: Iterable[Mapping[str, Any]] = CATALOG_BADGE_DEFINITIONS,
) -> SeedResult:
    """Insert users, then badges referencing them, skipping ids already present.

    Users are flushed before any badge is added so ``catalog_badges.created_by``
    always points at a row the store can see. A badge naming an unknown user
    still fails with the store's ``IntegrityError``.
    """
    existing_users = set((await session.execute(select(UserModel.id))).scalars().all())
    users_created = 0
    for user in users:
        if user.get("id") in existing_users:
            continue
        session.add(UserModel(**user))
        users_created += 1
    await session.flush()

    existing_badges = set((await session.execute(select(CatalogBadge.id))).scalars().all())
    badges_created = 0
    for badge in badges:
        if badge.get("id") in existing_badges:
            continue
        session.add(CatalogBadge(**badge))
        badges_created += 1
    await session.flush()

    await session.commit()

    logger.info(
        "catalog_seeded",
        users_created=users_created,
        badges_created=badges_created,
    )
    return SeedResult(users_created=users_created, badges_created=badges_created)
