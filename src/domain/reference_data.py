from __future__ import annotations

from datetime import UTC, datetime

from src.domain.models import BadgeCategory, BadgeLevel, BadgeStatus

ADMIN_USER_ID = "550e8400-e29b-41d4-a716-446655440100"

USER_DEFINITIONS = [
    {
        "id": ADMIN_USER_ID,
        "email": "admin@badger.com",
        "display_name": "System Administrator",
        "is_admin": True,
        "idp_subject": None,
        "last_seen_at": datetime(2025, 11, 12, 8, 0, tzinfo=UTC),
    },
]

# Sample catalog used by local setups and tests. Badges reference the admin
# user, so USER_DEFINITIONS must be inserted first.
CATALOG_BADGE_DEFINITIONS = [
    {
        "id": "7c1e2a8e-1f0a-4b6e-9a51-2b8d0f6c1a01",
        "title": "Effective Communication",
        "description": "Communicates ideas clearly in writing and in meetings; "
        "adapts the message to technical and non-technical audiences.",
        "category": BadgeCategory.SOFT_SKILLED,
        "level": BadgeLevel.BRONZE,
        "status": BadgeStatus.ACTIVE,
        "metadata_": {},
        "created_by": ADMIN_USER_ID,
        "created_at": datetime(2025, 11, 12, 9, 0, tzinfo=UTC),
        "version": 1,
    },
    {
        "id": "7c1e2a8e-1f0a-4b6e-9a51-2b8d0f6c1a02",
        "title": "System Architecture - Gold",
        "description": "Designs and implements scalable, resilient system architectures "
        "and leads architectural decisions for critical systems.",
        "category": BadgeCategory.TECHNICAL,
        "level": BadgeLevel.GOLD,
        "status": BadgeStatus.ACTIVE,
        "metadata_": {},
        "created_by": ADMIN_USER_ID,
        "created_at": datetime(2025, 11, 12, 9, 5, tzinfo=UTC),
        "version": 1,
    },
    {
        "id": "7c1e2a8e-1f0a-4b6e-9a51-2b8d0f6c1a03",
        "title": "Project Leadership - Silver",
        "description": "Led a significant project from inception to delivery, coordinating "
        "team members and managing milestones.",
        "category": BadgeCategory.ORGANIZATIONAL,
        "level": BadgeLevel.SILVER,
        "status": BadgeStatus.ACTIVE,
        "metadata_": {},
        "created_by": ADMIN_USER_ID,
        "created_at": datetime(2025, 11, 12, 9, 10, tzinfo=UTC),
        "version": 1,
    },
]
