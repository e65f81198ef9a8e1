from __future__ import annotations

from datetime import UTC, datetime

from src.api.deps import issue_smoke_token
from src.core.auth import Role
from src.domain.models import BadgeCategory, BadgeLevel, BadgeStatus
from src.domain.reference_data import ADMIN_USER_ID

INACTIVE_BADGE_ID = "7c1e2a8e-1f0a-4b6e-9a51-2b8d0f6c1a99"

INACTIVE_BADGE = {
    "id": INACTIVE_BADGE_ID,
    "title": "Legacy Mentoring",
    "description": "Retired mentoring badge kept for historical applications.",
    "category": BadgeCategory.SOFT_SKILLED,
    "level": BadgeLevel.BRONZE,
    "status": BadgeStatus.INACTIVE,
    "metadata_": {},
    "created_by": ADMIN_USER_ID,
    "created_at": datetime(2025, 11, 12, 9, 15, tzinfo=UTC),
    "deactivated_at": datetime(2025, 11, 13, 9, 0, tzinfo=UTC),
    "version": 1,
}

# Active sample badges by title, newest first.
ACTIVE_TITLES_NEWEST_FIRST = [
    "Project Leadership - Silver",
    "System Architecture - Gold",
    "Effective Communication",
]


def auth_headers(user_id: str = "member-1", role: Role = Role.MEMBER) -> dict[str, str]:
    token = issue_smoke_token(user_id, role=role, email="member@example.com")
    return {"Authorization": f"Bearer {token}"}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def titles(payload: dict) -> list[str]:
    return [item["title"] for item in payload["data"]]
