from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field

from src.core.auth import has_admin_role

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100
MAX_SEARCH_LENGTH = 200
# Largest offset the store can bind as a signed 64-bit integer.
MAX_OFFSET = 2**63 - 1

_ALIAS_NOISE = re.compile(r"[\s_-]+")


def _alias_key(value: str) -> str:
    return _ALIAS_NOISE.sub("", value).lower()


class BadgeCategory(str, enum.Enum):
    TECHNICAL = "technical"
    ORGANIZATIONAL = "organizational"
    SOFT_SKILLED = "soft-skilled"

    @classmethod
    def parse(cls, value: str) -> BadgeCategory:
        """Resolve a category from its canonical value or a spelling alias.

        Case, hyphens, underscores and whitespace are ignored, so ``softskilled``
        and ``Soft_Skilled`` both resolve to ``soft-skilled``.
        """
        key = _alias_key(value)
        for member in cls:
            if _alias_key(member.value) == key:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown category '{value}'; expected one of: {allowed}")


class BadgeLevel(str, enum.Enum):
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"

    @classmethod
    def parse(cls, value: str) -> BadgeLevel:
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown level '{value}'; expected one of: {allowed}") from None


class BadgeStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class SortField(str, enum.Enum):
    CREATED_AT = "created_at"
    TITLE = "title"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(slots=True, frozen=True)
class AuthContext:
    """Authorization facts about the caller of a single request.

    Anonymous callers carry no ``user_id`` and no roles.
    """

    user_id: str | None = None
    email: str = ""
    roles: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return has_admin_role(self.roles)


@dataclass(slots=True, frozen=True)
class BadgeListQuery:
    """Validated listing query for the badge catalog."""

    category: BadgeCategory | None = None
    level: BadgeLevel | None = None
    status: BadgeStatus | None = None
    q: str | None = None
    sort: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = 0


@dataclass(slots=True, frozen=True)
class NewCatalogBadge:
    """Payload for creating a catalog badge."""

    title: str
    category: BadgeCategory
    level: BadgeLevel
    description: str | None = None
    metadata: dict = field(default_factory=dict)
