from src.domain.models import (
    DEFAULT_PAGE_LIMIT,
    MAX_OFFSET,
    MAX_PAGE_LIMIT,
    MAX_SEARCH_LENGTH,
    AuthContext,
    BadgeCategory,
    BadgeLevel,
    BadgeListQuery,
    BadgeStatus,
    NewCatalogBadge,
    SortField,
    SortOrder,
)

__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "MAX_OFFSET",
    "MAX_PAGE_LIMIT",
    "MAX_SEARCH_LENGTH",
    "AuthContext",
    "BadgeCategory",
    "BadgeLevel",
    "BadgeListQuery",
    "BadgeStatus",
    "NewCatalogBadge",
    "SortField",
    "SortOrder",
]
