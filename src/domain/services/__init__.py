"""Domain services."""

from src.domain.services.catalog_badges import (
    BadgeAlreadyInactiveError,
    BadgePage,
    CatalogBadgeNotFoundError,
    CatalogBadgeService,
    CatalogStoreError,
    StatusFilterForbiddenError,
    UnknownCreatorError,
)

__all__ = [
    "BadgeAlreadyInactiveError",
    "BadgePage",
    "CatalogBadgeNotFoundError",
    "CatalogBadgeService",
    "CatalogStoreError",
    "StatusFilterForbiddenError",
    "UnknownCreatorError",
]
