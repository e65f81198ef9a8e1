from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator
from src.domain.models import (
    DEFAULT_PAGE_LIMIT,
    MAX_OFFSET,
    MAX_PAGE_LIMIT,
    MAX_SEARCH_LENGTH,
    BadgeCategory,
    BadgeLevel,
    BadgeListQuery,
    BadgeStatus,
    NewCatalogBadge,
    SortField,
    SortOrder,
)


def _parse_category(value: Any) -> Any:
    if isinstance(value, str):
        return BadgeCategory.parse(value)
    return value


def _parse_level(value: Any) -> Any:
    if isinstance(value, str):
        return BadgeLevel.parse(value)
    return value


class CatalogBadgeListParams(BaseModel):
    """Query parameters accepted by ``GET /api/catalog-badges``."""

    category: BadgeCategory | None = None
    level: BadgeLevel | None = None
    status: BadgeStatus | None = None
    q: str | None = Field(None, max_length=MAX_SEARCH_LENGTH)
    sort: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    limit: int = Field(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    offset: int = Field(0, ge=0, le=MAX_OFFSET)

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, value: Any) -> Any:
        return _parse_category(value)

    @field_validator("level", mode="before")
    @classmethod
    def resolve_level(cls, value: Any) -> Any:
        return _parse_level(value)

    @field_validator("status", "sort", "order", mode="before")
    @classmethod
    def lowercase_choices(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("q")
    @classmethod
    def blank_search_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def to_query(self) -> BadgeListQuery:
        return BadgeListQuery(
            category=self.category,
            level=self.level,
            status=self.status,
            q=self.q,
            sort=self.sort,
            order=self.order,
            limit=self.limit,
            offset=self.offset,
        )


class CatalogBadgeItem(BaseModel):
    id: str
    title: str
    description: str | None = None
    category: BadgeCategory
    level: BadgeLevel
    metadata: dict[str, Any] = Field(default_factory=dict)
    status: BadgeStatus
    created_by: str | None = None
    created_at: datetime
    deactivated_at: datetime | None = None
    version: int


class PaginationMeta(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class CatalogBadgeListResponse(BaseModel):
    data: list[CatalogBadgeItem]
    pagination: PaginationMeta


class CatalogBadgeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    category: BadgeCategory
    level: BadgeLevel
    metadata: dict[str, Any] | None = None

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, value: Any) -> Any:
        return _parse_category(value)

    @field_validator("level", mode="before")
    @classmethod
    def resolve_level(cls, value: Any) -> Any:
        return _parse_level(value)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Title must not be blank")
        return stripped

    def to_command(self) -> NewCatalogBadge:
        return NewCatalogBadge(
            title=self.title,
            description=self.description,
            category=self.category,
            level=self.level,
            metadata=self.metadata or {},
        )
