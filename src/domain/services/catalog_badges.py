from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.models import (
    AuthContext,
    BadgeListQuery,
    BadgeStatus,
    NewCatalogBadge,
    SortField,
    SortOrder,
)
from src.infrastructure.db.models import CatalogBadge, UserModel

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

logger = structlog.get_logger()

_SORT_COLUMNS = {
    SortField.CREATED_AT: CatalogBadge.created_at,
    SortField.TITLE: CatalogBadge.title,
}


class StatusFilterForbiddenError(Exception):
    """Raised when a non-admin caller asks to filter badges by status."""


class CatalogBadgeNotFoundError(Exception):
    """Raised when a badge does not exist or is not visible to the caller."""


class BadgeAlreadyInactiveError(Exception):
    """Raised when deactivating a badge that is already inactive."""


class UnknownCreatorError(Exception):
    """Raised when the store rejects a badge whose creator is not a known user."""


class CatalogStoreError(Exception):
    """Raised when the backing store fails to answer a catalog query."""


@dataclass(slots=True)
class BadgePage:
    items: list[CatalogBadge]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total


class CatalogBadgeService:
    """Read and admin operations on the badge catalog."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_badges(self, query: BadgeListQuery, *, caller: AuthContext) -> BadgePage:
        """Return one page of badges matching ``query`` that ``caller`` may see.

        Visibility is decided first: admins see every status (or the one they
        asked for), everyone else sees active badges only and may not pass a
        status filter at all. Results are ordered by the requested column with
        ``id`` as tie-breaker so consecutive pages never overlap.
        """
        status_scope = self._status_scope(query.status, caller)

        conditions = self._conditions(query, status_scope)
        count_stmt = select(func.count()).select_from(CatalogBadge).where(*conditions)
        data_stmt: Select[tuple[CatalogBadge]] = (
            select(CatalogBadge)
            .where(*conditions)
            .order_by(*self._ordering(query))
            .offset(query.offset)
            .limit(query.limit)
        )

        try:
            total = await self.session.scalar(count_stmt) or 0
            items = list((await self.session.execute(data_stmt)).scalars().all())
        except SQLAlchemyError as exc:
            logger.error("catalog_store_error", operation="list_badges", error=str(exc))
            raise CatalogStoreError("Failed to fetch catalog badges") from exc

        page = BadgePage(items=items, total=total, limit=query.limit, offset=query.offset)
        logger.info(
            "catalog_badges_listed",
            is_admin=caller.is_admin,
            status_scope=status_scope.value if status_scope else None,
            total=page.total,
            returned=len(page.items),
            offset=query.offset,
            limit=query.limit,
        )
        return page

    async def get_badge(self, badge_id: str, *, caller: AuthContext) -> CatalogBadge:
        badge = await self._fetch(badge_id)
        if badge is None or (not caller.is_admin and badge.status != BadgeStatus.ACTIVE):
            raise CatalogBadgeNotFoundError(f"Catalog badge '{badge_id}' not found")
        return badge

    async def create_badge(self, command: NewCatalogBadge, *, created_by: str) -> CatalogBadge:
        """Insert an active badge owned by ``created_by``.

        The creator must already exist as a user; any other store rejection
        is reported as ``CatalogStoreError``.
        """
        try:
            creator = await self.session.get(UserModel, created_by)
        except SQLAlchemyError as exc:
            logger.error("catalog_store_error", operation="create_badge", error=str(exc))
            raise CatalogStoreError("Failed to create catalog badge") from exc
        if creator is None:
            raise UnknownCreatorError(f"Creator '{created_by}' is not a known user")

        badge = CatalogBadge(
            title=command.title,
            description=command.description,
            category=command.category,
            level=command.level,
            metadata_=dict(command.metadata),
            status=BadgeStatus.ACTIVE,
            version=1,
            created_by=created_by,
        )
        self.session.add(badge)
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("catalog_store_error", operation="create_badge", error=str(exc))
            raise CatalogStoreError("Failed to create catalog badge") from exc

        await self.session.refresh(badge)
        logger.info(
            "catalog_badge_created",
            badge_id=badge.id,
            title=badge.title,
            category=badge.category.value,
            level=badge.level.value,
            created_by=created_by,
        )
        return badge

    async def deactivate_badge(self, badge_id: str) -> CatalogBadge:
        badge = await self._fetch(badge_id)
        if badge is None:
            raise CatalogBadgeNotFoundError(f"Catalog badge '{badge_id}' not found")
        if badge.status == BadgeStatus.INACTIVE:
            raise BadgeAlreadyInactiveError(f"Catalog badge '{badge_id}' is already inactive")

        badge.status = BadgeStatus.INACTIVE
        badge.deactivated_at = datetime.now(UTC)
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("catalog_store_error", operation="deactivate_badge", error=str(exc))
            raise CatalogStoreError("Failed to deactivate catalog badge") from exc

        logger.info("catalog_badge_deactivated", badge_id=badge.id, title=badge.title)
        return badge

    async def _fetch(self, badge_id: str) -> CatalogBadge | None:
        stmt: Select[tuple[CatalogBadge]] = select(CatalogBadge).where(CatalogBadge.id == badge_id)
        try:
            return await self.session.scalar(stmt)
        except SQLAlchemyError as exc:
            logger.error("catalog_store_error", operation="fetch_badge", error=str(exc))
            raise CatalogStoreError("Failed to fetch catalog badge") from exc

    @staticmethod
    def _status_scope(requested: BadgeStatus | None, caller: AuthContext) -> BadgeStatus | None:
        if caller.is_admin:
            return requested
        if requested is not None:
            raise StatusFilterForbiddenError("Only administrators can filter by status")
        return BadgeStatus.ACTIVE

    @staticmethod
    def _conditions(
        query: BadgeListQuery, status_scope: BadgeStatus | None
    ) -> list[ColumnElement[bool]]:
        conditions: list[Any] = []
        if status_scope is not None:
            conditions.append(CatalogBadge.status == status_scope)
        if query.category is not None:
            conditions.append(CatalogBadge.category == query.category)
        if query.level is not None:
            conditions.append(CatalogBadge.level == query.level)
        if query.q:
            pattern = f"%{_escape_like(query.q)}%"
            conditions.append(CatalogBadge.title.ilike(pattern, escape="\\"))
        return conditions

    @staticmethod
    def _ordering(query: BadgeListQuery) -> list[Any]:
        column = _SORT_COLUMNS[query.sort]
        primary = column.asc() if query.order == SortOrder.ASC else column.desc()
        return [primary, CatalogBadge.id.asc()]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
