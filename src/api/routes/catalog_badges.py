from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import api_error, get_auth_context, get_db_session, require_roles
from src.api.schemas.catalog_badges import (
    CatalogBadgeCreate,
    CatalogBadgeItem,
    CatalogBadgeListParams,
    CatalogBadgeListResponse,
    PaginationMeta,
)
from src.core.auth import Role
from src.domain import AuthContext
from src.domain.services.catalog_badges import (
    BadgeAlreadyInactiveError,
    CatalogBadgeNotFoundError,
    CatalogBadgeService,
    CatalogStoreError,
    StatusFilterForbiddenError,
    UnknownCreatorError,
)
from src.infrastructure.db.models import CatalogBadge

router = APIRouter(prefix="/api/catalog-badges", tags=["Catalog Badges"])


@router.get("", response_model=CatalogBadgeListResponse)
async def list_catalog_badges(
    params: Annotated[CatalogBadgeListParams, Query()],
    session: AsyncSession = Depends(get_db_session),
    caller: AuthContext = Depends(get_auth_context),
) -> CatalogBadgeListResponse:
    """List catalog badges with filtering, search, sorting and pagination.

    Non-admin callers only ever see active badges and get 403 when they pass
    ``status``. Admins see every status unless they filter by one.
    """
    service = CatalogBadgeService(session)
    try:
        page = await service.list_badges(params.to_query(), caller=caller)
    except StatusFilterForbiddenError as exc:
        raise api_error(status.HTTP_403_FORBIDDEN, "forbidden", str(exc)) from exc
    except CatalogStoreError as exc:
        raise _internal_error("An unexpected error occurred while fetching catalog badges") from exc

    return CatalogBadgeListResponse(
        data=[_badge_item(badge) for badge in page.items],
        pagination=PaginationMeta(
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            has_more=page.has_more,
        ),
    )


@router.post("", response_model=CatalogBadgeItem, status_code=status.HTTP_201_CREATED)
async def create_catalog_badge(
    payload: CatalogBadgeCreate,
    session: AsyncSession = Depends(get_db_session),
    user: AuthContext = Depends(require_roles([Role.ADMIN.value])),
) -> CatalogBadgeItem:
    """Create a new active catalog badge (admin-only)."""
    service = CatalogBadgeService(session)
    try:
        badge = await service.create_badge(payload.to_command(), created_by=user.user_id)
    except UnknownCreatorError as exc:
        raise api_error(
            422, "unknown_creator", str(exc)
        ) from exc
    except CatalogStoreError as exc:
        raise _internal_error(
            "An unexpected error occurred while creating the catalog badge"
        ) from exc

    return _badge_item(badge)


@router.get("/{badge_id}", response_model=CatalogBadgeItem)
async def get_catalog_badge(
    badge_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    caller: AuthContext = Depends(get_auth_context),
) -> CatalogBadgeItem:
    """Get a single catalog badge by id."""
    service = CatalogBadgeService(session)
    try:
        badge = await service.get_badge(str(badge_id), caller=caller)
    except CatalogBadgeNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "not_found", "Catalog badge not found") from exc
    except CatalogStoreError as exc:
        raise _internal_error(
            "An unexpected error occurred while fetching the catalog badge"
        ) from exc

    return _badge_item(badge)


@router.post("/{badge_id}/deactivate", response_model=CatalogBadgeItem)
async def deactivate_catalog_badge(
    badge_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    user: AuthContext = Depends(require_roles([Role.ADMIN.value])),
) -> CatalogBadgeItem:
    """Mark an active badge as inactive (admin-only)."""
    service = CatalogBadgeService(session)
    try:
        badge = await service.deactivate_badge(str(badge_id))
    except CatalogBadgeNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "not_found", "Catalog badge not found") from exc
    except BadgeAlreadyInactiveError as exc:
        raise api_error(
            status.HTTP_409_CONFLICT,
            "invalid_status",
            "Badge is already inactive",
            current_status="inactive",
        ) from exc
    except CatalogStoreError as exc:
        raise _internal_error(
            "An unexpected error occurred while deactivating the catalog badge"
        ) from exc

    return _badge_item(badge)


def _badge_item(badge: CatalogBadge) -> CatalogBadgeItem:
    return CatalogBadgeItem(
        id=badge.id,
        title=badge.title,
        description=badge.description,
        category=badge.category,
        level=badge.level,
        metadata=badge.metadata_ or {},
        status=badge.status,
        created_by=badge.created_by,
        created_at=badge.created_at,
        deactivated_at=badge.deactivated_at,
        version=badge.version,
    )


def _internal_error(message: str) -> HTTPException:
    return api_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", message)
