from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Sequence
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from src.core.auth import Role, TokenError, create_access_token, decode_access_token
from src.core.config import get_settings
from src.domain import AuthContext
from src.infrastructure.db.session import get_session

bearer_scheme = HTTPBearer(auto_error=False)


async def get_auth_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> AuthContext:
    """Build the caller's authorization context; no bearer token means anonymous."""
    if credentials is None:
        return AuthContext()

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError as exc:
        raise _unauthorized(str(exc)) from exc

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Token missing subject")

    return AuthContext(
        user_id=user_id,
        email=payload.get("email", ""),
        roles=tuple(payload.get("roles", [])),
    )


async def get_current_user(caller: AuthContext = Depends(get_auth_context)) -> AuthContext:  # noqa: B008
    """Require an authenticated caller."""
    if not caller.is_authenticated:
        raise _unauthorized("Authentication required")
    if not caller.roles:
        raise _forbidden("Token missing required roles")
    return caller


def require_roles(required_roles: Sequence[str]) -> Callable[[AuthContext], AuthContext]:
    """Dependency factory enforcing that the authenticated user has one of the required roles."""
    settings = get_settings()
    allowed = set(settings.allowed_roles)

    invalid_roles = [role for role in required_roles if role not in allowed]
    if invalid_roles:
        joined_roles = ", ".join(invalid_roles)
        raise ValueError(f"Unsupported role(s) requested: {joined_roles}")

    required = set(required_roles)
    if required == {Role.ADMIN.value}:
        denial = "Admin access required"
    else:
        denial = "Insufficient role privileges"

    def dependency(user: AuthContext = Depends(get_current_user)) -> AuthContext:  # noqa: B008
        if not required.intersection(user.roles):
            raise _forbidden(denial)
        return user

    return dependency


def issue_smoke_token(user_id: str, *, role: Role, email: str | None = None) -> str:
    """Generate a signed token for manual smoke testing."""
    return create_access_token(user_id, roles=[role.value], email=email)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    async for session in get_session():
        yield session


def api_error(
    status_code: int, error: str, message: str, **extra: Any
) -> HTTPException:
    """Build an ``HTTPException`` whose detail is ``{"error", "message", ...}``."""
    return HTTPException(
        status_code=status_code,
        detail={"error": error, "message": message, **extra},
    )


def _unauthorized(detail: str) -> HTTPException:
    return api_error(status.HTTP_401_UNAUTHORIZED, "unauthorized", detail)


def _forbidden(detail: str) -> HTTPException:
    return api_error(status.HTTP_403_FORBIDDEN, "forbidden", detail)
