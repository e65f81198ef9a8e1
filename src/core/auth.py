from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

import jwt
from src.core.config import get_settings


class TokenError(Exception):
    """Raised when a token cannot be decoded or validated."""


class Role(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"


def normalize_roles(roles: Iterable[str | Role]) -> tuple[str, ...]:
    """Return role names in first-seen order without duplicates.

    Raises ``TokenError`` for any name that is not a known ``Role``.
    """
    known = {role.value for role in Role}
    normalized: list[str] = []
    for role in roles:
        name = role.value if isinstance(role, Role) else str(role)
        if name not in known:
            raise TokenError(f"Unsupported role: {name}")
        if name not in normalized:
            normalized.append(name)
    return tuple(normalized)


def has_admin_role(roles: Iterable[str]) -> bool:
    return Role.ADMIN.value in roles


def create_access_token(
    subject: str,
    *,
    roles: Iterable[str | Role],
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a bearer token carrying ``sub`` and ``roles`` claims.

    Only roles enabled in ``Settings.allowed_roles`` may be issued.
    """
    settings = get_settings()
    names = normalize_roles(roles)

    disabled = [name for name in names if name not in settings.allowed_roles]
    if disabled:
        raise TokenError(f"Unsupported role(s): {', '.join(disabled)}")

    issued_at = datetime.now(UTC)
    ttl = expires_delta or timedelta(seconds=settings.access_token_ttl_seconds)
    claims: dict[str, Any] = {
        "sub": subject,
        "roles": list(names),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
        "iss": settings.app_name,
    }
    if email:
        claims["email"] = email

    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify a bearer token and return its claims with roles normalized."""
    settings = get_settings()

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "roles", "exp"]},
        )
    except jwt.PyJWTError as exc:  # pragma: no cover - third-party raises numerous subclasses
        raise TokenError("Invalid token") from exc

    claims["roles"] = list(_claimed_roles(claims))
    return claims


def _claimed_roles(claims: Mapping[str, Any]) -> tuple[str, ...]:
    roles = claims.get("roles")
    if not isinstance(roles, list):
        raise TokenError("Token roles claim must be a list")
    return normalize_roles(roles)
