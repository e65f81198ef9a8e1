import pytest
from src.core.auth import (
    Role,
    TokenError,
    create_access_token,
    decode_access_token,
    normalize_roles,
)
from src.domain.models import AuthContext


def test_create_and_decode_token_roundtrip() -> None:
    token = create_access_token("user-123", roles=["member"], email="user@example.com")

    payload = decode_access_token(token)

    assert payload["sub"] == "user-123"
    assert payload["roles"] == ["member"]
    assert payload["email"] == "user@example.com"


def test_unknown_role_cannot_be_issued() -> None:
    with pytest.raises(TokenError):
        create_access_token("user-123", roles=["superuser"])


def test_tampered_token_is_rejected() -> None:
    token = create_access_token("user-123", roles=["admin"])

    with pytest.raises(TokenError):
        decode_access_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))


def test_auth_context_admin_flag_comes_from_roles() -> None:
    assert AuthContext(user_id="a", roles=("admin",)).is_admin is True
    assert AuthContext(user_id="m", roles=("member",)).is_admin is False
    assert AuthContext().is_admin is False
    assert AuthContext().is_authenticated is False


def test_duplicate_roles_are_collapsed() -> None:
    token = create_access_token("user-123", roles=[Role.ADMIN, "admin", "member"])

    assert decode_access_token(token)["roles"] == ["admin", "member"]


def test_normalize_roles_rejects_unknown_names() -> None:
    assert normalize_roles(["member", Role.MEMBER]) == ("member",)
    with pytest.raises(TokenError):
        normalize_roles(["root"])
