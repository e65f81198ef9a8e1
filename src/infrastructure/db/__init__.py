from . import models  # noqa: F401
from .base import Base
from .seed import SeedResult, seed_catalog
from .session import enable_sqlite_foreign_keys, get_session, get_session_factory

__all__ = [
    "Base",
    "SeedResult",
    "enable_sqlite_foreign_keys",
    "get_session",
    "get_session_factory",
    "seed_catalog",
]
