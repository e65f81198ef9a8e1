from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column
from src.domain.models import BadgeCategory, BadgeLevel, BadgeStatus

from .base import Base


def _text_enum(enum_cls: type, name: str) -> Enum:
    # Stored as plain text columns; no native database enum types.
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda e: [x.value for x in e],
    )


class UserModel(Base):
    """SQLAlchemy model for users table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    idp_subject: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    last_seen_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, is_admin={self.is_admin})>"


class CatalogBadge(Base):
    __tablename__ = "catalog_badges"
    __table_args__ = (
        Index("idx_catalog_badges_category_level", "category", "level"),
        Index("idx_catalog_badges_status_created_at", "status", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[BadgeCategory] = mapped_column(
        _text_enum(BadgeCategory, "badge_category"), nullable=False
    )
    level: Mapped[BadgeLevel] = mapped_column(_text_enum(BadgeLevel, "badge_level"), nullable=False)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON, default=dict)
    status: Mapped[BadgeStatus] = mapped_column(
        _text_enum(BadgeStatus, "catalog_badge_status"),
        default=BadgeStatus.ACTIVE,
        nullable=False,
    )
    created_by: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    deactivated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    def __repr__(self) -> str:
        return f"<CatalogBadge(id={self.id}, title={self.title!r}, status={self.status.value})>"
