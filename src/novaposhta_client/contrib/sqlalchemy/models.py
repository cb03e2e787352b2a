"""SQLAlchemy warehouse directory models."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class WarehouseModel(Base):
    """Locally stored warehouse for offline number-to-ref lookups."""

    __tablename__ = "novaposhta_warehouses"

    ref: Mapped[str] = mapped_column(String(36), primary_key=True)
    number: Mapped[str] = mapped_column(String(16), default="")
    city_ref: Mapped[str] = mapped_column(String(36), default="", index=True)
    city_name: Mapped[str] = mapped_column(
        String(128), default="", index=True
    )
    short_address: Mapped[str] = mapped_column(String(255), default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
