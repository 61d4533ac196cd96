"""
SQLAlchemy ORM models for persistent storage.

Local state is a flat key-value blob store: each row holds one JSON document.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class BlobDB(Base):
    """
    A named JSON blob.

    The value is stored as raw text so a corrupt document can be read back
    and rejected by the caller instead of failing inside the driver.
    """

    __tablename__ = "kv_blobs"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<BlobDB(key={self.key}, size={len(self.value)})>"
