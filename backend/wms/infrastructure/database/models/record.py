"""SQLAlchemy ORM model for records of every warehouse collection."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from wms.infrastructure.database.base import Base


class RecordModel(Base):
    """ORM model — maps to the 'records' table.

    Ids are unique per collection, so the key is (entity_type, id).
    """

    __tablename__ = "records"

    entity_type: Mapped[str] = mapped_column(String(100), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_records_archived", "entity_type", "archived"),
        Index("ix_records_created_by", "created_by"),
    )

    def __repr__(self) -> str:
        return f"<RecordModel(id={self.id}, type='{self.entity_type}', archived={self.archived})>"
