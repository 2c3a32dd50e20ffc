"""SQLAlchemy ORM model for stored documents."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fleet_api.infrastructure.database.base import Base


class DocumentModel(Base):
    """ORM model — maps to the 'documents' table.

    One row per entity of any kind. Auto-keyed kinds are addressed by ``id``;
    name-keyed kinds by ``(kind, name)``.
    """

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    kind: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
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
        UniqueConstraint("kind", "name", name="uq_documents_kind_name"),
        Index("ix_documents_kind_id", "kind", "id"),
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, kind='{self.kind}', name={self.name!r})>"
