"""SQLAlchemy models for the tags feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_service.core.database import Base, UUIDPKMixin

if TYPE_CHECKING:
    from catalog_service.features.resources.models import Resource


class Tag(Base, UUIDPKMixin):
    """Reusable label attached to resources.

    A label exists at most once system-wide; resources that use the same
    label share this record. Tags are created on first use and are never
    removed when the last resource referencing them goes away.
    """

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("label", name="uq_tags_label"),)

    label: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Case-sensitive unique label (e.g., 'react', 'python')",
    )

    # Read-only back-reference; associations are changed through Resource.tags
    resources: Mapped[list[Resource]] = relationship(
        "Resource",
        secondary="resource_tags",
        viewonly=True,
        lazy="select",
    )

    def __repr__(self) -> str:
        """Return tag summary for debugging."""
        return f"<Tag(id={self.id}, label={self.label!r})>"
