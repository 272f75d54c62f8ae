"""SQLAlchemy models for the resources feature."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_service.core.database import Base, CreatedAtMixin, UUIDPKMixin
from catalog_service.features.tags.models import Tag

# Many-to-many association table for resources <-> tags.
# Deleting a resource removes its rows here; the tags themselves stay.
resource_tags = Table(
    "resource_tags",
    Base.metadata,
    Column(
        "resource_id",
        ForeignKey("resources.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Resource(Base, UUIDPKMixin, CreatedAtMixin):
    """A catalog entry with a name, optional description, and tags.

    Tags are loaded eagerly (selectin) so they can be read outside of an
    awaited lazy load in async code.
    """

    __tablename__ = "resources"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Display name, stored as supplied",
    )
    description: Mapped[str | None] = mapped_column(
        String(2000),
        nullable=True,
        comment="Optional free-text description",
    )

    tags: Mapped[list[Tag]] = relationship(
        Tag,
        secondary=resource_tags,
        lazy="selectin",
        order_by=Tag.label,
    )

    def __repr__(self) -> str:
        """Return resource summary for debugging."""
        return f"<Resource(id={self.id}, name={self.name!r})>"
