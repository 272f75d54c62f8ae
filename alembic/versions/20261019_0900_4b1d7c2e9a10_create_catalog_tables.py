"""create catalog tables

Revision ID: 4b1d7c2e9a10
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '4b1d7c2e9a10'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        'resources',
        sa.Column('name', sa.String(length=200), nullable=False, comment='Display name, stored as supplied'),
        sa.Column('description', sa.String(length=2000), nullable=True, comment='Optional free-text description'),
        sa.Column('id', sa.Uuid(), nullable=False, comment='UUID v4 primary key'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='Timestamp when record was created'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_resources')),
    )
    op.create_index(op.f('ix_resources_created_at'), 'resources', ['created_at'], unique=False)
    op.create_table(
        'tags',
        sa.Column('label', sa.String(length=50), nullable=False, comment="Case-sensitive unique label (e.g., 'react', 'python')"),
        sa.Column('id', sa.Uuid(), nullable=False, comment='UUID v4 primary key'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tags')),
        sa.UniqueConstraint('label', name='uq_tags_label'),
    )
    op.create_table(
        'resource_tags',
        sa.Column('resource_id', sa.Uuid(), nullable=False),
        sa.Column('tag_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['resource_id'], ['resources.id'], name=op.f('fk_resource_tags_resource_id_resources'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], name=op.f('fk_resource_tags_tag_id_tags'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('resource_id', 'tag_id', name=op.f('pk_resource_tags')),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table('resource_tags')
    op.drop_table('tags')
    op.drop_index(op.f('ix_resources_created_at'), table_name='resources')
    op.drop_table('resources')
