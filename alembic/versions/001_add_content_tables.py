"""Add content tables (prayers, saints, apparitions) and users

Revision ID: 001_add_content_tables
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_add_content_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONTENT_TABLES = ('prayers', 'saints', 'apparitions')


def _content_columns():
    """Columns every content table shares."""
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('language', sa.String(length=8), nullable=False),
        sa.Column('slug', sa.String(length=200), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('source', sa.String(length=255), nullable=True),
        sa.Column('source_url', sa.String(length=500), nullable=True),
        sa.Column('source_attribution', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Create users and content tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('language_override', sa.String(length=8), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'prayers',
        *_content_columns(),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug', 'language', name='uq_prayers_slug_language'),
    )
    op.create_index('ix_prayers_title', 'prayers', ['title'])

    op.create_table(
        'saints',
        *_content_columns(),
        sa.Column('name', sa.String(length=300), nullable=False),
        sa.Column('biography', sa.Text(), nullable=False),
        sa.Column('feast_day', sa.DateTime(), nullable=True),
        sa.Column('patronages', sa.JSON(), nullable=False),
        sa.Column('canonization_status', sa.String(length=100), nullable=True),
        sa.Column('official_prayer', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug', 'language', name='uq_saints_slug_language'),
    )
    op.create_index('ix_saints_name', 'saints', ['name'])

    op.create_table(
        'apparitions',
        *_content_columns(),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('story', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=300), nullable=True),
        sa.Column('first_year', sa.Integer(), nullable=True),
        sa.Column('feast_day', sa.DateTime(), nullable=True),
        sa.Column('approval_note', sa.Text(), nullable=True),
        sa.Column('official_prayer', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug', 'language', name='uq_apparitions_slug_language'),
    )
    op.create_index('ix_apparitions_title', 'apparitions', ['title'])

    for table in CONTENT_TABLES:
        op.create_index(f'ix_{table}_language', table, ['language'])
        op.create_index(f'ix_{table}_updated_at', table, ['updated_at'])
        op.create_index(f'ix_{table}_language_active', table, ['language', 'is_active'])


def downgrade() -> None:
    """Drop content tables and users."""
    for table in CONTENT_TABLES:
        op.drop_index(f'ix_{table}_language_active', table_name=table)
        op.drop_index(f'ix_{table}_updated_at', table_name=table)
        op.drop_index(f'ix_{table}_language', table_name=table)
    op.drop_index('ix_apparitions_title', table_name='apparitions')
    op.drop_index('ix_saints_name', table_name='saints')
    op.drop_index('ix_prayers_title', table_name='prayers')
    op.drop_table('apparitions')
    op.drop_table('saints')
    op.drop_table('prayers')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
