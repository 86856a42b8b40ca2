"""initial_marketplace_schema

Creates the five marketplace tables: users, jobs, editor_profiles,
reviews and applications.

Unique constraints back the storage invariants:
1. users.username and users.email are unique
2. editor_profiles.user_id is unique (one profile per editor)

Revision ID: 3f2a9c1d7e01
Revises:
Create Date: 2026-10-19 10:12:41.208311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e01'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('creator', 'editor', 'admin', name='user_role'), nullable=False),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('job_type', sa.String(), nullable=False),
        sa.Column('employment_type', sa.String(), nullable=False),
        sa.Column('min_price', sa.Integer(), nullable=False),
        sa.Column('max_price', sa.Integer(), nullable=False),
        sa.Column('price_type', sa.String(), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id']),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_creator_id', 'jobs', ['creator_id'])
    op.create_index('ix_jobs_is_active', 'jobs', ['is_active'])

    op.create_table(
        'editor_profiles',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('hourly_rate', sa.Integer(), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('portfolio_url', sa.String(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
    )
    op.create_index('ix_editor_profiles_id', 'editor_profiles', ['id'])
    op.create_index('ix_editor_profiles_user_id', 'editor_profiles', ['user_id'], unique=True)
    op.create_index('ix_editor_profiles_is_available', 'editor_profiles', ['is_available'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('editor_id', sa.Integer(), nullable=False),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['editor_id'], ['users.id']),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id']),
    )
    op.create_index('ix_reviews_id', 'reviews', ['id'])
    op.create_index('ix_reviews_editor_id', 'reviews', ['editor_id'])
    op.create_index('ix_reviews_creator_id', 'reviews', ['creator_id'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('editor_id', sa.Integer(), nullable=False),
        sa.Column('cover_letter', sa.String(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('pending', 'accepted', 'rejected', name='application_status'), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.ForeignKeyConstraint(['editor_id'], ['users.id']),
    )
    op.create_index('ix_applications_id', 'applications', ['id'])
    op.create_index('ix_applications_job_id', 'applications', ['job_id'])
    op.create_index('ix_applications_editor_id', 'applications', ['editor_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('applications')
    op.drop_table('reviews')
    op.drop_table('editor_profiles')
    op.drop_table('jobs')
    op.drop_table('users')
    sa.Enum(name='application_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
