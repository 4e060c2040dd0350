"""initial schema: users, jobs, saved jobs, recommendations, notifications

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('username', sa.String(20), nullable=False),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('verify_code', sa.String(6), nullable=False),
        sa.Column('verify_code_expire', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('experience', sa.JSON(), nullable=False),
        sa.Column('education', sa.JSON(), nullable=False),
        sa.Column('preferences', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'])
    # username is unique among verified accounts only
    op.create_index(
        'uq_users_username_verified', 'users', ['username'], unique=True,
        sqlite_where=sa.text('is_verified = 1'),
        postgresql_where=sa.text('is_verified'),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(512), nullable=False),
        sa.Column('company', sa.String(512), nullable=True),
        sa.Column('location', sa.String(512), nullable=True),
        sa.Column('job_type', sa.String(64), nullable=True),
        sa.Column('salary', sa.String(128), nullable=True),
        sa.Column('skills_required', sa.JSON(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('apply_link', sa.String(2048), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])

    op.create_table(
        'saved_jobs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('saved_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'job_id', name='uq_saved_jobs_user_job'),
    )
    op.create_index('ix_saved_jobs_user_id', 'saved_jobs', ['user_id'])
    op.create_index('ix_saved_jobs_job_id', 'saved_jobs', ['job_id'])

    op.create_table(
        'job_recommendations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('match_percentage', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'match_percentage >= 0 AND match_percentage <= 100', name='ck_recommendation_match_range'
        ),
    )
    op.create_index('ix_job_recommendations_user_id', 'job_recommendations', ['user_id'])
    op.create_index('ix_job_recommendations_job_id', 'job_recommendations', ['job_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_email', sa.String(320), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("type IN ('info', 'warning', 'success')", name='ck_notification_type'),
    )
    op.create_index('ix_notifications_user_email', 'notifications', ['user_email'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('job_recommendations')
    op.drop_table('saved_jobs')
    op.drop_table('jobs')
    op.drop_index('uq_users_username_verified', table_name='users')
    op.drop_table('users')
