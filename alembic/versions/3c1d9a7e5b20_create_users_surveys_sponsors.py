"""create users, surveys and survey_sponsors

Revision ID: 3c1d9a7e5b20
Revises:
Create Date: 2026-10-18 13:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1d9a7e5b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('confirmed', sa.Boolean(), nullable=False),
        sa.Column('permissions', sa.Integer(), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('confirm_verifier', sa.String(255), nullable=True),
        sa.Column('recover_verifier', sa.String(255), nullable=True),
        sa.Column('recover_token_expiry', sa.DateTime(), nullable=True),
        sa.Column('attempt_count', sa.Integer(), nullable=False),
        sa.Column('last_attempt', sa.DateTime(), nullable=True),
        sa.Column('locked', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_name', 'users', ['name'])
    op.create_index('ix_users_permissions', 'users', ['permissions'])

    op.create_table(
        'surveys',
        sa.Column('id', sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column('user_id', sa.Integer(),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('github_id', sa.String(255), nullable=False),
        sa.Column('priorities', sa.Text(), nullable=False),
        sa.Column('issues', sa.Text(), nullable=False),
        sa.Column('comms_frequency', sa.String(255), nullable=False),
        sa.Column('pre_release', sa.Boolean(), nullable=False),
        sa.Column('privacy', sa.String(255), nullable=False),
    )
    op.create_index('ix_surveys_id', 'surveys', ['id'])
    op.create_index('ix_surveys_user_id', 'surveys', ['user_id'], unique=True)
    op.create_index('ix_surveys_name', 'surveys', ['name'])

    op.create_table(
        'survey_sponsors',
        sa.Column('id', sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column('survey_id', sa.Integer(),
                  sa.ForeignKey('surveys.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('survey_id', 'user_id', name='uq_survey_sponsor'),
    )
    op.create_index('ix_survey_sponsors_id', 'survey_sponsors', ['id'])
    op.create_index('ix_survey_sponsors_survey_id', 'survey_sponsors', ['survey_id'])
    op.create_index('ix_survey_sponsors_user_id', 'survey_sponsors', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('survey_sponsors')
    op.drop_table('surveys')
    op.drop_table('users')
