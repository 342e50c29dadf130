"""create user, battle, score and leaderboard_entry tables

Revision ID: 5a7c1e2f9b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5a7c1e2f9b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'battle',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('prompt', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('user_solution', sa.Text(), nullable=True),
        sa.Column('ai_solution', sa.Text(), nullable=True),
        sa.Column('user_score', sa.Integer(), nullable=True),
        sa.Column('ai_score', sa.Integer(), nullable=True),
        sa.Column('user_won', sa.Boolean(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('opponent_type', sa.String(length=16), nullable=False, server_default='ai'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_battle_user_id', 'battle', ['user_id'])
    op.create_index('ix_battle_created_at', 'battle', ['created_at'])

    op.create_table(
        'score',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('battle_id', sa.Integer(), sa.ForeignKey('battle.id'), nullable=False, unique=True),
        sa.Column('user_originality', sa.Integer(), nullable=False),
        sa.Column('user_logic', sa.Integer(), nullable=False),
        sa.Column('user_expression', sa.Integer(), nullable=False),
        sa.Column('ai_originality', sa.Integer(), nullable=False),
        sa.Column('ai_logic', sa.Integer(), nullable=False),
        sa.Column('ai_expression', sa.Integer(), nullable=False),
        sa.Column('user_originality_feedback', sa.Text(), nullable=True),
        sa.Column('user_logic_feedback', sa.Text(), nullable=True),
        sa.Column('user_expression_feedback', sa.Text(), nullable=True),
        sa.Column('ai_originality_feedback', sa.Text(), nullable=True),
        sa.Column('ai_logic_feedback', sa.Text(), nullable=True),
        sa.Column('ai_expression_feedback', sa.Text(), nullable=True),
        sa.Column('judge_feedback', sa.Text(), nullable=False),
    )

    op.create_table(
        'leaderboard_entry',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False, unique=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('total_battles', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('wins', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_score', sa.Integer(), nullable=False, server_default='0'),
    )


def downgrade():
    op.drop_table('leaderboard_entry')
    op.drop_table('score')
    op.drop_index('ix_battle_created_at', table_name='battle')
    op.drop_index('ix_battle_user_id', table_name='battle')
    op.drop_table('battle')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
