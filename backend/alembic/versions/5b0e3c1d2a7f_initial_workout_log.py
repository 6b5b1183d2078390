"""initial workout log schema

Revision ID: 5b0e3c1d2a7f
Revises:
Create Date: 2025-12-19 09:12:44.201318

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b0e3c1d2a7f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) users
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2) exercise catalog
    op.create_table(
        'exercises',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('body_parts', sa.JSON(), nullable=False),
        sa.Column('created_by', sa.String(length=36), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_exercises_name', 'exercises', ['name'], unique=True)
    op.create_index('ix_exercises_created_by', 'exercises', ['created_by'])

    # 3) workouts: one per user and UTC-midnight day
    op.create_table(
        'workouts',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('body_weight', sa.Numeric(5, 2), nullable=True),
        sa.Column('day_rpe', sa.Numeric(3, 1), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('user_id', 'date', name='uq_workouts_user_id_date'),
    )
    op.create_index('ix_workouts_user_id', 'workouts', ['user_id'])

    # 4) workout_items
    op.create_table(
        'workout_items',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('workout_id', sa.String(length=36), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.String(length=36), sa.ForeignKey('exercises.id'), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
    )
    op.create_index('ix_workout_items_workout_id', 'workout_items', ['workout_id'])
    op.create_index('ix_workout_items_exercise_id', 'workout_items', ['exercise_id'])

    # 5) workout_sets
    op.create_table(
        'workout_sets',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('workout_item_id', sa.String(length=36), sa.ForeignKey('workout_items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('set_index', sa.Integer(), nullable=False),
        sa.Column('weight_kg', sa.Numeric(6, 2), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('rpe', sa.Numeric(3, 1), nullable=True),
    )
    op.create_index('ix_workout_sets_workout_item_id', 'workout_sets', ['workout_item_id'])


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('workout_sets')
    op.drop_table('workout_items')
    op.drop_table('workouts')
    op.drop_table('exercises')
    op.drop_table('users')
