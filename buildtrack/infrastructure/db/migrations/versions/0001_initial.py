"""Create projects, staff, tasks and task assignees

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00

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
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('client', sa.String(255)),
        sa.Column('location', sa.String(255)),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('priority', sa.String(32), nullable=False),
        sa.Column('owner', sa.String(255)),
        sa.Column('description', sa.Text()),
        sa.Column('currency', sa.String(3)),
        sa.Column('budget', sa.Float()),
        sa.Column('start_date', sa.DateTime()),
        sa.Column('deadline', sa.DateTime()),
        sa.Column('progress', sa.Float()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_projects_status', 'projects', ['status'])
    op.create_index('idx_projects_name', 'projects', ['name'])

    op.create_table(
        'staff',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('phone', sa.String(50)),
        sa.Column('position', sa.String(255)),
        sa.Column('department', sa.String(255)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('user_id', sa.String(255)),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_staff_active_name', 'staff', ['is_active', 'name'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id'), nullable=False),
        sa.Column('created_by', sa.String(255), nullable=False),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('category', sa.String(32), nullable=False),
        sa.Column('priority', sa.String(32), nullable=False),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('location', sa.String(500)),
        sa.Column('coordinates', sa.JSON()),
        sa.Column('milestone', sa.String(255)),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('estimated_hours', sa.Float()),
        sa.Column('actual_start_time', sa.DateTime()),
        sa.Column('actual_end_time', sa.DateTime()),
        sa.Column('paused_time', sa.JSON()),
        sa.Column('percentage_complete', sa.Float(), nullable=False),
        sa.Column('quantity_planned', sa.JSON()),
        sa.Column('quantity_completed', sa.JSON()),
        sa.Column('completed_date', sa.DateTime()),
        sa.Column('dependencies', sa.JSON()),
        sa.Column('checklist', sa.JSON()),
        sa.Column('comments', sa.JSON()),
        sa.Column('issues', sa.JSON()),
        sa.Column('documents', sa.JSON()),
        sa.Column('status_history', sa.JSON()),
        sa.Column('notifications_sent', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_tasks_project_status', 'tasks', ['project_id', 'status'])
    op.create_index('idx_tasks_start_date', 'tasks', ['start_date'])
    op.create_index('idx_tasks_created_at', 'tasks', ['created_at'])

    op.create_table(
        'task_assignees',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('task_id', sa.Integer(), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('staff_id', sa.Integer(), sa.ForeignKey('staff.id'), nullable=False),
        sa.Column('role', sa.String(32), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_task_assignees_staff', 'task_assignees', ['staff_id'])
    op.create_index('idx_task_assignees_task', 'task_assignees', ['task_id'])


def downgrade() -> None:
    op.drop_index('idx_task_assignees_task', table_name='task_assignees')
    op.drop_index('idx_task_assignees_staff', table_name='task_assignees')
    op.drop_table('task_assignees')

    op.drop_index('idx_tasks_created_at', table_name='tasks')
    op.drop_index('idx_tasks_start_date', table_name='tasks')
    op.drop_index('idx_tasks_project_status', table_name='tasks')
    op.drop_table('tasks')

    op.drop_index('idx_staff_active_name', table_name='staff')
    op.drop_table('staff')

    op.drop_index('idx_projects_name', table_name='projects')
    op.drop_index('idx_projects_status', table_name='projects')
    op.drop_table('projects')
