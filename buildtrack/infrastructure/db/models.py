"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Float, ForeignKey, JSON, Enum as SQLEnum, Index
)
from sqlalchemy.orm import relationship

from buildtrack.domain.models.project import ProjectStatus, ProjectPriority
from buildtrack.domain.models.task import TaskStatus, TaskPriority, TaskCategory, AssigneeRole

from .database import Base


def _enum_column(enum_class, **kwargs) -> Column:
    """Enum column persisted by value, portable across backends."""
    return Column(
        SQLEnum(
            enum_class,
            values_callable=lambda members: [member.value for member in members],
            native_enum=False,
            length=32,
        ),
        **kwargs
    )


class ProjectModel(Base):
    """Project table"""
    __tablename__ = 'projects'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    client = Column(String(255))
    location = Column(String(255))
    status = _enum_column(ProjectStatus, default=ProjectStatus.PLANNING, nullable=False)
    priority = _enum_column(ProjectPriority, default=ProjectPriority.MEDIUM, nullable=False)
    owner = Column(String(255), default="Unassigned")
    description = Column(Text)
    currency = Column(String(3), default="LKR")
    budget = Column(Float, default=0)
    start_date = Column(DateTime)
    deadline = Column(DateTime)
    progress = Column(Float, default=0)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    tasks = relationship("TaskModel", back_populates="project")

    # Indexes
    __table_args__ = (
        Index('idx_projects_status', 'status'),
        Index('idx_projects_name', 'name'),
    )


class StaffModel(Base):
    """Staff table"""
    __tablename__ = 'staff'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(50))
    position = Column(String(255))
    department = Column(String(255))
    is_active = Column(Boolean, default=True, nullable=False)
    user_id = Column(String(255))

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    task_assignments = relationship("TaskAssigneeModel", back_populates="staff")

    __table_args__ = (
        Index('idx_staff_active_name', 'is_active', 'name'),
    )


class TaskModel(Base):
    """Task table. Owned sub-collections are stored as JSON documents."""
    __tablename__ = 'tasks'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id'), nullable=False)
    created_by = Column(String(255), nullable=False)

    name = Column(String(500), nullable=False)
    description = Column(Text)
    category = _enum_column(TaskCategory, default=TaskCategory.CONSTRUCTION, nullable=False)
    priority = _enum_column(TaskPriority, default=TaskPriority.MEDIUM, nullable=False)
    status = _enum_column(TaskStatus, default=TaskStatus.NOT_STARTED, nullable=False)
    location = Column(String(500))
    coordinates = Column(JSON)
    milestone = Column(String(255))

    # Scheduling
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    estimated_hours = Column(Float)
    actual_start_time = Column(DateTime)
    actual_end_time = Column(DateTime)
    paused_time = Column(JSON)

    # Progress
    percentage_complete = Column(Float, default=0, nullable=False)
    quantity_planned = Column(JSON)
    quantity_completed = Column(JSON)
    completed_date = Column(DateTime)

    # Sub-collections
    dependencies = Column(JSON)
    checklist = Column(JSON)
    comments = Column(JSON)
    issues = Column(JSON)
    documents = Column(JSON)
    status_history = Column(JSON)
    notifications_sent = Column(JSON)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    project = relationship("ProjectModel", back_populates="tasks")
    assignees = relationship(
        "TaskAssigneeModel",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="TaskAssigneeModel.position",
    )

    # Indexes
    __table_args__ = (
        Index('idx_tasks_project_status', 'project_id', 'status'),
        Index('idx_tasks_start_date', 'start_date'),
        Index('idx_tasks_created_at', 'created_at'),
    )


class TaskAssigneeModel(Base):
    """Task assignee table"""
    __tablename__ = 'task_assignees'

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    staff_id = Column(Integer, ForeignKey('staff.id'), nullable=False)
    role = _enum_column(AssigneeRole, default=AssigneeRole.MEMBER, nullable=False)
    position = Column(Integer, default=0, nullable=False)
    assigned_at = Column(DateTime, nullable=False)

    # Relationships
    task = relationship("TaskModel", back_populates="assignees")
    staff = relationship("StaffModel", back_populates="task_assignments")

    __table_args__ = (
        Index('idx_task_assignees_staff', 'staff_id'),
        Index('idx_task_assignees_task', 'task_id'),
    )
