"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .base import Page
from .project_repository import ProjectRepository
from .staff_repository import StaffRepository
from .task_repository import TaskRepository, TaskFilter, TaskSort, TASK_SORT_FIELDS

__all__ = [
    "Page",
    "ProjectRepository",
    "StaffRepository",
    "TaskRepository",
    "TaskFilter",
    "TaskSort",
    "TASK_SORT_FIELDS",
]
