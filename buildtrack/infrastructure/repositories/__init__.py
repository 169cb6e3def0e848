"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .project_repository import SQLAlchemyProjectRepository
from .staff_repository import SQLAlchemyStaffRepository
from .task_repository import SQLAlchemyTaskRepository

__all__ = [
    "SQLAlchemyProjectRepository",
    "SQLAlchemyStaffRepository",
    "SQLAlchemyTaskRepository",
]
