"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .project_mapper import ProjectMapper
from .staff_mapper import StaffMapper
from .task_mapper import TaskMapper

__all__ = [
    "ProjectMapper",
    "StaffMapper",
    "TaskMapper",
]
