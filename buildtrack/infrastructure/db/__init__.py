"""
Database infrastructure for BuildTrack.
"""

from .database import engine, SessionLocal, get_db, Base, create_tables
from .models import ProjectModel, StaffModel, TaskModel, TaskAssigneeModel

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "create_tables",
    "ProjectModel",
    "StaffModel",
    "TaskModel",
    "TaskAssigneeModel",
]
