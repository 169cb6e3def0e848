"""
Domain services for construction task management.
This module exports all domain services for complex business logic.
"""

from .assignment_validator import AssignmentValidator
from .task_analytics_service import TaskAnalyticsService, TaskAnalytics

__all__ = [
    "AssignmentValidator",
    "TaskAnalyticsService",
    "TaskAnalytics",
]
