"""
Event system setup and configuration.
Registers all event handlers with the event dispatcher.
"""

import logging
from buildtrack.domain.events.base import get_event_dispatcher
from .activity_handlers import TaskActivityLogHandler, TaskIssueHandler, TaskCompletionHandler

logger = logging.getLogger(__name__)


def setup_event_handlers():
    """Set up and register all event handlers."""

    dispatcher = get_event_dispatcher()
    dispatcher.clear_handlers()

    # Register global handler for logging
    dispatcher.register_global_handler(TaskActivityLogHandler())

    # Register specific handlers for task events
    dispatcher.register_handler("TaskIssueReported", TaskIssueHandler())
    dispatcher.register_handler("TaskCompleted", TaskCompletionHandler())

    logger.info("Event handlers registered successfully")

    # Log registered handlers
    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.info(f"Event {event_type}: {', '.join(handlers)} handlers")


def initialize_event_system():
    """Initialize the complete event system."""
    try:
        setup_event_handlers()
        logger.info("Event system initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize event system: {str(e)}")
        raise
