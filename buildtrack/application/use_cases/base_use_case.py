"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic, List
from dataclasses import dataclass
from datetime import datetime

from buildtrack.domain.events.base import DomainEvent, publish_event
from buildtrack.domain.models.base import DomainException, ValidationError, BusinessRuleViolation


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """Create error result from exception."""
        if isinstance(exc, ValidationError):
            return cls.error_result(
                exc.message,
                "VALIDATION_ERROR",
                metadata={"field": exc.field, "details": exc.details}
            )
        elif isinstance(exc, BusinessRuleViolation):
            return cls.error_result(exc.message, "BUSINESS_RULE_VIOLATION")
        elif isinstance(exc, DomainException):
            return cls.error_result(exc.message, exc.code)
        else:
            return cls.error_result(str(exc), "UNKNOWN_ERROR")


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Provides common structure and error handling.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, request: T) -> UseCaseResult[R]:
        """
        Execute the use case with proper error handling and logging.
        """
        self.execution_start = datetime.utcnow()

        try:
            # Validate input
            await self._validate_request(request)

            # Execute business logic
            result = await self._execute_business_logic(request)

            self.execution_end = datetime.utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            return UseCaseResult.success_result(
                result,
                metadata={
                    "execution_time_seconds": execution_time,
                    "executed_at": self.execution_end.isoformat()
                }
            )

        except Exception as exc:
            self.execution_end = datetime.utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            if isinstance(exc, DomainException):
                logger.info(f"{self.__class__.__name__} rejected: {exc.message}")
            else:
                logger.exception(f"{self.__class__.__name__} failed")

            error_result = UseCaseResult.from_exception(exc)
            error_result.metadata = {
                **(error_result.metadata or {}),
                "execution_time_seconds": execution_time,
                "failed_at": self.execution_end.isoformat(),
                "exception_type": type(exc).__name__
            }

            return error_result

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        pass

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    Domain events collected during the command are published once it succeeds.
    """

    def __init__(self):
        super().__init__()
        self.events: List[DomainEvent] = []

    async def _execute_business_logic(self, request: T) -> R:
        result = await self._execute_command_logic(request)

        # Publish domain events after the write has been committed
        await self._publish_events()

        return result

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass

    def _collect_events(self, entity: Any) -> None:
        """Take over the events an aggregate raised."""
        self.events.extend(entity.pull_events())

    async def _publish_events(self) -> None:
        """Publish collected domain events."""
        for event in self.events:
            await publish_event(event)

        self.events.clear()


class PaginatedQueryUseCase(QueryUseCase[T, R]):
    """
    Base class for paginated query use cases.
    Page sizes above the maximum are capped rather than rejected.
    """

    def __init__(self, default_page_size: int = 10, max_page_size: int = 100):
        super().__init__()
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def _page_size(self, requested: Optional[int]) -> int:
        if not requested:
            return self.default_page_size
        if requested < 1:
            raise ValidationError("Page size must be positive", "limit")
        return min(requested, self.max_page_size)


# Specific use case patterns
class CreateUseCase(CommandUseCase[T, R]):
    """Base class for entity creation use cases."""
    pass


class UpdateUseCase(CommandUseCase[T, R]):
    """Base class for entity update use cases."""
    pass


class DeleteUseCase(CommandUseCase[T, R]):
    """Base class for entity deletion use cases."""
    pass


class GetByIdUseCase(QueryUseCase[T, R]):
    """Base class for get-by-id use cases."""

    async def _validate_request(self, request: T) -> None:
        """Validate get-by-id request."""
        await super()._validate_request(request)

        if isinstance(request, int) and request <= 0:
            raise ValidationError("ID must be positive")


class ListUseCase(PaginatedQueryUseCase[T, R]):
    """Base class for list use cases."""
    pass


# Authorization mixin
class AuthorizedUseCase(BaseUseCase[T, R]):
    """
    Mixin for use cases that act on behalf of an authenticated user.
    """

    def __init__(self):
        super().__init__()
        self.current_user_id: Optional[str] = None

    def set_current_user(self, user_id: str):
        """Set the current user context."""
        self.current_user_id = user_id

    async def _validate_request(self, request: T) -> None:
        """Validate request with authorization check."""
        await super()._validate_request(request)

        if not self.current_user_id:
            raise ValidationError("User authentication required")
