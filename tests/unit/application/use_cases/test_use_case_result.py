"""
Unit tests for use case result handling.
"""

import pytest

from buildtrack.application.use_cases.base_use_case import (
    UseCaseResult,
    CreateUseCase,
    AuthorizedUseCase,
    PaginatedQueryUseCase,
)
from buildtrack.domain.models.base import (
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolation,
    DuplicateEntityError,
)


class TestUseCaseResult:
    """Test cases for UseCaseResult."""

    def test_success_result(self):
        """Test creating successful result."""
        result = UseCaseResult.success_result({"id": 1, "name": "test"})

        assert result.success is True
        assert result.data == {"id": 1, "name": "test"}
        assert result.error is None
        assert result.error_code is None

    def test_error_result(self):
        """Test creating error result."""
        result = UseCaseResult.error_result("Something went wrong", "TEST_ERROR")

        assert result.success is False
        assert result.data is None
        assert result.error == "Something went wrong"
        assert result.error_code == "TEST_ERROR"

    def test_from_validation_error_keeps_field_and_details(self):
        exc = ValidationError("One or more assignees not found", "assignees", {"missing_ids": [4]})

        result = UseCaseResult.from_exception(exc)

        assert result.error_code == "VALIDATION_ERROR"
        assert result.metadata == {"field": "assignees", "details": {"missing_ids": [4]}}

    @pytest.mark.parametrize("exc, code", [
        (EntityNotFoundError("Task", 3), "ENTITY_NOT_FOUND"),
        (BusinessRuleViolation("Project still has tasks"), "BUSINESS_RULE_VIOLATION"),
        (DuplicateEntityError("Staff", "email", "a@b.com"), "DUPLICATE_ENTITY"),
        (RuntimeError("connection reset"), "UNKNOWN_ERROR"),
    ])
    def test_error_codes(self, exc, code):
        result = UseCaseResult.from_exception(exc)

        assert result.success is False
        assert result.error_code == code


class RecordingRepository:
    """Simple repository double for testing use case patterns."""

    def __init__(self):
        self.data = {}
        self.next_id = 1
        self.should_fail = False
        self.fail_message = "Repository error"

    async def save(self, name):
        if self.should_fail:
            raise Exception(self.fail_message)

        entity_id = self.next_id
        self.next_id += 1
        self.data[entity_id] = name
        return entity_id


class CreateNameUseCase(AuthorizedUseCase, CreateUseCase[str, int]):
    def __init__(self, repository: RecordingRepository):
        super().__init__()
        self.repository = repository

    async def _validate_request(self, request: str) -> None:
        await super()._validate_request(request)
        if not request or not request.strip():
            raise ValidationError("Name is required", "name")

    async def _execute_command_logic(self, request: str) -> int:
        return await self.repository.save(request.strip())


class TestCommandUseCase:
    """Test cases for the command use case flow."""

    @pytest.mark.asyncio
    async def test_execute_success(self):
        repo = RecordingRepository()
        use_case = CreateNameUseCase(repo)
        use_case.set_current_user("user-123")

        result = await use_case.execute("  Site office  ")

        assert result.success is True
        assert result.data == 1
        assert repo.data[1] == "Site office"
        assert "execution_time_seconds" in result.metadata

    @pytest.mark.asyncio
    async def test_requires_current_user(self):
        """Test that authorized use cases refuse anonymous calls."""
        use_case = CreateNameUseCase(RecordingRepository())

        result = await use_case.execute("Site office")

        assert result.success is False
        assert result.error == "User authentication required"
        assert result.error_code == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_validation_error(self):
        use_case = CreateNameUseCase(RecordingRepository())
        use_case.set_current_user("user-123")

        result = await use_case.execute("   ")

        assert result.success is False
        assert result.error == "Name is required"
        assert result.metadata["field"] == "name"
        assert result.metadata["exception_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_repository_error(self):
        """Test unexpected failures become unknown errors."""
        repo = RecordingRepository()
        repo.should_fail = True
        repo.fail_message = "Database unavailable"
        use_case = CreateNameUseCase(repo)
        use_case.set_current_user("user-123")

        result = await use_case.execute("Site office")

        assert result.success is False
        assert result.error == "Database unavailable"
        assert result.error_code == "UNKNOWN_ERROR"
        assert result.data is None


class PageSizeUseCase(PaginatedQueryUseCase[int, int]):
    async def _execute_business_logic(self, request: int) -> int:
        return self._page_size(request)


class TestPaginatedQueryUseCase:

    @pytest.mark.asyncio
    async def test_page_size_is_capped(self):
        result = await PageSizeUseCase(default_page_size=10, max_page_size=100).execute(500)

        assert result.data == 100

    @pytest.mark.asyncio
    async def test_default_page_size(self):
        result = await PageSizeUseCase(default_page_size=10, max_page_size=100).execute(None)

        assert result.data == 10
