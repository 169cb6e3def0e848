"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Annotated, Any, Dict, List, Optional
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict, AfterValidator, BeforeValidator
from pydantic.alias_generators import to_camel


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalise a datetime to naive UTC, the form the domain stores."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Datetime accepted from clients in any offset and stored as naive UTC
UTCDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


def blank_to_none(value: Any) -> Any:
    """Blank strings from cleared query filters mean no filter."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


BlankAsNone = BeforeValidator(blank_to_none)


class BaseDTO(BaseModel):
    """Base DTO with common configuration. camelCase on the wire."""

    model_config = ConfigDict(
        # camelCase aliases, population by field name also allowed
        alias_generator=to_camel,
        populate_by_name=True,
        # Validate assignment
        validate_assignment=True,
        # Unknown keys are dropped
        extra="ignore",
    )

    def to_response(self) -> Dict[str, Any]:
        """Serialise using wire names."""
        return self.model_dump(by_alias=True, mode="json")


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ListRequestDTO(RequestDTO):
    """Base class for list request DTOs with pagination."""

    page: int = Field(default=1, ge=1, description="Page number")
    page_size: int = Field(default=10, ge=1, alias="limit", description="Items per page")
    search: Optional[str] = Field(default=None, max_length=255, description="Search query")


class PaginationDTO(BaseDTO):
    """Pagination block of list responses."""

    current: int = Field(description="Current page number")
    pages: int = Field(description="Total number of pages")
    total: int = Field(description="Total number of items")

    @classmethod
    def from_page(cls, page: Any) -> "PaginationDTO":
        return cls(current=page.page, pages=page.total_pages, total=page.total)


class ListResponseDTO(BaseDTO):
    """Base class for paginated list responses."""

    pagination: PaginationDTO


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")


# Enums for common values
class SortOrder(str, Enum):
    """Sort order options."""
    ASC = "asc"
    DESC = "desc"


def to_domain_dict(dto: BaseModel, exclude_fields: Optional[List[str]] = None) -> Dict[str, Any]:
    """Convert the fields a client actually sent to a dictionary of domain values."""
    exclude_fields = exclude_fields or ['id', 'created_at', 'updated_at']
    data = {name: getattr(dto, name) for name in dto.model_fields_set}

    for field in exclude_fields:
        data.pop(field, None)

    return data
