"""
Value Objects for the domain layer.
Immutable objects describing measurements and places on a construction site.
"""

from typing import Optional, Dict, Any
from datetime import datetime
from dataclasses import dataclass

from buildtrack.domain.models.base import ValidationError


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string (or pass through a datetime) from stored JSON."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime for JSON storage."""
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Coordinates:
    """Geographic position of a work location."""

    lat: Optional[float] = None
    lng: Optional[float] = None

    def __post_init__(self):
        if self.lat is not None and not -90 <= self.lat <= 90:
            raise ValidationError("Latitude must be between -90 and 90", "coordinates.lat")
        if self.lng is not None and not -180 <= self.lng <= 180:
            raise ValidationError("Longitude must be between -180 and 180", "coordinates.lng")

    def to_dict(self) -> Dict[str, Any]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Coordinates"]:
        if not data:
            return None
        return cls(lat=data.get("lat"), lng=data.get("lng"))


@dataclass(frozen=True)
class Quantity:
    """A measured amount of work, e.g. 120 m3 of concrete."""

    value: Optional[float] = None
    unit: Optional[str] = None

    def __post_init__(self):
        if self.value is not None and self.value < 0:
            raise ValidationError("Quantity cannot be negative", "quantity.value")

    def __str__(self) -> str:
        if self.value is None:
            return ""
        return f"{self.value:g} {self.unit or ''}".strip()

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Quantity"]:
        if not data:
            return None
        return cls(value=data.get("value"), unit=data.get("unit"))


@dataclass(frozen=True)
class PauseInterval:
    """A period during which work on a task was paused."""

    pause_start: Optional[datetime] = None
    pause_end: Optional[datetime] = None
    reason: Optional[str] = None

    def __post_init__(self):
        if self.pause_start and self.pause_end and self.pause_end < self.pause_start:
            raise ValidationError("Pause end cannot be before pause start", "paused_time")

    @property
    def is_open(self) -> bool:
        """Check if the pause has not ended yet."""
        return self.pause_start is not None and self.pause_end is None

    @property
    def duration_minutes(self) -> Optional[int]:
        """Get pause duration in whole minutes."""
        if not self.pause_start or not self.pause_end:
            return None
        return int((self.pause_end - self.pause_start).total_seconds()) // 60

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pause_start": format_datetime(self.pause_start),
            "pause_end": format_datetime(self.pause_end),
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PauseInterval":
        return cls(
            pause_start=parse_datetime(data.get("pause_start")),
            pause_end=parse_datetime(data.get("pause_end")),
            reason=data.get("reason"),
        )
