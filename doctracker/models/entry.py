"""EntryRecord data model."""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class DayType(str, Enum):
    """Kind of working day an entry represents."""

    HALF_DAY = "Half Day"
    FULL_DAY = "Full Day"
    PTO = "PTO"


def normalize_quantity(value: Any) -> Optional[float]:
    """Coerce a raw quantity into a non-negative finite number.

    Numeric strings are parsed. Anything else that is not a usable number
    (booleans, NaN, negative values, arbitrary objects) becomes None, which
    aggregation treats as zero.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value < 0:
        return None
    return value


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ProductiveLine(BaseModel):
    """A single productive row: documents processed on a platform/queue."""

    platform: Optional[str] = Field(default=None, description="Processing platform")
    doc_type: Optional[str] = Field(default=None, description="Document type")
    queue: Optional[str] = Field(default=None, description="Work queue")
    count: Optional[int] = Field(default=None, ge=0, description="Documents processed")
    time_in_mins: Optional[int] = Field(default=None, ge=0, description="Minutes spent")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @field_validator("count", "time_in_mins", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> Optional[int]:
        number = normalize_quantity(value)
        if number is None:
            return None
        return int(number)


class NonProductiveLine(BaseModel):
    """Time spent on something other than document processing."""

    activity_type: Optional[str] = Field(default=None, description="Activity (meeting, training, ...)")
    duration: Optional[float] = Field(default=None, ge=0, description="Duration in minutes")
    comments: Optional[str] = Field(default=None, description="Free-text comments")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> Optional[float]:
        number = normalize_quantity(value)
        if number is None:
            return None
        return float(number)


class EntryRecord(BaseModel):
    """One user's logged productivity for one calendar day."""

    id: Optional[int] = Field(default=None, description="Database ID")
    owner_id: str = Field(..., min_length=1, description="Owning user ID")
    display_name: str = Field(..., min_length=1, description="Name of the acting user at creation")
    date: datetime = Field(..., description="Day the entry represents")
    day_type: DayType = Field(..., description="Half Day, Full Day or PTO")
    productive_lines: list[ProductiveLine] = Field(default_factory=list)
    non_productive_lines: list[NonProductiveLine] = Field(default_factory=list)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp",
    )

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @field_validator("date", "created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def day_key(self) -> str:
        """Calendar day of the stored instant, as YYYY-MM-DD."""
        return self.date.date().isoformat()
