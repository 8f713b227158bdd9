"""Aggregate result models returned by the productivity engine."""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CONFIG = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class TimeWindow(BaseModel):
    """A resolved [start, end] window for a range token."""

    range: str = Field(..., description="Range token (24h, 1w, 1m)")
    start_date: datetime = Field(..., description="Inclusive window start")
    end_date: datetime = Field(..., description="Inclusive window end")

    model_config = _CONFIG


class TimelineDay(BaseModel):
    """Documents and minutes logged on one calendar day."""

    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    documents: int = Field(default=0, ge=0)
    time: int = Field(default=0, ge=0)

    model_config = _CONFIG


class Summary(BaseModel):
    """Totals and derived averages for a window."""

    total_documents: int = Field(default=0, ge=0)
    total_time: int = Field(default=0, ge=0, description="Minutes")
    total_time_hours: float = Field(default=0)
    avg_documents_per_day: float = Field(default=0)
    avg_time_per_day: float = Field(default=0)
    avg_time_per_document: float = Field(default=0)
    days_active: int = Field(default=0, ge=0)

    model_config = _CONFIG


class Breakdown(BaseModel):
    """Document counts per category, in first-seen order."""

    by_platform: dict[str, int] = Field(default_factory=dict)
    by_doc_type: dict[str, int] = Field(default_factory=dict)
    by_queue: dict[str, int] = Field(default_factory=dict)

    model_config = _CONFIG


class AggregationResult(BaseModel):
    """Full productivity statistics for one range."""

    range: str
    start_date: datetime
    end_date: datetime
    summary: Summary
    breakdown: Breakdown
    timeline: list[TimelineDay] = Field(default_factory=list)

    model_config = _CONFIG


class RankedItem(BaseModel):
    """A category label and its document count."""

    name: str
    count: int

    model_config = _CONFIG


class TopMetrics(BaseModel):
    """Top categories for a range."""

    top_platforms: list[RankedItem] = Field(default_factory=list)
    top_doc_types: list[RankedItem] = Field(default_factory=list)
    top_queues: list[RankedItem] = Field(default_factory=list)

    model_config = _CONFIG


class TodaySnapshot(BaseModel):
    """Dashboard summary cards for a single day."""

    date: str
    documents: int = 0
    minutes: int = 0
    hours: float = 0
    efficiency: float = 0
    by_platform: dict[str, int] = Field(default_factory=dict)
    by_doc_type: dict[str, int] = Field(default_factory=dict)

    model_config = _CONFIG
