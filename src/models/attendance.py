"""
Data models for attendance summaries and timesheets.

AttendanceSummary is the untrusted per-employee record returned by the HRMOS
API; Timesheet is the hours-based record served to the dashboard.
"""

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttendanceSummary(BaseModel):
    """
    One employee's attendance summary as returned by the API (minutes).

    Records are partial and untrusted: unusable values become None (or "" for
    the name) instead of failing validation.
    """

    model_config = ConfigDict(extra="ignore")

    employee_id: int | None = None
    employee_name: str = ""
    total_work_minutes: float | None = None
    overtime_minutes: float | None = None

    @field_validator("employee_id", mode="before")
    @classmethod
    def _lenient_id(cls, value):
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("employee_name", mode="before")
    @classmethod
    def _lenient_name(cls, value):
        return "" if value is None else str(value)

    @field_validator("total_work_minutes", "overtime_minutes", mode="before")
    @classmethod
    def _lenient_minutes(cls, value):
        if isinstance(value, bool):
            return None
        try:
            minutes = float(value)
        except (TypeError, ValueError):
            return None
        return minutes if math.isfinite(minutes) else None


class Timesheet(BaseModel):
    """Canonical per-employee hours record."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str
    total_hours: float = Field(alias="totalHours")
    overtime: float


# =============================================================================
# PAGE ENVELOPES
# =============================================================================


@dataclass(frozen=True)
class BareEnvelope:
    """Page body that is a plain JSON array."""

    items: list = field(default_factory=list)


@dataclass(frozen=True)
class WrappedEnvelope:
    """Page body shaped like {"data": [...], "total": n}."""

    items: list = field(default_factory=list)
    total: int | None = None


PageEnvelope = BareEnvelope | WrappedEnvelope


def decode_envelope(body) -> PageEnvelope:
    """
    Decode one page body into an envelope.

    Lists are bare pages, dicts with a list under "data" are wrapped pages.
    Anything else is treated as an empty page.
    """
    if isinstance(body, list):
        return BareEnvelope(items=body)

    if isinstance(body, dict) and isinstance(body.get("data"), list):
        total = body.get("total")
        # A zero or non-integer total carries no information
        if isinstance(total, bool) or not isinstance(total, int) or total <= 0:
            total = None
        return WrappedEnvelope(items=body["data"], total=total)

    return BareEnvelope()


# =============================================================================
# NORMALIZATION
# =============================================================================


def hours_from_minutes(minutes: float | None) -> float:
    """Convert minutes to hours rounded half away from zero to one decimal."""
    if not minutes or not math.isfinite(minutes):
        return 0.0
    hours = Decimal(str(minutes)) / Decimal(60)
    return float(hours.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def to_timesheet(summary: AttendanceSummary) -> Timesheet:
    """Convert an attendance summary into a timesheet. Never fails."""
    return Timesheet(
        id=summary.employee_id,
        name=summary.employee_name,
        total_hours=hours_from_minutes(summary.total_work_minutes),
        overtime=hours_from_minutes(summary.overtime_minutes),
    )
