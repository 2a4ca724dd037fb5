"""
Scheduling records and decision results.

Records arrive from storage as JSON (company settings, rule rows), so they are
pydantic models accepting both camelCase and snake_case keys. Decisions are
plain frozen dataclasses.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.timeutils import closing_minutes, is_iso_date, is_time_of_day, time_to_minutes


def _check_time_of_day(value: str) -> str:
    value = value.strip()
    if not is_time_of_day(value):
        raise ValueError(f"invalid time of day: {value!r} (expected HH:MM)")
    return value


class DayHours(BaseModel):
    """Opening window for one weekday. start/end are ignored when closed."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_open: bool = Field(False, alias="isOpen")
    start: str = "00:00"
    end: str = "00:00"

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time_of_day(value)

    @model_validator(mode="after")
    def validate_window(self):
        if self.is_open and time_to_minutes(self.start) >= closing_minutes(self.end):
            raise ValueError(f"opening time {self.start} must be before closing time {self.end}")
        return self


class BusinessHours(BaseModel):
    """Weekly business hours of a company; a missing day counts as closed."""

    model_config = ConfigDict(frozen=True)

    monday: Optional[DayHours] = None
    tuesday: Optional[DayHours] = None
    wednesday: Optional[DayHours] = None
    thursday: Optional[DayHours] = None
    friday: Optional[DayHours] = None
    saturday: Optional[DayHours] = None
    sunday: Optional[DayHours] = None

    def for_day(self, day_key: str) -> Optional[DayHours]:
        return getattr(self, day_key)


class UnavailabilityRule(BaseModel):
    """A block on exact calendar dates, for listed professionals or everyone."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    description: Optional[str] = None
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    dates: List[str] = Field(default_factory=list)
    professional_ids: List[str] = Field(default_factory=list, alias="professionalIds")

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time_of_day(value)

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, value: List[str]) -> List[str]:
        for date_str in value:
            if not is_iso_date(date_str):
                raise ValueError(f"invalid date: {date_str!r}. Use format YYYY-MM-DD")
        return value

    @model_validator(mode="after")
    def validate_window(self):
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self

    def applies_to(self, professional_id: str) -> bool:
        """Empty professional_ids means the rule covers every professional."""
        return not self.professional_ids or professional_id in self.professional_ids


class AppointmentStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


# Statuses that still hold a slot on the professional's agenda
ACTIVE_APPOINTMENT_STATUSES = frozenset({AppointmentStatus.SCHEDULED, AppointmentStatus.CONFIRMED})


class BookedAppointment(BaseModel):
    """An existing appointment considered by the double-booking check."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    professional_id: str = Field(..., alias="professionalId")
    start: datetime = Field(..., alias="date")
    duration_minutes: int = Field(..., gt=0, alias="durationMinutes")
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    def holds_slot(self) -> bool:
        return self.status in ACTIVE_APPOINTMENT_STATUSES


@dataclass(frozen=True)
class HoursCheck:
    """Outcome of a business hours or full appointment time validation."""

    valid: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class UnavailabilityCheck:
    blocked: bool
    reason: Optional[str] = None
    rule_id: Optional[str] = None


@dataclass(frozen=True)
class ConflictCheck:
    has_conflict: bool
    conflicting: Optional[BookedAppointment] = None
