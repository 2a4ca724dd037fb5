"""
Availability resolution for appointment slots.

Checks, in order:
1. Business hours of the company (coarse, per weekday)
2. Unavailability rules (dated blocks, first matching rule wins)
3. Overlap with already booked appointments of the same professional

All functions are pure: callers load fresh data and re-invoke on every attempt.
Dates and times are read from the wall clock of the datetime passed in.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from core.timeutils import (
    closing_minutes,
    ensure_aware,
    iso_date,
    minutes_of_day,
    time_to_minutes,
    weekday_key,
)
from scheduling import messages
from scheduling.errors import InvalidAppointmentTimeError, ScheduleConflictError
from scheduling.models import (
    BookedAppointment,
    BusinessHours,
    ConflictCheck,
    HoursCheck,
    UnavailabilityCheck,
    UnavailabilityRule,
)

logger = logging.getLogger(__name__)


def is_within_business_hours(
    date_time: datetime,
    business_hours: Optional[BusinessHours],
    locale: Optional[str] = None,
) -> HoursCheck:
    """
    Check a start time against the weekly business hours.

    A company without configured hours is treated as always open.
    The closing time is exclusive: starting exactly at closing is rejected.
    """
    if business_hours is None:
        return HoursCheck(valid=True)

    day_key = weekday_key(date_time)
    day = business_hours.for_day(day_key)

    if day is None or not day.is_open:
        return HoursCheck(
            valid=False,
            message=messages.render("closed_day", locale, day=messages.weekday_name(day_key, locale)),
        )

    appointment_minutes = minutes_of_day(date_time)

    if appointment_minutes < time_to_minutes(day.start):
        return HoursCheck(valid=False, message=messages.render("before_opening", locale, start=day.start))

    if appointment_minutes >= closing_minutes(day.end):
        return HoursCheck(valid=False, message=messages.render("after_closing", locale, end=day.end))

    return HoursCheck(valid=True)


def check_unavailability(
    date_time: datetime,
    professional_id: str,
    rules: Iterable[UnavailabilityRule],
    locale: Optional[str] = None,
) -> UnavailabilityCheck:
    """
    Find the first rule blocking the professional at date_time.

    Rules are evaluated in input order; overlapping rules are not ranked.
    A rule window is [start_time, end_time).
    """
    date_str = iso_date(date_time)
    time_minutes = minutes_of_day(date_time)

    for rule in rules:
        if date_str not in rule.dates:
            continue
        if not rule.applies_to(professional_id):
            continue

        if time_to_minutes(rule.start_time) <= time_minutes < time_to_minutes(rule.end_time):
            return UnavailabilityCheck(
                blocked=True,
                reason=rule.description or messages.render("professional_unavailable", locale),
                rule_id=rule.id,
            )

    return UnavailabilityCheck(blocked=False)


def validate_appointment_time(
    date_time: datetime,
    professional_id: str,
    business_hours: Optional[BusinessHours],
    rules: Iterable[UnavailabilityRule],
    locale: Optional[str] = None,
) -> HoursCheck:
    """Business hours first (short-circuit), then professional unavailability."""
    hours_check = is_within_business_hours(date_time, business_hours, locale)
    if not hours_check.valid:
        return hours_check

    unavailability = check_unavailability(date_time, professional_id, rules, locale)
    if unavailability.blocked:
        return HoursCheck(valid=False, message=unavailability.reason)

    return HoursCheck(valid=True)


def check_schedule_conflict(
    start: datetime,
    duration_minutes: int,
    professional_id: str,
    booked: Iterable[BookedAppointment],
    exclude_appointment_id: Optional[str] = None,
) -> ConflictCheck:
    """
    Detect overlap with active appointments of the same professional.

    Two intervals overlap when each starts before the other ends, so
    back-to-back appointments do not conflict. Naive datetimes on either side
    are read as UTC.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    start = ensure_aware(start)
    end = start + timedelta(minutes=duration_minutes)

    for appointment in booked:
        if appointment.professional_id != professional_id:
            continue
        if not appointment.holds_slot():
            continue
        if exclude_appointment_id is not None and appointment.id == exclude_appointment_id:
            continue

        if start < ensure_aware(appointment.end) and end > ensure_aware(appointment.start):
            return ConflictCheck(has_conflict=True, conflicting=appointment)

    return ConflictCheck(has_conflict=False)


def ensure_bookable(
    start: datetime,
    duration_minutes: int,
    professional_id: str,
    business_hours: Optional[BusinessHours],
    rules: Iterable[UnavailabilityRule],
    booked: Iterable[BookedAppointment],
    exclude_appointment_id: Optional[str] = None,
    locale: Optional[str] = None,
) -> None:
    """
    Raise if the slot cannot be booked; return None otherwise.

    Raises:
        InvalidAppointmentTimeError: outside business hours or blocked by a rule
        ScheduleConflictError: overlaps an existing active appointment
    """
    time_check = validate_appointment_time(start, professional_id, business_hours, rules, locale)
    if not time_check.valid:
        logger.debug(
            "Appointment time rejected",
            extra={"professional_id": professional_id, "start": start.isoformat(), "reason": time_check.message},
        )
        raise InvalidAppointmentTimeError(time_check.message or "")

    conflict = check_schedule_conflict(
        start,
        duration_minutes,
        professional_id,
        booked,
        exclude_appointment_id=exclude_appointment_id,
    )
    if conflict.has_conflict:
        logger.debug(
            "Appointment overlaps existing booking",
            extra={"professional_id": professional_id, "conflicting_id": conflict.conflicting.id},
        )
        raise ScheduleConflictError(messages.render("schedule_conflict", locale), conflict.conflicting)
