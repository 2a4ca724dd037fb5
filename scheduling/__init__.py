"""
Appointment availability: business hours, unavailability rules, double booking.
"""

from scheduling.availability import (
    check_schedule_conflict,
    check_unavailability,
    ensure_bookable,
    is_within_business_hours,
    validate_appointment_time,
)
from scheduling.errors import InvalidAppointmentTimeError, ScheduleConflictError
from scheduling.models import (
    AppointmentStatus,
    BookedAppointment,
    BusinessHours,
    ConflictCheck,
    DayHours,
    HoursCheck,
    UnavailabilityCheck,
    UnavailabilityRule,
)

__all__ = [
    "AppointmentStatus",
    "BookedAppointment",
    "BusinessHours",
    "ConflictCheck",
    "DayHours",
    "HoursCheck",
    "InvalidAppointmentTimeError",
    "ScheduleConflictError",
    "UnavailabilityCheck",
    "UnavailabilityRule",
    "check_schedule_conflict",
    "check_unavailability",
    "ensure_bookable",
    "is_within_business_hours",
    "validate_appointment_time",
]
