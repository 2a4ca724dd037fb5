"""
Errors raised at the booking boundary when a slot cannot be used.
"""

from typing import Optional

from core.errors import ConflictError, ValidationError
from scheduling.models import BookedAppointment


class InvalidAppointmentTimeError(ValidationError):
    """Slot is outside business hours or covered by an unavailability rule."""

    def __init__(self, message: str):
        super().__init__(code="INVALID_TIME", message=message)


class ScheduleConflictError(ConflictError):
    """Slot overlaps an active appointment of the same professional."""

    def __init__(self, message: str, conflicting: Optional[BookedAppointment] = None):
        self.conflicting = conflicting
        details = {}
        if conflicting is not None:
            details["conflict"] = {
                "id": conflicting.id,
                "date": conflicting.start.isoformat(),
                "duration_minutes": conflicting.duration_minutes,
            }
        super().__init__(code="SCHEDULE_CONFLICT", message=message, details=details)
