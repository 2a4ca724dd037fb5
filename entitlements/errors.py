"""
Entitlement error hierarchy.

Provides:
- EntitlementError: base for all plan gating denials (403)
- ModuleNotAvailableError: module not part of the company's plan
- ReadOnlyModeError: writes blocked (downgraded plan, overdue, expired trial)
- ResourceLimitReachedError: patient/professional limit of the plan reached
"""

from typing import Any, Optional

from core.errors import PermissionDeniedError

from .models import ResourceKind, SystemModule


class EntitlementError(PermissionDeniedError):
    """Base exception for entitlement denials raised by guards."""

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(code=code, message=message, details=details)


class ModuleNotAvailableError(EntitlementError):
    def __init__(self, module: SystemModule, message: str):
        self.module = SystemModule(module)
        super().__init__(
            code="MODULE_NOT_AVAILABLE",
            message=message,
            details={"module": self.module.value},
        )


class ReadOnlyModeError(EntitlementError):
    def __init__(self, message: str):
        super().__init__(code="READ_ONLY_MODE", message=message)


class ResourceLimitReachedError(EntitlementError):
    """
    Raised when creating one more resource would exceed the plan limit.

    Carries the current count so the UI can show usage against the limit.
    """

    CODES = {
        ResourceKind.PATIENTS: "PATIENT_LIMIT_REACHED",
        ResourceKind.PROFESSIONALS: "PROFESSIONAL_LIMIT_REACHED",
    }

    def __init__(self, resource: ResourceKind, current_count: int, message: str):
        self.resource = ResourceKind(resource)
        self.current_count = current_count
        super().__init__(
            code=self.CODES[self.resource],
            message=message,
            details={"resource": self.resource.value, "current_count": current_count},
        )
