"""
Plan entitlement gating: module access, read-only mode, resource limits.
"""

from .cache import PlanCatalogCache
from .errors import (
    EntitlementError,
    ModuleNotAvailableError,
    ReadOnlyModeError,
    ResourceLimitReachedError,
)
from .guards import (
    check_module_access,
    check_patient_limit,
    check_professional_limit,
    check_write_access,
)
from .loader import PlanCatalogLoader
from .models import (
    PlanDefinition,
    PlanTier,
    ResourceKind,
    SubscriptionSnapshot,
    SubscriptionStatus,
    SystemModule,
)
from .service import PlanEntitlementGate, create_gate

__all__ = [
    "EntitlementError",
    "ModuleNotAvailableError",
    "PlanCatalogCache",
    "PlanCatalogLoader",
    "PlanDefinition",
    "PlanEntitlementGate",
    "PlanTier",
    "ReadOnlyModeError",
    "ResourceKind",
    "ResourceLimitReachedError",
    "SubscriptionSnapshot",
    "SubscriptionStatus",
    "SystemModule",
    "check_module_access",
    "check_patient_limit",
    "check_professional_limit",
    "check_write_access",
    "create_gate",
]
