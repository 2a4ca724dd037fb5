"""
Request-layer guards over PlanEntitlementGate.

Each guard returns None when the action is allowed and raises an
EntitlementError otherwise. Route handlers call them before touching storage:
write access first, then module access or resource limits.
"""

import logging
from typing import Optional

from . import messages
from .errors import ModuleNotAvailableError, ReadOnlyModeError, ResourceLimitReachedError
from .models import ResourceKind, SubscriptionSnapshot, SystemModule
from .service import PlanEntitlementGate

logger = logging.getLogger(__name__)


async def check_module_access(
    gate: PlanEntitlementGate,
    snapshot: SubscriptionSnapshot,
    module: SystemModule,
    locale: Optional[str] = None,
) -> None:
    """
    Raises:
        ModuleNotAvailableError: module not usable under the current subscription
    """
    if await gate.has_module_access(snapshot, module):
        return None

    message = await gate.get_error_message(snapshot, module, locale)
    logger.debug(
        "Module access denied",
        extra={"plan": snapshot.plan.value, "system_module": SystemModule(module).value},
    )
    raise ModuleNotAvailableError(module, message)


async def check_write_access(
    gate: PlanEntitlementGate,
    snapshot: SubscriptionSnapshot,
    locale: Optional[str] = None,
) -> None:
    """
    Raises:
        ReadOnlyModeError: company is in read-only mode
    """
    if not gate.is_read_only_mode(snapshot):
        return None

    message = await gate.get_error_message(snapshot, locale=locale)
    logger.debug(
        "Write access denied, read-only mode",
        extra={"plan": snapshot.plan.value, "status": snapshot.subscription_status.value},
    )
    raise ReadOnlyModeError(message)


async def _check_limit(
    gate: PlanEntitlementGate,
    snapshot: SubscriptionSnapshot,
    current_count: int,
    resource: ResourceKind,
    message_key: str,
    locale: Optional[str],
) -> None:
    if await gate.can_create_resource(snapshot, current_count, resource):
        return None

    logger.debug(
        "Plan resource limit reached",
        extra={"plan": snapshot.plan.value, "resource": resource.value, "current_count": current_count},
    )
    raise ResourceLimitReachedError(resource, current_count, messages.render(message_key, locale))


async def check_patient_limit(
    gate: PlanEntitlementGate,
    snapshot: SubscriptionSnapshot,
    current_count: int,
    locale: Optional[str] = None,
) -> None:
    """
    Raises:
        ResourceLimitReachedError: PATIENT_LIMIT_REACHED
    """
    await _check_limit(gate, snapshot, current_count, ResourceKind.PATIENTS, "patient_limit", locale)


async def check_professional_limit(
    gate: PlanEntitlementGate,
    snapshot: SubscriptionSnapshot,
    current_count: int,
    locale: Optional[str] = None,
) -> None:
    """
    Raises:
        ResourceLimitReachedError: PROFESSIONAL_LIMIT_REACHED
    """
    await _check_limit(gate, snapshot, current_count, ResourceKind.PROFESSIONALS, "professional_limit", locale)
