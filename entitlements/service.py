from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from config.settings import UNLIMITED
from core.timeutils import utcnow

from . import messages
from .cache import PlanCatalogCache
from .loader import PlanCatalogLoader
from .models import (
    PlanDefinition,
    PlanTier,
    ResourceKind,
    SubscriptionSnapshot,
    SubscriptionStatus,
    SystemModule,
)

logger = logging.getLogger(__name__)


class PlanEntitlementGate:
    """
    Plan based access decisions for a company subscription snapshot.

    Denials are returned as values; nothing here raises for a business outcome.
    Order of precedence: canceled -> expired -> plan catalog.
    """

    def __init__(
        self,
        catalog: PlanCatalogCache,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.catalog = catalog
        self._clock = clock

    async def has_module_access(self, snapshot: SubscriptionSnapshot, module: SystemModule) -> bool:
        if snapshot.subscription_status is SubscriptionStatus.CANCELED:
            return False

        if snapshot.is_expired(self._clock()):
            return False

        plan = await self._resolve_plan(snapshot)
        if plan is None:
            return False
        return plan.has_module(module)

    def is_read_only_mode(self, snapshot: SubscriptionSnapshot) -> bool:
        """True when writes must be blocked for the company."""
        # BASIC is where expired companies are moved to
        if snapshot.plan is PlanTier.BASIC:
            return True

        if snapshot.subscription_status is SubscriptionStatus.OVERDUE:
            return True

        if snapshot.subscription_status is SubscriptionStatus.TRIAL and snapshot.is_expired(self._clock()):
            return True

        return False

    async def can_create_resource(
        self,
        snapshot: SubscriptionSnapshot,
        current_count: int,
        resource: ResourceKind,
    ) -> bool:
        """Reaching the limit exactly blocks the next creation (strict less-than)."""
        if self.is_read_only_mode(snapshot):
            return False

        plan = await self._resolve_plan(snapshot)
        if plan is None:
            return False

        limit = plan.limit_for(resource)
        if limit == UNLIMITED:
            return True
        return current_count < limit

    async def get_error_message(
        self,
        snapshot: SubscriptionSnapshot,
        module: Optional[SystemModule] = None,
        locale: Optional[str] = None,
    ) -> str:
        if snapshot.subscription_status is SubscriptionStatus.CANCELED:
            return messages.render("canceled", locale)

        if self.is_read_only_mode(snapshot):
            return messages.render("read_only", locale)

        if module is not None and not await self.has_module_access(snapshot, module):
            return messages.render("module_unavailable", locale, module=SystemModule(module).value)

        return messages.render("access_denied", locale)

    def invalidate_catalog(self) -> None:
        """Administrative hook: plan definitions changed, refetch on next read."""
        self.catalog.invalidate()

    async def _resolve_plan(self, snapshot: SubscriptionSnapshot) -> Optional[PlanDefinition]:
        plan = await self.catalog.get_plan(snapshot.plan)
        if plan is None:
            logger.warning(
                "Plan not found in catalog, denying access",
                extra={"plan": snapshot.plan.value},
            )
        return plan


def create_gate(
    config_path: Optional[str] = None,
    *,
    clock: Callable[[], datetime] = utcnow,
) -> PlanEntitlementGate:
    """Gate backed by the JSON plan catalog; share one instance per process."""
    loader = PlanCatalogLoader(config_path)
    return PlanEntitlementGate(PlanCatalogCache(loader.fetch_active_plans), clock=clock)
