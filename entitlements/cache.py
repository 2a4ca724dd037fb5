"""
Process-wide plan catalog cache.

Serves stale data when the catalog cannot be fetched: a stale entitlement
answer is preferred over failing the request.
"""

from __future__ import annotations

import logging
import time
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Union

from config import settings

from .models import PlanDefinition, PlanTier

logger = logging.getLogger(__name__)

PlanRecord = Union[PlanDefinition, Mapping[str, Any]]
FetchPlans = Callable[[], Awaitable[Iterable[PlanRecord]]]


class PlanCatalogCache:
    """Plan name -> PlanDefinition mapping refreshed from a catalog fetcher after the TTL."""

    def __init__(
        self,
        fetch_plans: FetchPlans,
        *,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch_plans = fetch_plans
        self._ttl_seconds = settings.PLAN_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._plans: Dict[PlanTier, PlanDefinition] = {}
        self._loaded_at: Optional[float] = None

    def is_fresh(self) -> bool:
        if not self._plans or self._loaded_at is None:
            return False
        return self._clock() - self._loaded_at < self._ttl_seconds

    async def get_plans(self) -> Mapping[PlanTier, PlanDefinition]:
        """Return the catalog, refetching when empty or older than the TTL."""
        if self.is_fresh():
            return MappingProxyType(self._plans)

        try:
            records = list(await self._fetch_plans())
            plans = _index_plans(records)
        except Exception:
            logger.warning(
                "Plan catalog fetch failed, serving stale cache",
                extra={"stale_entries": len(self._plans)},
                exc_info=True,
            )
            return MappingProxyType(self._plans)

        if records and not plans and self._plans:
            logger.warning(
                "Plan catalog fetch returned no valid plans, serving stale cache",
                extra={"fetched_records": len(records), "stale_entries": len(self._plans)},
            )
            return MappingProxyType(self._plans)

        # Whole-map replacement: concurrent refreshes may race, last writer wins
        self._plans = plans
        self._loaded_at = self._clock()
        return MappingProxyType(plans)

    async def get_plan(self, plan: PlanTier) -> Optional[PlanDefinition]:
        plans = await self.get_plans()
        return plans.get(plan)

    def invalidate(self) -> None:
        """Force the next read to refetch; cached entries stay as a fallback."""
        self._loaded_at = None


def _index_plans(records: Iterable[PlanRecord]) -> Dict[PlanTier, PlanDefinition]:
    plans: Dict[PlanTier, PlanDefinition] = {}
    for record in records:
        if isinstance(record, PlanDefinition):
            plans[record.name] = record
            continue
        try:
            plan = PlanDefinition.from_record(record)
        except ValueError as exc:
            logger.warning("Skipping invalid plan catalog record", extra={"error": str(exc)})
            continue
        plans[plan.name] = plan
    return plans
