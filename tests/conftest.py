"""
Shared fixtures: a controllable clock, a fake plan catalog and a gate wired to both.
"""

from datetime import datetime, timezone

import pytest

from entitlements.cache import PlanCatalogCache
from entitlements.models import PlanDefinition, PlanTier, SystemModule
from entitlements.service import PlanEntitlementGate

NOW = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)


class FakeMonotonic:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class FakePlanCatalog:
    """Async plan catalog collaborator; set `error` to make fetches fail."""

    def __init__(self, plans):
        self.plans = list(plans)
        self.calls = 0
        self.error = None

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.plans)


def make_plan(name, modules=(), max_patients=0, max_professionals=0):
    return PlanDefinition(
        name=name,
        modules=frozenset(modules),
        max_patients=max_patients,
        max_professionals=max_professionals,
    )


# PREMIUM intentionally missing: exercises the "plan not in catalog" path
DEFAULT_PLANS = [
    make_plan(
        PlanTier.FREE,
        {SystemModule.ONLINE_BOOKING, SystemModule.FINANCIAL, SystemModule.INVENTORY, SystemModule.REPORTS},
        max_patients=50,
        max_professionals=1,
    ),
    make_plan(PlanTier.BASIC),
    make_plan(
        PlanTier.STARTER,
        {
            SystemModule.ONLINE_BOOKING,
            SystemModule.FINANCIAL,
            SystemModule.SUPPORT,
            SystemModule.INVENTORY,
            SystemModule.REPORTS,
            SystemModule.PHOTOS,
        },
        max_patients=200,
        max_professionals=2,
    ),
    make_plan(PlanTier.ENTERPRISE, set(SystemModule), max_patients=-1, max_professionals=-1),
]


@pytest.fixture
def monotonic():
    return FakeMonotonic()


@pytest.fixture
def plan_catalog():
    return FakePlanCatalog(DEFAULT_PLANS)


@pytest.fixture
def catalog_cache(plan_catalog, monotonic):
    return PlanCatalogCache(plan_catalog, ttl_seconds=300, clock=monotonic)


@pytest.fixture
def gate(catalog_cache):
    return PlanEntitlementGate(catalog_cache, clock=lambda: NOW)
