from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from config.settings import UNLIMITED
from core.timeutils import ensure_aware


class PlanTier(str, Enum):
    """Subscription tiers. BASIC is the downgraded, read-only tier."""

    FREE = "FREE"
    BASIC = "BASIC"
    STARTER = "STARTER"
    PROFESSIONAL = "PROFESSIONAL"
    PREMIUM = "PREMIUM"
    ENTERPRISE = "ENTERPRISE"

    @classmethod
    def parse(cls, value: Any) -> Optional["PlanTier"]:
        """Return the tier for a raw name, or None when the name is unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    TRIAL = "TRIAL"
    OVERDUE = "OVERDUE"
    CANCELED = "CANCELED"


class SystemModule(str, Enum):
    """Feature areas gated per plan."""

    ONLINE_BOOKING = "online_booking"
    FINANCIAL = "financial"
    SUPPORT = "support"
    CRM = "crm"
    AI_FEATURES = "ai_features"
    MULTI_USER = "multi_user"
    REPORTS = "reports"
    INVENTORY = "inventory"
    PHOTOS = "photos"


class ResourceKind(str, Enum):
    """Countable resources limited per plan."""

    PATIENTS = "patients"
    PROFESSIONALS = "professionals"


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return default


@dataclass(frozen=True)
class SubscriptionSnapshot:
    """Read-only view of a company's subscription at request time."""

    plan: PlanTier
    subscription_status: SubscriptionStatus
    subscription_expires_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "plan", PlanTier(self.plan))
        object.__setattr__(self, "subscription_status", SubscriptionStatus(self.subscription_status))
        object.__setattr__(self, "subscription_expires_at", ensure_aware(self.subscription_expires_at))

    def is_expired(self, now: datetime) -> bool:
        return self.subscription_expires_at is not None and self.subscription_expires_at < ensure_aware(now)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SubscriptionSnapshot":
        """Build from a company row using camelCase or snake_case keys."""
        expires_at = _pick(record, "subscription_expires_at", "subscriptionExpiresAt")
        if isinstance(expires_at, str):
            expires_at = datetime.fromisoformat(expires_at.replace("Z", "+00:00"))
        return cls(
            plan=PlanTier(_pick(record, "plan")),
            subscription_status=SubscriptionStatus(_pick(record, "subscription_status", "subscriptionStatus")),
            subscription_expires_at=expires_at,
        )


@dataclass(frozen=True)
class PlanDefinition:
    """Catalog entry for a tier: enabled modules and resource limits (-1 = unlimited)."""

    name: PlanTier
    modules: FrozenSet[SystemModule] = field(default_factory=frozenset)
    max_patients: int = 0
    max_professionals: int = 0
    display_name: Optional[str] = None
    is_active: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", PlanTier(self.name))
        object.__setattr__(self, "modules", frozenset(SystemModule(m) for m in self.modules))
        for limit_name in ("max_patients", "max_professionals"):
            value = int(getattr(self, limit_name))
            if value < UNLIMITED:
                raise ValueError(f"{limit_name} must be -1 (unlimited) or a non-negative integer")
            object.__setattr__(self, limit_name, value)

    def has_module(self, module: SystemModule) -> bool:
        return SystemModule(module) in self.modules

    def limit_for(self, resource: ResourceKind) -> int:
        if ResourceKind(resource) is ResourceKind.PATIENTS:
            return self.max_patients
        return self.max_professionals

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PlanDefinition":
        """
        Build from a catalog row using camelCase or snake_case keys.

        Raises:
            ValueError: unknown plan name, unknown module, or invalid limits
        """
        raw_name = _pick(record, "name", "plan")
        tier = PlanTier.parse(raw_name)
        if tier is None:
            raise ValueError(f"unknown plan name: {raw_name!r}")
        modules: Iterable[str] = _pick(record, "modules", default=()) or ()
        return cls(
            name=tier,
            modules=frozenset(SystemModule(str(m).strip()) for m in modules),
            max_patients=_pick(record, "max_patients", "maxPatients", default=0),
            max_professionals=_pick(record, "max_professionals", "maxProfessionals", default=0),
            display_name=_pick(record, "display_name", "displayName"),
            is_active=bool(_pick(record, "is_active", "isActive", default=True)),
        )
