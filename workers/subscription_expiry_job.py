from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from core.timeutils import ensure_aware, utcnow
from entitlements.models import PlanTier, SubscriptionSnapshot, SubscriptionStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompanySubscription:
    company_id: str
    snapshot: SubscriptionSnapshot


@dataclass(frozen=True)
class PlanDowngrade:
    """Change to persist for a company whose subscription expired."""

    company_id: str
    previous_plan: PlanTier
    expired_at: datetime
    new_plan: PlanTier = PlanTier.BASIC
    new_status: SubscriptionStatus = SubscriptionStatus.OVERDUE


@dataclass
class DowngradeResult:
    company_id: str
    previous_plan: PlanTier
    status: str  # "updated" | "error"
    error: Optional[str] = None


@dataclass
class ExpiryStats:
    started_at: str
    as_of: Optional[str] = None
    completed_at: Optional[str] = None
    scanned: int = 0
    downgraded: int = 0
    errors: int = 0
    results: List[DowngradeResult] = field(default_factory=list)


def is_due_for_downgrade(company: CompanySubscription, now: datetime) -> bool:
    """Expired, not yet on BASIC and not canceled manually."""
    snapshot = company.snapshot
    if snapshot.plan is PlanTier.BASIC:
        return False
    if snapshot.subscription_status is SubscriptionStatus.CANCELED:
        return False
    return snapshot.is_expired(now)


def run_subscription_expiry_cycle(
    companies: Iterable[CompanySubscription],
    apply_downgrade: Callable[[PlanDowngrade], None],
    now: Optional[datetime] = None,
    clock: Callable[[], datetime] = utcnow,
) -> ExpiryStats:
    """Daily sweep moving expired companies to BASIC / OVERDUE (read-only).

    `now` is the instant expiries are compared against (defaults to the
    clock); `clock` stamps started_at / completed_at.

    Responsibilities:
    - keep the previous plan on the downgrade so it can be restored on renewal
    - isolate failures per company; one bad row does not stop the sweep
    """
    started_at = ensure_aware(clock())
    compare_at = ensure_aware(now) or started_at
    stats = ExpiryStats(started_at=started_at.isoformat(), as_of=compare_at.isoformat())

    for company in companies:
        stats.scanned += 1
        if not is_due_for_downgrade(company, compare_at):
            continue

        downgrade = PlanDowngrade(
            company_id=company.company_id,
            previous_plan=company.snapshot.plan,
            expired_at=company.snapshot.subscription_expires_at,
        )
        try:
            apply_downgrade(downgrade)
        except Exception as exc:
            logger.exception(
                "Failed to downgrade expired company",
                extra={"company_id": company.company_id},
            )
            stats.errors += 1
            stats.results.append(
                DowngradeResult(
                    company_id=company.company_id,
                    previous_plan=downgrade.previous_plan,
                    status="error",
                    error=str(exc),
                )
            )
            continue

        stats.downgraded += 1
        stats.results.append(
            DowngradeResult(
                company_id=company.company_id,
                previous_plan=downgrade.previous_plan,
                status="updated",
            )
        )

    stats.completed_at = ensure_aware(clock()).isoformat()
    logger.info(
        "Subscription expiry sweep finished",
        extra={"scanned": stats.scanned, "downgraded": stats.downgraded, "errors": stats.errors},
    )
    return stats
