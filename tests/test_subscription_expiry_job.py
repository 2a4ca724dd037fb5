"""
Daily subscription expiry sweep.
"""

from datetime import datetime, timedelta, timezone

from entitlements.models import PlanTier, SubscriptionSnapshot, SubscriptionStatus
from workers.subscription_expiry_job import (
    CompanySubscription,
    PlanDowngrade,
    is_due_for_downgrade,
    run_subscription_expiry_cycle,
)

NOW = datetime(2025, 6, 10, 3, 0, tzinfo=timezone.utc)
YESTERDAY = NOW - timedelta(days=1)


def _company(company_id, plan, status=SubscriptionStatus.ACTIVE, expires_at=YESTERDAY):
    return CompanySubscription(
        company_id=company_id,
        snapshot=SubscriptionSnapshot(plan=plan, subscription_status=status, subscription_expires_at=expires_at),
    )


COMPANIES = [
    _company("expired-starter", PlanTier.STARTER),
    _company("expired-trial", PlanTier.FREE, SubscriptionStatus.TRIAL),
    _company("already-basic", PlanTier.BASIC, SubscriptionStatus.OVERDUE),
    _company("canceled", PlanTier.PROFESSIONAL, SubscriptionStatus.CANCELED),
    _company("running", PlanTier.ENTERPRISE, expires_at=NOW + timedelta(days=3)),
    _company("no-expiry", PlanTier.PREMIUM, expires_at=None),
]


def test_only_expired_non_basic_non_canceled_are_downgraded():
    applied = []

    stats = run_subscription_expiry_cycle(COMPANIES, applied.append, now=NOW)

    assert [d.company_id for d in applied] == ["expired-starter", "expired-trial"]
    assert stats.scanned == 6
    assert stats.downgraded == 2
    assert stats.errors == 0
    assert stats.completed_at is not None


def test_downgrade_keeps_previous_plan_and_marks_overdue():
    applied = []

    run_subscription_expiry_cycle(COMPANIES[:1], applied.append, now=NOW)

    assert applied == [
        PlanDowngrade(
            company_id="expired-starter",
            previous_plan=PlanTier.STARTER,
            expired_at=YESTERDAY,
            new_plan=PlanTier.BASIC,
            new_status=SubscriptionStatus.OVERDUE,
        )
    ]


def test_failure_is_isolated_per_company():
    applied = []

    def apply(downgrade):
        if downgrade.company_id == "expired-starter":
            raise RuntimeError("write failed")
        applied.append(downgrade)

    stats = run_subscription_expiry_cycle(COMPANIES, apply, now=NOW)

    assert stats.errors == 1
    assert stats.downgraded == 1
    assert [d.company_id for d in applied] == ["expired-trial"]
    failed = [r for r in stats.results if r.status == "error"]
    assert failed[0].company_id == "expired-starter"
    assert failed[0].error == "write failed"


def test_expiry_is_strictly_in_the_past():
    company = _company("edge", PlanTier.STARTER, expires_at=NOW)
    assert is_due_for_downgrade(company, NOW) is False
    assert is_due_for_downgrade(company, NOW + timedelta(seconds=1)) is True


def test_naive_now_treated_as_utc():
    applied = []
    run_subscription_expiry_cycle(COMPANIES[:1], applied.append, now=NOW.replace(tzinfo=None))
    assert len(applied) == 1


def test_downgraded_company_is_read_only(gate):
    applied = []
    run_subscription_expiry_cycle(COMPANIES[:1], applied.append, now=NOW)
    downgrade = applied[0]

    snapshot = SubscriptionSnapshot(
        plan=downgrade.new_plan,
        subscription_status=downgrade.new_status,
        subscription_expires_at=downgrade.expired_at,
    )

    assert gate.is_read_only_mode(snapshot) is True


def test_run_timestamps_come_from_one_clock():
    ticks = iter([datetime(2026, 1, 5, 3, 0, tzinfo=timezone.utc), datetime(2026, 1, 5, 3, 2, tzinfo=timezone.utc)])

    stats = run_subscription_expiry_cycle(COMPANIES, lambda downgrade: None, now=NOW, clock=lambda: next(ticks))

    assert stats.as_of == NOW.isoformat()
    assert stats.started_at == "2026-01-05T03:00:00+00:00"
    assert stats.completed_at == "2026-01-05T03:02:00+00:00"
    assert stats.downgraded == 2


def test_clock_drives_comparison_when_now_omitted():
    applied = []

    stats = run_subscription_expiry_cycle(COMPANIES[:1], applied.append, clock=lambda: NOW)

    assert stats.as_of == stats.started_at == stats.completed_at == NOW.isoformat()
    assert len(applied) == 1
