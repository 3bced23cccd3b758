"""
Dashboard aggregation

Headline figures describe the store as it is now; the monthly figures count
what was added in the trailing window (new activity, not a delta between two
snapshots). Candidates carry no creation date, so new candidates are counted
from candidate_added activities.
"""
from datetime import datetime, timedelta
from typing import Iterable, Optional

from .constants import (
    ActivityType,
    CandidateStatus,
    MONTHLY_WINDOW_DAYS,
    PositionStatus,
    ReferralStatus,
)
from .models import Activity, Candidate, Position, Referral, ensure_utc, utcnow
from .pydantic_models import DashboardStats, MonthlyChange


def window_start(now: Optional[datetime] = None) -> datetime:
    """Start of the trailing monthly window, exclusive"""
    return ensure_utc(now or utcnow()) - timedelta(days=MONTHLY_WINDOW_DAYS)


def _in_window(value: Optional[datetime], since: datetime) -> bool:
    return value is not None and ensure_utc(value) > since


def _hired_fee_total(referrals: Iterable[Referral]) -> float:
    return sum(
        r.fee_earned or 0
        for r in referrals
        if r.status == ReferralStatus.HIRED
    )


def compute_dashboard_stats(
    positions: Iterable[Position],
    candidates: Iterable[Candidate],
    referrals: Iterable[Referral],
    activities: Iterable[Activity],
    now: Optional[datetime] = None
) -> DashboardStats:
    """
    Compute dashboard statistics from full entity listings.

    Args:
        positions: All positions
        candidates: All candidates
        referrals: All referrals
        activities: All activities
        now: Reference time (defaults to the current UTC time)

    Returns:
        DashboardStats with headline and monthly figures
    """
    positions = list(positions)
    referrals = list(referrals)
    since = window_start(now)

    recent_referrals = [r for r in referrals if _in_window(r.referral_date, since)]

    return DashboardStats(
        open_positions=sum(1 for p in positions if p.status == PositionStatus.OPEN),
        active_candidates=sum(1 for c in candidates if c.status == CandidateStatus.LOOKING),
        referrals_made=len(referrals),
        fees_earned=_hired_fee_total(referrals),
        monthly_change=MonthlyChange(
            open_positions=sum(1 for p in positions if _in_window(p.date_added, since)),
            active_candidates=sum(
                1 for a in activities
                if a.type == ActivityType.CANDIDATE_ADDED and _in_window(a.timestamp, since)
            ),
            referrals_made=len(recent_referrals),
            fees_earned=_hired_fee_total(recent_referrals),
        ),
    )
