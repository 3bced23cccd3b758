"""
Activity recorder

Builds the audit-log entries for tracked mutations and appends them
best-effort: by the time an activity is recorded the mutation it describes has
already been persisted, so a failed append is logged and never surfaced.
"""
import logging
from typing import TYPE_CHECKING, Optional

from .constants import ActivityType, RelatedType
from .models import Activity, Candidate, Position, Referral
from .pydantic_models import ActivityCreate

if TYPE_CHECKING:
    from .storage.base import Storage

logger = logging.getLogger(__name__)


def format_fee(amount: float) -> str:
    """Render a fee the way it is typed: 25000, not 25000.0"""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def position_added(position: Position) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.POSITION_ADDED,
        description=f"Added a new position: {position.title} at {position.company}",
        related_id=position.id,
        related_type=RelatedType.POSITION,
    )


def position_updated(position: Position) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.POSITION_UPDATED,
        description=(
            f"Updated position status: {position.title} at {position.company} "
            f"is now {position.status}"
        ),
        related_id=position.id,
        related_type=RelatedType.POSITION,
    )


def position_deleted(position: Position) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.POSITION_DELETED,
        description=f"Deleted position: {position.title} at {position.company}",
        related_type=RelatedType.POSITION,
    )


def candidate_added(candidate: Candidate) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.CANDIDATE_ADDED,
        description=f"Added a new candidate: {candidate.full_name}",
        related_id=candidate.id,
        related_type=RelatedType.CANDIDATE,
    )


def candidate_updated(candidate: Candidate) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.CANDIDATE_UPDATED,
        description=f"Updated candidate status: {candidate.full_name} is now {candidate.status}",
        related_id=candidate.id,
        related_type=RelatedType.CANDIDATE,
    )


def candidate_deleted(candidate: Candidate) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.CANDIDATE_DELETED,
        description=f"Deleted candidate: {candidate.full_name}",
        related_type=RelatedType.CANDIDATE,
    )


def referral_created(referral: Referral, candidate: Candidate, position: Position) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.REFERRAL_CREATED,
        description=(
            f"Made a new referral: {candidate.full_name} for "
            f"{position.title} at {position.company}"
        ),
        related_id=referral.id,
        related_type=RelatedType.REFERRAL,
    )


def referral_fee_received(
    referral: Referral,
    candidate: Candidate,
    fee_earned: float,
    currency_symbol: str
) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.REFERRAL_UPDATED,
        description=(
            f"Received referral fee: {currency_symbol}{format_fee(fee_earned)} "
            f"for {candidate.full_name}"
        ),
        related_id=referral.id,
        related_type=RelatedType.REFERRAL,
    )


def referral_deleted(candidate: Candidate, position: Position) -> ActivityCreate:
    return ActivityCreate(
        type=ActivityType.REFERRAL_DELETED,
        description=(
            f"Deleted referral: {candidate.full_name} for "
            f"{position.title} at {position.company}"
        ),
        related_type=RelatedType.REFERRAL,
    )


def record_activity(storage: "Storage", activity: ActivityCreate) -> Optional[Activity]:
    """
    Append an activity, logging instead of raising on failure.

    Returns:
        The stored activity, or None if the append failed
    """
    try:
        return storage.create_activity(activity)
    except Exception:
        logger.exception("Failed to record %s activity: %s", activity.type, activity.description)
        return None
