"""
Referential guard: positions and candidates cannot be deleted while a
referral still points at them. Referrals are leaves and are never guarded.
"""
from enum import Enum
from typing import TYPE_CHECKING

from .constants import RelatedType

if TYPE_CHECKING:
    from .storage.base import Storage


class DeleteCheck(str, Enum):
    """Outcome of checking whether an entity may be deleted"""
    OK = "ok"
    NOT_FOUND = "not_found"
    HAS_REFERRALS = "has_referrals"


# Entity kind -> referral column that references it
REFERENCING_FIELDS = {
    RelatedType.POSITION: "position_id",
    RelatedType.CANDIDATE: "candidate_id",
}


def can_delete(storage: "Storage", kind: str, entity_id: int) -> bool:
    """
    Check whether an entity can be deleted without orphaning referrals.

    Args:
        storage: Repository to inspect
        kind: "position", "candidate" or "referral"
        entity_id: Primary key of the entity

    Returns:
        False if at least one referral references the entity

    Raises:
        ValueError: for an unknown entity kind
    """
    if kind == RelatedType.REFERRAL:
        return True
    field_name = REFERENCING_FIELDS.get(kind)
    if field_name is None:
        raise ValueError(f"Unknown entity kind: {kind}")
    return not storage.has_referrals(field_name, entity_id)
