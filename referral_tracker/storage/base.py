"""
Repository interface shared by every storage backend

Backends implement a handful of persistence primitives; the operations built
on top of them (activity recording, the delete guard, the referral lifecycle
cascade) live here so that all backends behave identically.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from .. import activity
from ..activity import record_activity
from ..constants import CandidateStatus, DEFAULT_CURRENCY_SYMBOL, RelatedType
from ..crud_helpers import as_changes, update_model_fields
from ..dashboard import compute_dashboard_stats
from ..guards import DeleteCheck, can_delete
from ..lifecycle import is_paid_hire, referral_creation_fields, settle_fee, status_changed
from ..models import Activity, Candidate, Position, Referral, ReferralWithDetails, User, utcnow
from ..pydantic_models import (
    ActivityCreate,
    CandidateCreate,
    DashboardStats,
    PositionCreate,
    ReferralCreate,
    UserCreate,
)
from .exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType")
Changes = Union[BaseModel, Dict[str, Any]]

ENTITY_MODELS = {
    RelatedType.POSITION: Position,
    RelatedType.CANDIDATE: Candidate,
    RelatedType.REFERRAL: Referral,
}


def _validated(data: Changes, request_model: Type[BaseModel]) -> BaseModel:
    # Plain dicts go through the same request model as API payloads
    if isinstance(data, BaseModel):
        return data
    return request_model.model_validate(data)


def _creation_fields(data: Changes, request_model: Type[BaseModel]) -> Dict[str, Any]:
    # None means "use the server default" on create
    return _validated(data, request_model).model_dump(exclude_none=True)


class Storage(ABC):
    """Repository for positions, candidates, referrals, activities and users"""

    def __init__(self, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL):
        self.currency_symbol = currency_symbol

    # ------------------------------------------------------------------
    # Persistence primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def _insert(self, record: ModelType) -> ModelType:
        """Persist a new record, assigning its id"""

    @abstractmethod
    def _get(self, model_class: Type[ModelType], record_id: int) -> Optional[ModelType]:
        """Load a detached copy of a record"""

    @abstractmethod
    def _list(self, model_class: Type[ModelType]) -> List[ModelType]:
        """Load every record of a kind, ordered by id"""

    @abstractmethod
    def _save(self, record: ModelType) -> ModelType:
        """Persist changes made to a previously loaded record"""

    @abstractmethod
    def _remove(self, model_class: Type[ModelType], record_id: int) -> bool:
        """Delete a record, returning whether it existed"""

    @abstractmethod
    def _list_activities(self, limit: Optional[int]) -> List[Activity]:
        """Activities newest first"""

    @abstractmethod
    def _find_user_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive user lookup"""

    @abstractmethod
    def has_referrals(self, field_name: str, entity_id: int) -> bool:
        """Whether any referral has ``field_name == entity_id``"""

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._find_user_by_email(email)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self._get(User, user_id)

    def create_user(self, data: Union[UserCreate, Dict[str, Any]]) -> User:
        fields = _creation_fields(data, UserCreate)
        if self._find_user_by_email(fields["email"]) is not None:
            raise DuplicateEmailError(fields["email"])
        return self._insert(User(**fields))

    def update_user_last_login(self, user_id: int) -> None:
        user = self._get(User, user_id)
        if user is None:
            return
        user.last_login = utcnow()
        self._save(user)

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def get_all_positions(self) -> List[Position]:
        return self._list(Position)

    def get_position(self, position_id: int) -> Optional[Position]:
        return self._get(Position, position_id)

    def create_position(self, data: Union[PositionCreate, Dict[str, Any]]) -> Position:
        position = self._insert(Position(**_creation_fields(data, PositionCreate)))
        record_activity(self, activity.position_added(position))
        return position

    def update_position(self, position_id: int, changes: Changes) -> Optional[Position]:
        position = self._get(Position, position_id)
        if position is None:
            return None

        changes = as_changes(changes)
        previous_status = position.status
        update_model_fields(position, changes)
        position = self._save(position)

        if status_changed(previous_status, changes):
            record_activity(self, activity.position_updated(position))
        return position

    def delete_position(self, position_id: int) -> bool:
        position = self._get(Position, position_id)
        if position is None:
            return False
        if not can_delete(self, RelatedType.POSITION, position_id):
            logger.info("Position %s has referrals, not deleting", position_id)
            return False

        deleted = self._remove(Position, position_id)
        if deleted:
            record_activity(self, activity.position_deleted(position))
        return deleted

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def get_all_candidates(self) -> List[Candidate]:
        return self._list(Candidate)

    def get_candidate(self, candidate_id: int) -> Optional[Candidate]:
        return self._get(Candidate, candidate_id)

    def create_candidate(self, data: Union[CandidateCreate, Dict[str, Any]]) -> Candidate:
        candidate = self._insert(Candidate(**_creation_fields(data, CandidateCreate)))
        record_activity(self, activity.candidate_added(candidate))
        return candidate

    def update_candidate(self, candidate_id: int, changes: Changes) -> Optional[Candidate]:
        candidate = self._get(Candidate, candidate_id)
        if candidate is None:
            return None

        changes = as_changes(changes)
        previous_status = candidate.status
        update_model_fields(candidate, changes)
        candidate = self._save(candidate)

        if status_changed(previous_status, changes):
            record_activity(self, activity.candidate_updated(candidate))
        return candidate

    def delete_candidate(self, candidate_id: int) -> bool:
        candidate = self._get(Candidate, candidate_id)
        if candidate is None:
            return False
        if not can_delete(self, RelatedType.CANDIDATE, candidate_id):
            logger.info("Candidate %s has referrals, not deleting", candidate_id)
            return False

        deleted = self._remove(Candidate, candidate_id)
        if deleted:
            record_activity(self, activity.candidate_deleted(candidate))
        return deleted

    # ------------------------------------------------------------------
    # Referrals
    # ------------------------------------------------------------------

    def _with_details(self, referral: Referral) -> Optional[ReferralWithDetails]:
        candidate = self._get(Candidate, referral.candidate_id)
        position = self._get(Position, referral.position_id)
        if candidate is None or position is None:
            return None
        return ReferralWithDetails(**referral.model_dump(), candidate=candidate, position=position)

    def get_all_referrals(self) -> List[ReferralWithDetails]:
        """All referrals whose candidate and position both exist"""
        details = (self._with_details(r) for r in self._list(Referral))
        return [d for d in details if d is not None]

    def get_referral(self, referral_id: int) -> Optional[ReferralWithDetails]:
        referral = self._get(Referral, referral_id)
        if referral is None:
            return None
        return self._with_details(referral)

    def create_referral(self, data: Union[ReferralCreate, Dict[str, Any]]) -> Referral:
        fields = referral_creation_fields(as_changes(_validated(data, ReferralCreate)))
        referral = self._insert(Referral(**fields))

        candidate = self._get(Candidate, referral.candidate_id)
        position = self._get(Position, referral.position_id)
        if candidate is None or position is None:
            logger.warning(
                "Referral %s points at a missing candidate or position, no activity recorded",
                referral.id
            )
        else:
            record_activity(self, activity.referral_created(referral, candidate, position))
        return referral

    def update_referral(self, referral_id: int, changes: Changes) -> Optional[Referral]:
        """
        Apply a partial update to a referral.

        A move into Hired that carries a fee records the fee and marks the
        candidate as Placed. The referral itself is persisted first; the
        candidate update and activities follow as separate writes.

        Raises:
            FeeNotAllowedError: if the update sets a fee on a referral that
                is not Hired after the changes are applied
        """
        referral = self._get(Referral, referral_id)
        if referral is None:
            return None

        changes = as_changes(changes)
        previous_status = referral.status
        update_model_fields(referral, changes)
        settle_fee(referral, changes)
        referral = self._save(referral)

        if is_paid_hire(previous_status, changes):
            self._place_candidate(referral, changes["fee_earned"])
        return referral

    def _place_candidate(self, referral: Referral, fee_earned: float) -> None:
        candidate = self._get(Candidate, referral.candidate_id)
        if candidate is None:
            logger.warning(
                "Referral %s was hired but candidate %s is missing, skipping placement",
                referral.id, referral.candidate_id
            )
            return

        record_activity(
            self,
            activity.referral_fee_received(referral, candidate, fee_earned, self.currency_symbol)
        )
        self.update_candidate(candidate.id, {"status": CandidateStatus.PLACED})

    def delete_referral(self, referral_id: int) -> bool:
        referral = self._get(Referral, referral_id)
        if referral is None:
            return False

        candidate = self._get(Candidate, referral.candidate_id)
        position = self._get(Position, referral.position_id)

        deleted = self._remove(Referral, referral_id)
        if deleted and candidate is not None and position is not None:
            record_activity(self, activity.referral_deleted(candidate, position))
        return deleted

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------

    def get_all_activities(self, limit: Optional[int] = None) -> List[Activity]:
        return self._list_activities(limit)

    def create_activity(self, data: Union[ActivityCreate, Dict[str, Any]]) -> Activity:
        return self._insert(Activity(**_creation_fields(data, ActivityCreate)))

    # ------------------------------------------------------------------
    # Delete guard and dashboard
    # ------------------------------------------------------------------

    def can_delete(self, kind: str, entity_id: int) -> bool:
        return can_delete(self, kind, entity_id)

    def check_delete(self, kind: str, entity_id: int) -> DeleteCheck:
        """Tell apart a missing entity from one still referenced by referrals"""
        model_class = ENTITY_MODELS.get(kind)
        if model_class is None:
            raise ValueError(f"Unknown entity kind: {kind}")
        if self._get(model_class, entity_id) is None:
            return DeleteCheck.NOT_FOUND
        if not can_delete(self, kind, entity_id):
            return DeleteCheck.HAS_REFERRALS
        return DeleteCheck.OK

    def import_record(self, record: ModelType) -> ModelType:
        """Persist a record as given, without recording activities (seeding)"""
        return self._insert(record)

    def get_dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        return compute_dashboard_stats(
            self._list(Position),
            self._list(Candidate),
            self._list(Referral),
            self._list(Activity),
            now=now,
        )
