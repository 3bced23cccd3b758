"""
Relational storage backend (SQLModel over SQLAlchemy)
"""
from datetime import datetime
from typing import List, Optional, Type

from sqlalchemy import func
from sqlmodel import select

from ..constants import ActivityType, CandidateStatus, PositionStatus, ReferralStatus
from ..crud_helpers import commit_and_refresh
from ..dashboard import window_start
from ..database import Database
from ..models import Activity, Candidate, Position, Referral, ReferralWithDetails, User
from ..pydantic_models import DashboardStats, MonthlyChange
from .base import ModelType, Storage


class SQLStorage(Storage):
    """
    Repository backed by a relational database.

    Every primitive runs in its own short session and commits before
    returning. Returned records are detached but fully loaded.
    """

    def __init__(self, database: Database, **kwargs):
        super().__init__(**kwargs)
        self.db = database

    def _insert(self, record: ModelType) -> ModelType:
        record.id = None
        with self.db.get_session() as session:
            return commit_and_refresh(session, record)

    def _get(self, model_class: Type[ModelType], record_id: int) -> Optional[ModelType]:
        with self.db.get_session() as session:
            return session.get(model_class, record_id)

    def _list(self, model_class: Type[ModelType]) -> List[ModelType]:
        with self.db.get_session() as session:
            return list(session.exec(select(model_class).order_by(model_class.id)).all())

    def _save(self, record: ModelType) -> ModelType:
        with self.db.get_session() as session:
            merged = session.merge(record)
            return commit_and_refresh(session, merged)

    def _remove(self, model_class: Type[ModelType], record_id: int) -> bool:
        with self.db.get_session() as session:
            record = session.get(model_class, record_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True

    def _list_activities(self, limit: Optional[int]) -> List[Activity]:
        statement = select(Activity).order_by(Activity.timestamp.desc(), Activity.id.desc())
        if limit:
            statement = statement.limit(limit)
        with self.db.get_session() as session:
            return list(session.exec(statement).all())

    def _find_user_by_email(self, email: str) -> Optional[User]:
        with self.db.get_session() as session:
            return session.exec(
                select(User).where(func.lower(User.email) == email.lower())
            ).first()

    def has_referrals(self, field_name: str, entity_id: int) -> bool:
        column = getattr(Referral, field_name)
        with self.db.get_session() as session:
            return session.exec(
                select(Referral.id).where(column == entity_id).limit(1)
            ).first() is not None

    # Joined reads instead of one lookup per referral

    def _details_query(self):
        return (
            select(Referral, Candidate, Position)
            .join(Candidate, Referral.candidate_id == Candidate.id)
            .join(Position, Referral.position_id == Position.id)
        )

    def get_all_referrals(self) -> List[ReferralWithDetails]:
        with self.db.get_session() as session:
            rows = session.exec(self._details_query().order_by(Referral.id)).all()
            return [
                ReferralWithDetails(**referral.model_dump(), candidate=candidate, position=position)
                for referral, candidate, position in rows
            ]

    def get_referral(self, referral_id: int) -> Optional[ReferralWithDetails]:
        with self.db.get_session() as session:
            row = session.exec(self._details_query().where(Referral.id == referral_id)).first()
            if row is None:
                return None
            referral, candidate, position = row
            return ReferralWithDetails(**referral.model_dump(), candidate=candidate, position=position)

    def get_dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        since = window_start(now)
        hired_fees = select(func.coalesce(func.sum(Referral.fee_earned), 0)).where(
            Referral.status == ReferralStatus.HIRED
        )

        with self.db.get_session() as session:
            def count(model_class, *conditions):
                statement = select(func.count()).select_from(model_class)
                for condition in conditions:
                    statement = statement.where(condition)
                return session.exec(statement).one()

            return DashboardStats(
                open_positions=count(Position, Position.status == PositionStatus.OPEN),
                active_candidates=count(Candidate, Candidate.status == CandidateStatus.LOOKING),
                referrals_made=count(Referral),
                fees_earned=session.exec(hired_fees).one(),
                monthly_change=MonthlyChange(
                    open_positions=count(Position, Position.date_added > since),
                    active_candidates=count(
                        Activity,
                        Activity.type == ActivityType.CANDIDATE_ADDED,
                        Activity.timestamp > since
                    ),
                    referrals_made=count(Referral, Referral.referral_date > since),
                    fees_earned=session.exec(hired_fees.where(Referral.referral_date > since)).one(),
                ),
            )
