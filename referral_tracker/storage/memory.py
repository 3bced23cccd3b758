"""
In-memory storage backend

Each entity kind lives in its own dict keyed by an auto-incrementing id.
Records are copied on the way in and on the way out, so callers never hold a
reference to stored state.
"""
from collections import defaultdict
from typing import Dict, List, Optional, Type

from ..crud_helpers import clone_record
from ..models import Activity, Referral, User
from .base import ModelType, Storage


class MemStorage(Storage):
    """Dict-backed repository, used in tests and for throwaway demos"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._tables: Dict[type, Dict[int, object]] = defaultdict(dict)
        self._next_ids: Dict[type, int] = defaultdict(lambda: 1)

    def _insert(self, record: ModelType) -> ModelType:
        model_class = type(record)
        record = clone_record(record)
        record.id = self._next_ids[model_class]
        self._next_ids[model_class] += 1
        self._tables[model_class][record.id] = record
        return clone_record(record)

    def _get(self, model_class: Type[ModelType], record_id: int) -> Optional[ModelType]:
        record = self._tables[model_class].get(record_id)
        return clone_record(record) if record is not None else None

    def _list(self, model_class: Type[ModelType]) -> List[ModelType]:
        table = self._tables[model_class]
        return [clone_record(table[record_id]) for record_id in sorted(table)]

    def _save(self, record: ModelType) -> ModelType:
        table = self._tables[type(record)]
        if record.id not in table:
            raise KeyError(f"{type(record).__name__} {record.id} does not exist")
        table[record.id] = clone_record(record)
        return clone_record(record)

    def _remove(self, model_class: Type[ModelType], record_id: int) -> bool:
        return self._tables[model_class].pop(record_id, None) is not None

    def _list_activities(self, limit: Optional[int]) -> List[Activity]:
        activities = sorted(
            self._tables[Activity].values(),
            key=lambda a: (a.timestamp, a.id),
            reverse=True
        )
        if limit:
            activities = activities[:limit]
        return [clone_record(a) for a in activities]

    def _find_user_by_email(self, email: str) -> Optional[User]:
        for user in self._tables[User].values():
            if user.email.lower() == email.lower():
                return clone_record(user)
        return None

    def has_referrals(self, field_name: str, entity_id: int) -> bool:
        return any(
            getattr(referral, field_name) == entity_id
            for referral in self._tables[Referral].values()
        )
