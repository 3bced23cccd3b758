"""
Pydantic request/response models for API endpoints

These models are the write boundary: enum values, non-negative experience and
the "fee only on hired referrals" rule are validated here, not in storage.
Naive datetimes are taken to be UTC.
"""
from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import (
    Availability,
    CandidateStatus,
    FeeType,
    PositionStatus,
    ReferralMode,
    ReferralStatus,
    RelatedType,
)
from .models import ensure_utc


def _one_of(value: Optional[str], choices: List[str], field_name: str) -> Optional[str]:
    if value is not None and value not in choices:
        raise ValueError(f"Invalid {field_name}. Must be one of: {', '.join(choices)}")
    return value


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    return ensure_utc(value) if value is not None else None


class PartialUpdate(BaseModel):
    """Base for partial updates: omitted fields are left alone

    An explicit null is only accepted for fields listed in NULLABLE_FIELDS.
    """
    NULLABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_required_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.NULLABLE_FIELDS:
                raise ValueError(f"{name} cannot be null")
        return self


class PositionFields(BaseModel):
    @field_validator("status", check_fields=False)
    @classmethod
    def check_status(cls, value):
        return _one_of(value, PositionStatus.all(), "status")

    @field_validator("date_added", check_fields=False)
    @classmethod
    def date_added_as_utc(cls, value):
        return _as_utc(value)


class PositionCreate(PositionFields):
    """Request model for creating a position"""
    title: str
    company: str
    location: str
    description: str
    salary_min: int
    salary_max: int
    status: str = PositionStatus.OPEN
    date_added: Optional[datetime] = None


class PositionUpdate(PositionFields, PartialUpdate):
    """Request model for partially updating a position"""
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    status: Optional[str] = None


class CandidateFields(BaseModel):
    @field_validator("status", check_fields=False)
    @classmethod
    def check_status(cls, value):
        return _one_of(value, CandidateStatus.all(), "status")

    @field_validator("availability", check_fields=False)
    @classmethod
    def check_availability(cls, value):
        return _one_of(value, Availability.all(), "availability")


class CandidateCreate(CandidateFields):
    """Request model for creating a candidate"""
    full_name: str
    email: str
    phone: str
    current_role: str
    skills: str
    experience: int = Field(ge=0)
    salary_expectation: Optional[int] = None
    notes: Optional[str] = None
    availability: str
    status: str = CandidateStatus.LOOKING


class CandidateUpdate(CandidateFields, PartialUpdate):
    """Request model for partially updating a candidate"""
    NULLABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"salary_expectation", "notes"})

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    current_role: Optional[str] = None
    skills: Optional[str] = None
    experience: Optional[int] = Field(default=None, ge=0)
    salary_expectation: Optional[int] = None
    notes: Optional[str] = None
    availability: Optional[str] = None
    status: Optional[str] = None


class ReferralFields(BaseModel):
    @field_validator("status", check_fields=False)
    @classmethod
    def check_status(cls, value):
        return _one_of(value, ReferralStatus.all(), "status")

    @field_validator("mode", check_fields=False)
    @classmethod
    def check_mode(cls, value):
        return _one_of(value, ReferralMode.all(), "mode")

    @field_validator("fee_type", check_fields=False)
    @classmethod
    def check_fee_type(cls, value):
        return _one_of(value, FeeType.all(), "fee_type")

    @field_validator("referral_date", check_fields=False)
    @classmethod
    def referral_date_as_utc(cls, value):
        return _as_utc(value)


class ReferralCreate(ReferralFields):
    """Request model for creating a referral

    Status is not accepted: every referral starts as Referred.
    """
    candidate_id: int
    position_id: int
    referral_date: Optional[datetime] = None
    notes: Optional[str] = None
    mode: Optional[str] = None
    fee_type: Optional[str] = None
    fee_months: Optional[int] = Field(default=None, ge=0)


class ReferralUpdate(ReferralFields, PartialUpdate):
    """Request model for partially updating a referral

    A fee sent alongside a non-Hired status is rejected here; a fee sent
    without a status is checked against the stored status by the repository.
    """
    NULLABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"notes", "fee_earned", "fee_months"})

    candidate_id: Optional[int] = None
    position_id: Optional[int] = None
    referral_date: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    fee_earned: Optional[float] = Field(default=None, ge=0)
    mode: Optional[str] = None
    fee_type: Optional[str] = None
    fee_months: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def fee_requires_hired_status(self):
        if self.fee_earned is not None and self.status is not None and self.status != ReferralStatus.HIRED:
            raise ValueError("fee_earned can only be set on a Hired referral")
        return self


class ActivityCreate(BaseModel):
    """Request model for appending an activity"""
    type: str
    description: str
    timestamp: Optional[datetime] = None
    related_id: Optional[int] = None
    related_type: Optional[str] = None

    @field_validator("related_type")
    @classmethod
    def check_related_type(cls, value):
        return _one_of(value, RelatedType.all(), "related_type")

    @field_validator("timestamp")
    @classmethod
    def timestamp_as_utc(cls, value):
        return _as_utc(value)


class UserCreate(BaseModel):
    """Request model for creating a user account"""
    name: str
    email: str
    password: Optional[str] = None
    provider: Optional[str] = "local"
    provider_id: Optional[str] = None
    role: str = "user"


class MonthlyChange(BaseModel):
    """New activity in the trailing window, per headline metric"""
    open_positions: int = 0
    active_candidates: int = 0
    referrals_made: int = 0
    fees_earned: float = 0


class DashboardStats(BaseModel):
    """Point-in-time dashboard aggregate"""
    open_positions: int = 0
    active_candidates: int = 0
    referrals_made: int = 0
    fees_earned: float = 0
    monthly_change: MonthlyChange = Field(default_factory=MonthlyChange)
