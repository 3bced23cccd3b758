"""
Database models for the referral ledger
"""
from sqlmodel import SQLModel, Field, Column
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime, Text

from .constants import PositionStatus, CandidateStatus, ReferralStatus, ReferralMode, FeeType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes (client input, SQLite read-backs) as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Position(SQLModel, table=True):
    """Open job position"""
    __tablename__ = "positions"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    company: str
    location: str
    description: str = Field(sa_column=Column(Text, nullable=False))
    salary_min: int
    salary_max: int
    status: str = PositionStatus.OPEN  # Open or Closed
    date_added: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class Candidate(SQLModel, table=True):
    """Candidate record"""
    __tablename__ = "candidates"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str
    email: str
    phone: str
    current_role: str
    skills: str  # Comma-separated tags
    experience: int  # Years
    salary_expectation: Optional[int] = None
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))
    availability: str  # immediate, 2weeks, 1month, 3months
    status: str = CandidateStatus.LOOKING  # Looking or Placed


class Referral(SQLModel, table=True):
    """Referral of one candidate to one position"""
    __tablename__ = "referrals"

    id: Optional[int] = Field(default=None, primary_key=True)
    candidate_id: int = Field(foreign_key="candidates.id", index=True, ondelete="RESTRICT")
    position_id: int = Field(foreign_key="positions.id", index=True, ondelete="RESTRICT")
    referral_date: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    status: str = ReferralStatus.REFERRED
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Only meaningful while status is Hired
    fee_earned: Optional[float] = None
    mode: str = ReferralMode.PLACEMENT
    fee_type: str = FeeType.ONE_TIME
    # Only meaningful for Outsource referrals
    fee_months: Optional[int] = None


class Activity(SQLModel, table=True):
    """Append-only audit log entry"""
    __tablename__ = "activities"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str
    description: str = Field(sa_column=Column(Text, nullable=False))
    timestamp: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    related_id: Optional[int] = None
    related_type: Optional[str] = None  # position, candidate or referral


class User(SQLModel, table=True):
    """User account, consumed by the authentication boundary"""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password: Optional[str] = None
    provider: Optional[str] = "local"
    provider_id: Optional[str] = None
    role: str = "user"
    last_login: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class ReferralWithDetails(SQLModel):
    """Referral joined with its candidate and position (read-time view)"""
    id: int
    candidate_id: int
    position_id: int
    referral_date: datetime
    status: str
    notes: Optional[str] = None
    fee_earned: Optional[float] = None
    mode: str
    fee_type: str
    fee_months: Optional[int] = None

    candidate: Candidate
    position: Position
