"""
Sample data for an empty store
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from .constants import (
    ActivityType,
    Availability,
    CandidateStatus,
    FeeType,
    PositionStatus,
    ReferralMode,
    ReferralStatus,
    RelatedType,
)
from .models import Activity, Candidate, Position, Referral, utcnow
from .storage.base import Storage

logger = logging.getLogger(__name__)


def _date(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def seed_storage(storage: Storage, now: Optional[datetime] = None) -> bool:
    """
    Load sample positions, candidates, referrals and activities.

    Does nothing if the store already holds positions. Seeded records carry
    their own historical activities, so no activities are generated for them.

    Returns:
        True if sample data was loaded
    """
    if storage.get_all_positions():
        logger.info("Storage already has data, skipping seed")
        return False

    logger.info("Seeding storage with sample data")
    now = now or utcnow()

    # Monthly salaries in ILS
    engineer = storage.import_record(Position(
        title="Senior Software Engineer",
        company="TechCorp",
        location="Tel Aviv",
        description="We are looking for an experienced software engineer to join our team...",
        salary_min=25000,
        salary_max=35000,
        status=PositionStatus.OPEN,
        date_added=_date(2023, 8, 15),
    ))
    product_manager = storage.import_record(Position(
        title="Product Manager",
        company="InnoTech",
        location="Herzliya",
        description="Seeking a product manager to lead our product development efforts...",
        salary_min=22000,
        salary_max=32000,
        status=PositionStatus.OPEN,
        date_added=_date(2023, 8, 10),
    ))
    designer = storage.import_record(Position(
        title="UX Designer",
        company="GlobalSoft",
        location="Jerusalem",
        description="Looking for a talented UX designer to improve our user experience...",
        salary_min=18000,
        salary_max=24000,
        status=PositionStatus.CLOSED,
        date_added=_date(2023, 7, 22),
    ))

    sarah = storage.import_record(Candidate(
        full_name="Sarah Johnson",
        email="sarah.johnson@example.com",
        phone="050-1234567",
        current_role="Senior Frontend Developer",
        skills="JavaScript, React, TypeScript, CSS",
        experience=8,
        salary_expectation=25000,
        notes="Great communication skills, looking for remote opportunities",
        availability=Availability.TWO_WEEKS,
        status=CandidateStatus.LOOKING,
    ))
    michael = storage.import_record(Candidate(
        full_name="Michael Chen",
        email="michael.chen@example.com",
        phone="052-9876543",
        current_role="Product Manager",
        skills="Product Strategy, Roadmapping, User Research, Agile",
        experience=6,
        salary_expectation=30000,
        notes="Strong background in B2B SaaS products",
        availability=Availability.ONE_MONTH,
        status=CandidateStatus.LOOKING,
    ))
    emma = storage.import_record(Candidate(
        full_name="Emma Davis",
        email="emma.davis@example.com",
        phone="054-4567890",
        current_role="UX Designer",
        skills="UI Design, Figma, User Testing, Prototyping",
        experience=5,
        salary_expectation=23000,
        notes="Portfolio includes work for financial and healthcare sectors",
        availability=Availability.IMMEDIATE,
        status=CandidateStatus.PLACED,
    ))

    hired = storage.import_record(Referral(
        candidate_id=emma.id,
        position_id=designer.id,
        referral_date=_date(2023, 7, 15),
        status=ReferralStatus.HIRED,
        notes="Great fit for the team, started August 1st",
        fee_earned=25000,
        mode=ReferralMode.PLACEMENT,
        fee_type=FeeType.ONE_TIME,
    ))
    interviewing = storage.import_record(Referral(
        candidate_id=michael.id,
        position_id=product_manager.id,
        referral_date=_date(2023, 8, 5),
        status=ReferralStatus.INTERVIEWING,
        notes="Second interview scheduled next week",
        mode=ReferralMode.PLACEMENT,
        fee_type=FeeType.ONE_TIME,
    ))
    storage.import_record(Referral(
        candidate_id=sarah.id,
        position_id=engineer.id,
        referral_date=_date(2023, 8, 10),
        status=ReferralStatus.REFERRED,
        notes="Initial screening call scheduled",
        mode=ReferralMode.OUTSOURCE,
        fee_type=FeeType.MONTHLY,
        fee_months=3,
    ))

    storage.import_record(Activity(
        type=ActivityType.CANDIDATE_ADDED,
        description="Added a new candidate: Sarah Johnson",
        timestamp=now - timedelta(hours=2),
        related_id=sarah.id,
        related_type=RelatedType.CANDIDATE,
    ))
    storage.import_record(Activity(
        type=ActivityType.REFERRAL_CREATED,
        description="Made a new referral: Michael Chen for Product Manager at InnoTech",
        timestamp=now - timedelta(days=1),
        related_id=interviewing.id,
        related_type=RelatedType.REFERRAL,
    ))
    storage.import_record(Activity(
        type=ActivityType.POSITION_ADDED,
        description="Added a new position: Product Manager at InnoTech",
        timestamp=now - timedelta(days=2),
        related_id=product_manager.id,
        related_type=RelatedType.POSITION,
    ))
    storage.import_record(Activity(
        type=ActivityType.REFERRAL_UPDATED,
        description="Received referral fee: ₪25,000 for Emma Davis",
        timestamp=now - timedelta(days=3),
        related_id=hired.id,
        related_type=RelatedType.REFERRAL,
    ))

    logger.info("Storage seeded successfully")
    return True
