"""Application-wide constants"""


class PositionStatus:
    """Position status constants"""
    OPEN = "Open"
    CLOSED = "Closed"

    @classmethod
    def all(cls):
        """Return list of all valid status values"""
        return [cls.OPEN, cls.CLOSED]


class CandidateStatus:
    """Candidate status constants

    PLACED is also set automatically when one of the candidate's referrals
    is hired with a fee.
    """
    LOOKING = "Looking"
    PLACED = "Placed"

    @classmethod
    def all(cls):
        return [cls.LOOKING, cls.PLACED]


class ReferralStatus:
    """Referral lifecycle states

    Any state may move to any other one. HIRED and REJECTED are terminal by
    convention only.
    """
    REFERRED = "Referred"
    INTERVIEWING = "Interviewing"
    HIRED = "Hired"
    REJECTED = "Rejected"

    @classmethod
    def all(cls):
        return [cls.REFERRED, cls.INTERVIEWING, cls.HIRED, cls.REJECTED]


class ReferralMode:
    PLACEMENT = "Placement"
    OUTSOURCE = "Outsource"

    @classmethod
    def all(cls):
        return [cls.PLACEMENT, cls.OUTSOURCE]


class FeeType:
    ONE_TIME = "OneTime"
    MONTHLY = "Monthly"

    @classmethod
    def all(cls):
        return [cls.ONE_TIME, cls.MONTHLY]


class Availability:
    IMMEDIATE = "immediate"
    TWO_WEEKS = "2weeks"
    ONE_MONTH = "1month"
    THREE_MONTHS = "3months"

    @classmethod
    def all(cls):
        return [cls.IMMEDIATE, cls.TWO_WEEKS, cls.ONE_MONTH, cls.THREE_MONTHS]


class ActivityType:
    """Tags identifying the event that produced an activity"""
    POSITION_ADDED = "position_added"
    POSITION_UPDATED = "position_updated"
    POSITION_DELETED = "position_deleted"
    CANDIDATE_ADDED = "candidate_added"
    CANDIDATE_UPDATED = "candidate_updated"
    CANDIDATE_DELETED = "candidate_deleted"
    REFERRAL_CREATED = "referral_created"
    REFERRAL_UPDATED = "referral_updated"
    REFERRAL_DELETED = "referral_deleted"


class RelatedType:
    POSITION = "position"
    CANDIDATE = "candidate"
    REFERRAL = "referral"

    @classmethod
    def all(cls):
        return [cls.POSITION, cls.CANDIDATE, cls.REFERRAL]


DEFAULT_CURRENCY_SYMBOL = "₪"

# Trailing window used for the dashboard's monthly figures
MONTHLY_WINDOW_DAYS = 30
