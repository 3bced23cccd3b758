"""
Referral lifecycle rules

Referral status moves freely between Referred, Interviewing, Hired and
Rejected. The only transition with side effects is a paid hire: moving into
Hired with a non-zero fee records the fee and places the candidate. A fee is
only stored while the referral is Hired; leaving Hired clears it but the
candidate stays Placed.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from .constants import ReferralStatus, ReferralMode, FeeType
from .models import Referral, utcnow
from .storage.exceptions import FeeNotAllowedError

REFERRAL_CREATION_DEFAULTS = {
    "mode": ReferralMode.PLACEMENT,
    "fee_type": FeeType.ONE_TIME,
    "fee_months": None,
}


def referral_creation_fields(data: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the field set for a new referral.

    Status always starts at Referred and no fee is recorded yet; referral
    date, mode, fee type and fee months fall back to their defaults when
    absent or None.
    """
    fields = dict(data)
    for name, default in REFERRAL_CREATION_DEFAULTS.items():
        if fields.get(name) is None:
            fields[name] = default
    if fields.get("referral_date") is None:
        fields["referral_date"] = now or utcnow()
    fields["status"] = ReferralStatus.REFERRED
    fields["fee_earned"] = None
    return fields


def status_changed(previous_status: str, changes: Dict[str, Any]) -> bool:
    """True when the changes carry a status different from the persisted one"""
    new_status = changes.get("status")
    return bool(new_status) and new_status != previous_status


def is_paid_hire(previous_status: str, changes: Dict[str, Any]) -> bool:
    """
    Decide whether an update triggers the hire cascade.

    The fee must arrive in the same update as the Hired status; a hire with a
    missing or zero fee leaves the candidate alone.
    """
    return (
        changes.get("status") == ReferralStatus.HIRED
        and previous_status != ReferralStatus.HIRED
        and bool(changes.get("fee_earned"))
    )


def settle_fee(referral: Referral, changes: Dict[str, Any]) -> None:
    """
    Keep ``fee_earned`` consistent with the referral's merged status.

    A fee may only be stored while the referral is Hired. Leaving Hired
    clears the stored fee.

    Raises:
        FeeNotAllowedError: if the changes set a fee and the resulting
            status is not Hired
    """
    if referral.status == ReferralStatus.HIRED:
        return
    if changes.get("fee_earned") is not None:
        raise FeeNotAllowedError(referral.id, referral.status)
    referral.fee_earned = None
