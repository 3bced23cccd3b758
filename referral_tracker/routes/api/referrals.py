"""
Referral API routes
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from ...models import Referral, ReferralWithDetails
from ...pydantic_models import ReferralCreate, ReferralUpdate
from ...crud_helpers import get_or_404
from ...dependencies import get_storage
from ...storage.base import Storage
from ...storage.exceptions import FeeNotAllowedError

router = APIRouter(prefix="/api/referrals", tags=["referrals"])


@router.get("", response_model=List[ReferralWithDetails])
def list_referrals(storage: Storage = Depends(get_storage)):
    """List all referrals with their candidate and position"""
    return storage.get_all_referrals()


@router.get("/{referral_id}", response_model=ReferralWithDetails)
def get_referral(referral_id: int, storage: Storage = Depends(get_storage)):
    """Get a referral with its candidate and position"""
    return get_or_404(storage.get_referral, referral_id, "Referral")


@router.post("", response_model=Referral, status_code=201)
def create_referral(request: ReferralCreate, storage: Storage = Depends(get_storage)):
    """Refer a candidate to a position

    The referral starts as Referred regardless of the payload.
    """
    # Validate candidate and position exist
    get_or_404(storage.get_candidate, request.candidate_id, "Candidate")
    get_or_404(storage.get_position, request.position_id, "Position")

    return storage.create_referral(request)


@router.put("/{referral_id}", response_model=Referral)
def update_referral(
    referral_id: int,
    request: ReferralUpdate,
    storage: Storage = Depends(get_storage)
):
    """Update a referral

    Moving the referral to Hired together with a fee places the candidate.
    """
    if request.candidate_id is not None:
        get_or_404(storage.get_candidate, request.candidate_id, "Candidate")
    if request.position_id is not None:
        get_or_404(storage.get_position, request.position_id, "Position")

    try:
        referral = storage.update_referral(referral_id, request)
    except FeeNotAllowedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if referral is None:
        raise HTTPException(status_code=404, detail=f"Referral {referral_id} not found")
    return referral


@router.delete("/{referral_id}", status_code=204)
def delete_referral(referral_id: int, storage: Storage = Depends(get_storage)):
    """Delete a referral"""
    if not storage.delete_referral(referral_id):
        raise HTTPException(status_code=404, detail=f"Referral {referral_id} not found")
    return None
