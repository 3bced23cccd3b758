"""
Candidate API routes
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from ...constants import RelatedType
from ...models import Candidate
from ...pydantic_models import CandidateCreate, CandidateUpdate
from ...crud_helpers import get_or_404, ensure_deletable
from ...dependencies import get_storage
from ...storage.base import Storage

router = APIRouter(prefix="/api/candidates", tags=["candidates"])


@router.post("", response_model=Candidate, status_code=201)
def create_candidate(request: CandidateCreate, storage: Storage = Depends(get_storage)):
    """Create a new candidate"""
    return storage.create_candidate(request)


@router.get("", response_model=List[Candidate])
def list_candidates(storage: Storage = Depends(get_storage)):
    """List all candidates"""
    return storage.get_all_candidates()


@router.get("/{candidate_id}", response_model=Candidate)
def get_candidate(candidate_id: int, storage: Storage = Depends(get_storage)):
    """Get a candidate by ID"""
    return get_or_404(storage.get_candidate, candidate_id, "Candidate")


@router.put("/{candidate_id}", response_model=Candidate)
def update_candidate(
    candidate_id: int,
    request: CandidateUpdate,
    storage: Storage = Depends(get_storage)
):
    """Update a candidate"""
    candidate = storage.update_candidate(candidate_id, request)
    if candidate is None:
        raise HTTPException(status_code=404, detail=f"Candidate {candidate_id} not found")
    return candidate


@router.delete("/{candidate_id}", status_code=204)
def delete_candidate(candidate_id: int, storage: Storage = Depends(get_storage)):
    """Delete a candidate (refused while referrals point at them)"""
    ensure_deletable(storage, RelatedType.CANDIDATE, candidate_id, "Candidate")
    if not storage.delete_candidate(candidate_id):
        raise HTTPException(status_code=404, detail=f"Candidate {candidate_id} not found")
    return None
