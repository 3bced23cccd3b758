"""
Position API routes
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from ...constants import RelatedType
from ...models import Position
from ...pydantic_models import PositionCreate, PositionUpdate
from ...crud_helpers import get_or_404, ensure_deletable
from ...dependencies import get_storage
from ...storage.base import Storage

router = APIRouter(prefix="/api/positions", tags=["positions"])


@router.get("", response_model=List[Position])
def list_positions(storage: Storage = Depends(get_storage)):
    """List all positions"""
    return storage.get_all_positions()


@router.get("/{position_id}", response_model=Position)
def get_position(position_id: int, storage: Storage = Depends(get_storage)):
    """Get a position by ID"""
    return get_or_404(storage.get_position, position_id, "Position")


@router.post("", response_model=Position, status_code=201)
def create_position(request: PositionCreate, storage: Storage = Depends(get_storage)):
    """Create a new position"""
    return storage.create_position(request)


@router.put("/{position_id}", response_model=Position)
def update_position(
    position_id: int,
    request: PositionUpdate,
    storage: Storage = Depends(get_storage)
):
    """Update a position (only the fields sent are changed)"""
    position = storage.update_position(position_id, request)
    if position is None:
        raise HTTPException(status_code=404, detail=f"Position {position_id} not found")
    return position


@router.delete("/{position_id}", status_code=204)
def delete_position(position_id: int, storage: Storage = Depends(get_storage)):
    """Delete a position that no referral points at"""
    ensure_deletable(storage, RelatedType.POSITION, position_id, "Position")
    if not storage.delete_position(position_id):
        raise HTTPException(status_code=404, detail=f"Position {position_id} not found")
    return None
