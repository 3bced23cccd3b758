"""
Dashboard and activity feed API routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from ...models import Activity
from ...pydantic_models import DashboardStats
from ...dependencies import get_storage
from ...storage.base import Storage

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(storage: Storage = Depends(get_storage)):
    """Headline counts plus what was added in the last 30 days"""
    return storage.get_dashboard_stats()


@router.get("/activities", response_model=List[Activity])
def list_activities(
    limit: Optional[int] = Query(default=None, ge=1),
    storage: Storage = Depends(get_storage)
):
    """Recent activity, newest first"""
    return storage.get_all_activities(limit)
