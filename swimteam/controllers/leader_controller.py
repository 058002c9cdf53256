# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Leader rotation endpoints — generate, re-anchor, lookup.
Thin HTTP layer — delegates ALL logic to LeaderService.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from swimteam.schemas.scheduling import (
    AssignmentResponse,
    GenerateRequest,
    GenerationResponse,
    LeaderForDateResponse,
    LeaderStatsResponse,
    SetFromDateRequest,
)
from swimteam.services.leader_service import LeaderService
from swimteam.core.dependencies import get_leader_service

router = APIRouter(prefix="/api/v1/leaders", tags=["Leaders"])


@router.post("/generate", status_code=201, response_model=GenerationResponse)
def generate_rotation(
    payload: GenerateRequest,
    service: LeaderService = Depends(get_leader_service),
):
    """Generate a new rotation from the first roster member."""
    try:
        return service.generate(
            start_date=payload.start_date,
            window_days=payload.window_days,
            horizon_end=payload.horizon_end,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/set-from-date", response_model=GenerationResponse)
def set_rotation_from_date(
    payload: SetFromDateRequest,
    service: LeaderService = Depends(get_leader_service),
):
    """Re-anchor the rotation so the chosen member leads from the given date."""
    try:
        return service.set_from_date(
            on_date=payload.date,
            member_id=payload.member_id,
            window_days=payload.window_days,
            horizon_end=payload.horizon_end,
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/assignments", response_model=list[AssignmentResponse])
def list_assignments(
    active_only: bool = Query(default=True),
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    service: LeaderService = Depends(get_leader_service),
):
    """List duty assignments, optionally restricted to a date range."""
    return service.list_assignments(active_only=active_only, start=start, end=end)


@router.get("/on/{on_date}", response_model=LeaderForDateResponse)
def leader_for_date(
    on_date: date,
    service: LeaderService = Depends(get_leader_service),
):
    """Who leads on a given day (leader is null when nobody is scheduled)."""
    return service.leader_for_date(on_date)


@router.get("/history")
def rotation_history(
    event_type: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    service: LeaderService = Depends(get_leader_service),
):
    return service.get_history(event_type=event_type, limit=limit)


@router.get("/stats", response_model=LeaderStatsResponse)
def rotation_stats(
    service: LeaderService = Depends(get_leader_service),
):
    return service.get_stats()
