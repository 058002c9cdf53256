# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Training session endpoints — CRUD, calendar views, statistics.
Thin HTTP layer — delegates ALL logic to TrainingService.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from starlette.responses import Response

from swimteam.schemas.scheduling import (
    MonthStatisticsResponse,
    SeriesDeleteResponse,
    SessionCreatedResponse,
    SessionCreateRequest,
    SessionResponse,
    SessionUpdateRequest,
)
from swimteam.services.training_service import TrainingService
from swimteam.core.dependencies import get_training_service

router = APIRouter(prefix="/api/v1", tags=["Training Sessions"])


@router.get("/training-sessions", response_model=list[SessionResponse])
def list_sessions(
    service: TrainingService = Depends(get_training_service),
):
    return service.list_sessions()


@router.post("/training-sessions", status_code=201, response_model=SessionCreatedResponse)
def create_session(
    payload: SessionCreateRequest,
    service: TrainingService = Depends(get_training_service),
):
    """Create a session; a recurring one also materializes its occurrences."""
    try:
        return service.create_session(payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/training-sessions/date/{on_date}", response_model=list[SessionResponse])
def sessions_for_date(
    on_date: date,
    service: TrainingService = Depends(get_training_service),
):
    return service.sessions_for_date(on_date)


@router.get("/training-sessions/month/{year}/{month}", response_model=list[SessionResponse])
def sessions_for_month(
    year: int = Path(..., ge=1),
    month: int = Path(..., ge=1, le=12),
    service: TrainingService = Depends(get_training_service),
):
    return service.sessions_for_month(year, month)


@router.get("/training-sessions/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: int,
    service: TrainingService = Depends(get_training_service),
):
    try:
        return service.get_session(session_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/training-sessions/{session_id}", response_model=SessionResponse)
def update_session(
    session_id: int,
    payload: SessionUpdateRequest,
    service: TrainingService = Depends(get_training_service),
):
    """Partially update one session."""
    try:
        return service.update_session(session_id, payload.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/training-sessions/{session_id}", status_code=204)
def delete_session(
    session_id: int,
    service: TrainingService = Depends(get_training_service),
):
    try:
        service.delete_session(session_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.delete("/training-sessions/{session_id}/future", response_model=SeriesDeleteResponse)
def delete_future_sessions(
    session_id: int,
    include_current: bool = Query(default=False),
    service: TrainingService = Depends(get_training_service),
):
    """Delete later sessions of the same series, optionally this one too."""
    try:
        return service.delete_future(session_id, include_current=include_current)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/statistics/month/{year}/{month}", response_model=MonthStatisticsResponse)
def month_statistics(
    year: int = Path(..., ge=1),
    month: int = Path(..., ge=1, le=12),
    service: TrainingService = Depends(get_training_service),
):
    return service.month_statistics(year, month)
