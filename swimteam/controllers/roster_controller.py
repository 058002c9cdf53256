# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Roster CRUD endpoints.
Thin HTTP layer — delegates ALL logic to RosterService.
"""

from fastapi import APIRouter, Depends, HTTPException

from swimteam.schemas.scheduling import (
    MemberCreateRequest,
    MemberResponse,
    MemberUpdateRequest,
    ReorderRequest,
)
from swimteam.services.roster_service import RosterService
from swimteam.core.dependencies import get_roster_service

router = APIRouter(prefix="/api/v1", tags=["Roster"])


@router.get("/roster", response_model=list[MemberResponse])
def list_roster(
    service: RosterService = Depends(get_roster_service),
):
    """List roster members in rotation order."""
    return service.list_members()


@router.post("/roster", status_code=201, response_model=MemberResponse)
def add_member(
    payload: MemberCreateRequest,
    service: RosterService = Depends(get_roster_service),
):
    """Add a member to the rotation, optionally at a given position."""
    try:
        return service.add_member(name=payload.name, position=payload.position)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/roster/reorder", response_model=list[MemberResponse])
def reorder_roster(
    payload: ReorderRequest,
    service: RosterService = Depends(get_roster_service),
):
    """Move one member into another member's rotation position."""
    try:
        return service.reorder(payload.from_id, payload.to_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/roster/{member_id}", response_model=MemberResponse)
def get_member(
    member_id: int,
    service: RosterService = Depends(get_roster_service),
):
    try:
        return service.get_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/roster/{member_id}", response_model=MemberResponse)
def update_member(
    member_id: int,
    payload: MemberUpdateRequest,
    service: RosterService = Depends(get_roster_service),
):
    """Rename and/or move a member."""
    try:
        return service.update_member(
            member_id, name=payload.name, position=payload.position
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/roster/{member_id}")
def remove_member(
    member_id: int,
    service: RosterService = Depends(get_roster_service),
):
    """Remove a member. Existing duty windows are left as they are."""
    try:
        return service.remove_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
