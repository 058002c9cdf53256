# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

import datetime as dt
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from swimteam.models.domain import RosterMember, TrainingSession

_TIME_PATTERN = r"^\d{2}:\d{2}(:\d{2})?$"


# ── Roster Schemas ──

class MemberCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Member name")
    position: Optional[int] = Field(
        default=None, ge=1, description="1-based rotation position; appended when omitted"
    )


class MemberUpdateRequest(BaseModel):
    """Partial update model for PATCH /api/v1/roster/{member_id}."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position: Optional[int] = Field(default=None, ge=1)


class ReorderRequest(BaseModel):
    from_id: int = Field(..., description="Member to move")
    to_id: int = Field(..., description="Member whose position it takes")


class MemberResponse(RosterMember):
    pass


# ── Leader Schemas ──

class GenerateRequest(BaseModel):
    start_date: Optional[dt.date] = Field(
        default=None, description="First duty day; defaults to today"
    )
    window_days: Optional[int] = Field(default=None, ge=1, le=365)
    horizon_end: Optional[dt.date] = Field(
        default=None, description="Last covered day; defaults to the configured horizon"
    )


class SetFromDateRequest(BaseModel):
    date: dt.date = Field(..., description="Day the chosen member starts leading")
    member_id: int = Field(..., description="Roster member who leads first")
    window_days: Optional[int] = Field(default=None, ge=1, le=365)
    horizon_end: Optional[dt.date] = None


class AssignmentResponse(BaseModel):
    id: int
    member_id: int
    start_date: dt.date
    end_date: dt.date
    is_active: bool


class GenerationResponse(BaseModel):
    mode: str
    start_date: dt.date
    horizon_end: dt.date
    window_days: int
    roster_size: int
    assignments_created: int
    assignments_superseded: int
    member_id: Optional[int] = None
    assignments: list[AssignmentResponse]


class LeaderForDateResponse(BaseModel):
    date: dt.date
    member_id: Optional[int] = None
    leader: Optional[MemberResponse] = None


class LeaderStatsResponse(BaseModel):
    roster_size: int
    total_assignments: int
    active_assignments: int
    window_days: int
    coverage_start: Optional[dt.date] = None
    coverage_end: Optional[dt.date] = None
    assignments_per_member: dict[int, int]


# ── Training Session Schemas ──

class _SessionFields(BaseModel):
    title: Optional[str] = Field(default=None, max_length=500)
    type: Optional[str] = Field(default=None, max_length=100)
    end_time: Optional[str] = Field(default=None, pattern=_TIME_PATTERN)
    strokes: Optional[Union[str, list[str]]] = None
    distance: Optional[int] = Field(default=None, ge=0, description="Meters")
    intensity: Optional[str] = Field(default=None, max_length=50)
    lanes: Optional[str] = Field(default=None, max_length=50)
    menu_details: Optional[str] = None
    coach_notes: Optional[str] = None

    @field_validator("strokes")
    @classmethod
    def wrap_single_stroke(cls, v: Any) -> Optional[list[str]]:
        if isinstance(v, str):
            return [v]
        return v


class SessionCreateRequest(_SessionFields):
    date: dt.date
    start_time: str = Field(..., pattern=_TIME_PATTERN)
    is_recurring: bool = False
    recurring_pattern: Optional[str] = Field(
        default=None,
        max_length=50,
        description="daily | weekly | biweekly | monthly | weekly_by_weekdays",
    )
    recurring_end_date: Optional[dt.date] = None
    weekdays: Optional[list[int]] = Field(
        default=None, description="0=Sunday .. 6=Saturday"
    )
    max_occurrences: Optional[int] = Field(default=None, ge=1, le=1000)


class SessionUpdateRequest(_SessionFields):
    """Partial update model for PATCH /api/v1/training-sessions/{id}."""
    date: Optional[dt.date] = None
    start_time: Optional[str] = Field(default=None, pattern=_TIME_PATTERN)


class SessionResponse(TrainingSession):
    id: int


class SessionCreatedResponse(BaseModel):
    session: SessionResponse
    occurrences: list[SessionResponse]


class SeriesDeleteResponse(BaseModel):
    status: str
    session_id: int
    deleted: int


class MonthStatisticsResponse(BaseModel):
    year: int
    month: int
    total_sessions: int
    total_distance: int
    recurring_templates: int
    sessions_by_type: dict[str, int]
