# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

RECURRENCE_FIELDS: tuple[str, ...] = (
    "recurring_pattern",
    "recurring_end_date",
    "weekdays",
    "max_occurrences",
)


class RosterMember(BaseModel):
    """A person eligible for leader duty. `order` defines rotation sequence."""
    id: int
    name: str = Field(..., min_length=1, max_length=255, description="Member name")
    order: int = Field(..., ge=0, description="Rotation position; ties broken by id")


class Assignment(BaseModel):
    """One duty window. Superseded windows are kept with is_active=False."""
    id: Optional[int] = None
    member_id: int
    start_date: dt.date
    end_date: dt.date
    is_active: bool = True

    def covers(self, day: dt.date) -> bool:
        return self.start_date <= day <= self.end_date


class RecurrenceRule(BaseModel):
    """
    Abstract recurrence. `pattern` is free-form; a rule the expander does
    not understand yields zero occurrences.
    """
    pattern: str
    end_date: Optional[dt.date] = None
    max_occurrences: Optional[int] = None
    weekdays: Optional[list[int]] = None


class TrainingSession(BaseModel):
    """A training session: either a recurring template or a standalone row."""
    id: Optional[int] = None
    title: Optional[str] = None
    type: Optional[str] = None
    date: dt.date
    start_time: str = Field(..., pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    end_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    strokes: Optional[list[str]] = None
    distance: Optional[int] = Field(default=None, ge=0, description="Meters")
    intensity: Optional[str] = None
    lanes: Optional[str] = None
    menu_details: Optional[str] = None
    coach_notes: Optional[str] = None
    is_recurring: bool = False
    recurring_pattern: Optional[str] = None
    recurring_end_date: Optional[dt.date] = None
    weekdays: Optional[list[int]] = None
    max_occurrences: Optional[int] = None

    @property
    def is_template(self) -> bool:
        return bool(self.is_recurring and self.recurring_pattern)

    def rule(self) -> Optional[RecurrenceRule]:
        if not self.is_template:
            return None
        return RecurrenceRule(
            pattern=self.recurring_pattern,
            end_date=self.recurring_end_date,
            max_occurrences=self.max_occurrences,
            weekdays=self.weekdays,
        )

    def series_key(self) -> tuple[Optional[str], Optional[str], str]:
        """Fields shared by a template and every occurrence expanded from it."""
        return self.title, self.type, self.start_time
