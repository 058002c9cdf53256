# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Leader rotation logic — pure computation, no side effects.

Roster members take fixed-length, contiguous duty windows in roster order
(order ascending, id ascending for ties), wrapping around the roster until
the horizon is covered. Nothing here touches storage: callers receive the
new assignments plus the ids of the assignments they supersede, and persist
both themselves.
"""

from bisect import bisect_right
from datetime import date
from typing import Iterable, Optional, Sequence

from swimteam.core.config import settings
from swimteam.core.exceptions import EmptyRosterError, UnknownMemberError
from swimteam.models.domain import Assignment, RosterMember
from swimteam.services.dates import iter_windows


def order_roster(members: Iterable[RosterMember]) -> list[RosterMember]:
    return sorted(members, key=lambda m: (m.order, m.id))


class ActiveAssignmentIndex:
    """Active assignments keyed by start date for O(log n) date lookups."""

    def __init__(self, assignments: Iterable[Assignment]) -> None:
        self._assignments = sorted(
            (a for a in assignments if a.is_active), key=lambda a: a.start_date
        )
        self._starts = [a.start_date for a in self._assignments]

    def __len__(self) -> int:
        return len(self._assignments)

    def lookup(self, on_date: date) -> Optional[Assignment]:
        pos = bisect_right(self._starts, on_date)
        if pos == 0:
            return None
        candidate = self._assignments[pos - 1]
        return candidate if candidate.covers(on_date) else None


class RotationScheduler:
    """Deterministic leader duty roster over a bounded horizon."""

    def __init__(self, window_days: int | None = None) -> None:
        self.window_days = (
            settings.LEADER_WINDOW_DAYS if window_days is None else window_days
        )

    # ── Generation ──

    def generate(
        self,
        roster: Sequence[RosterMember],
        start_date: date,
        horizon_end: date,
        window_days: int | None = None,
    ) -> list[Assignment]:
        """
        Rotate through the roster from its first member.
        Raises EmptyRosterError / ValueError before producing anything.
        """
        ordered = self._validated(roster, window_days)
        return self._rotate(ordered, 0, start_date, horizon_end, window_days)

    def set_from_date(
        self,
        roster: Sequence[RosterMember],
        start_date: date,
        member_id: int,
        horizon_end: date,
        window_days: int | None = None,
    ) -> list[Assignment]:
        """
        Re-anchor the rotation: `member_id` takes the first window starting
        at `start_date`, everyone else follows in cyclic roster order.
        """
        ordered = self._validated(roster, window_days)
        positions = [m.id for m in ordered]
        if member_id not in positions:
            raise UnknownMemberError(member_id)
        return self._rotate(
            ordered, positions.index(member_id), start_date, horizon_end, window_days
        )

    @staticmethod
    def superseded(
        existing: Iterable[Assignment],
        start_date: date,
        full_reset: bool = False,
    ) -> list[int]:
        """
        Ids of active assignments a new generation starting at `start_date`
        invalidates. A full reset supersedes every active assignment.
        """
        return [
            a.id
            for a in existing
            if a.is_active
            and a.id is not None
            and (full_reset or a.end_date >= start_date)
        ]

    # ── Lookup ──

    @staticmethod
    def resolve(assignments: Iterable[Assignment], on_date: date) -> Optional[int]:
        """Member id of the active assignment covering `on_date`, else None."""
        hit = ActiveAssignmentIndex(assignments).lookup(on_date)
        return hit.member_id if hit else None

    # ── Internal ──

    def effective_window(self, window_days: int | None) -> int:
        """Window length a generation uses: the override, else the default."""
        return self.window_days if window_days is None else window_days

    def _validated(
        self, roster: Sequence[RosterMember], window_days: int | None
    ) -> list[RosterMember]:
        if not roster:
            raise EmptyRosterError()
        if self.effective_window(window_days) < 1:
            raise ValueError("Window length must be at least 1 day")
        return order_roster(roster)

    def _rotate(
        self,
        ordered: list[RosterMember],
        first_index: int,
        start_date: date,
        horizon_end: date,
        window_days: int | None,
    ) -> list[Assignment]:
        n = len(ordered)
        return [
            Assignment(
                member_id=ordered[(first_index + i) % n].id,
                start_date=window_start,
                end_date=window_end,
                is_active=True,
            )
            for i, (window_start, window_end) in enumerate(
                iter_windows(start_date, self.effective_window(window_days), horizon_end)
            )
        ]
