# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Leader duty assignment data access.
Assignments are never deleted; superseded ones are flagged inactive so the
rotation history stays intact.
"""

from datetime import date
from typing import Callable, Iterable, Optional

from swimteam.models.domain import Assignment
from swimteam.services.dates import windows_intersect


class AssignmentRepository:
    """In-memory assignment storage. Owns assignment id assignment."""

    def __init__(self) -> None:
        self._store: dict[int, Assignment] = {}
        self._next_id = 1

    # ── Read ──

    def get_all(self) -> list[Assignment]:
        return sorted(self._store.values(), key=lambda a: (a.start_date, a.id))

    def get(self, assignment_id: int) -> Optional[Assignment]:
        return self._store.get(assignment_id)

    def get_active(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[Assignment]:
        """Active assignments whose window intersects [start, end] (open-ended when omitted)."""
        lower = start or date.min
        upper = end or date.max
        return [
            a
            for a in self.get_all()
            if a.is_active and windows_intersect(a.start_date, a.end_date, lower, upper)
        ]

    def count(self) -> int:
        return len(self._store)

    def count_active(self) -> int:
        return sum(1 for a in self._store.values() if a.is_active)

    # ── Write ──

    def save_all(self, assignments: Iterable[Assignment]) -> list[Assignment]:
        """Persist new assignments, returning copies carrying their storage ids."""
        saved: list[Assignment] = []
        for assignment in assignments:
            record = assignment.model_copy(update={"id": self._next_id})
            self._next_id += 1
            self._store[record.id] = record
            saved.append(record)
        return saved

    def deactivate(self, predicate: Callable[[Assignment], bool]) -> int:
        """Flip is_active off for every active assignment matching predicate."""
        matched = [a for a in self._store.values() if a.is_active and predicate(a)]
        for a in matched:
            self._store[a.id] = a.model_copy(update={"is_active": False})
        return len(matched)

    def deactivate_ids(self, assignment_ids: Iterable[int]) -> int:
        ids = set(assignment_ids)
        return self.deactivate(lambda a: a.id in ids)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
        self._next_id = 1
