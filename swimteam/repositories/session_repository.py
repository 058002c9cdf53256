# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Training session data access.
Templates and materialized occurrences are stored side by side as
independent rows.
"""

from datetime import date
from typing import Any, Iterable, Optional

from swimteam.models.domain import TrainingSession
from swimteam.services.dates import month_bounds


class SessionRepository:
    """In-memory training session storage. Owns session id assignment."""

    def __init__(self) -> None:
        self._store: dict[int, TrainingSession] = {}
        self._next_id = 1

    # ── Read ──

    def get_all(self) -> list[TrainingSession]:
        return sorted(
            self._store.values(), key=lambda s: (s.date, s.start_time, s.id)
        )

    def get(self, session_id: int) -> Optional[TrainingSession]:
        return self._store.get(session_id)

    def get_by_date(self, day: date) -> list[TrainingSession]:
        return [s for s in self.get_all() if s.date == day]

    def get_by_month(self, year: int, month: int) -> list[TrainingSession]:
        first, last = month_bounds(year, month)
        return [s for s in self.get_all() if first <= s.date <= last]

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def save(self, session: TrainingSession) -> TrainingSession:
        record = session.model_copy(update={"id": self._next_id})
        self._next_id += 1
        self._store[record.id] = record
        return record

    def save_all(self, sessions: Iterable[TrainingSession]) -> list[TrainingSession]:
        return [self.save(s) for s in sessions]

    def update(self, session_id: int, changes: dict[str, Any]) -> Optional[TrainingSession]:
        session = self._store.get(session_id)
        if session is None:
            return None
        updated = TrainingSession.model_validate(
            {**session.model_dump(), **changes, "id": session_id}
        )
        self._store[session_id] = updated
        return updated

    def delete(self, session_id: int) -> Optional[TrainingSession]:
        return self._store.pop(session_id, None)

    def delete_many(self, session_ids: Iterable[int]) -> int:
        removed = 0
        for session_id in session_ids:
            if self._store.pop(session_id, None) is not None:
                removed += 1
        return removed

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
        self._next_id = 1
