# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Leader rotation — coordinates the pure RotationScheduler with
assignment storage, history and metrics.

Every generation runs under one lock: deactivate-then-insert must not
interleave with another generation or two active windows could overlap.
"""

import threading
from datetime import date
from typing import Any, Callable, Optional

from swimteam.core.config import settings
from swimteam.core.logging import get_logger
from swimteam.metrics.prometheus import (
    ACTIVE_ASSIGNMENTS,
    ASSIGNMENTS_CREATED,
    ASSIGNMENTS_SUPERSEDED,
    LEADER_LOOKUPS,
    ROTATION_GENERATIONS,
)
from swimteam.models.domain import Assignment
from swimteam.repositories.assignment_repository import AssignmentRepository
from swimteam.repositories.history_repository import HistoryRepository
from swimteam.repositories.roster_repository import RosterRepository
from swimteam.services.dates import add_days, add_months, parse_date
from swimteam.services.rotation import RotationScheduler

logger = get_logger(__name__)


class LeaderService:
    """Business logic for generating and querying the leader duty roster."""

    def __init__(
        self,
        roster_repo: RosterRepository,
        assignment_repo: AssignmentRepository,
        history_repo: HistoryRepository,
        scheduler: Optional[RotationScheduler] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._roster = roster_repo
        self._assignments = assignment_repo
        self._history = history_repo
        self._scheduler = scheduler or RotationScheduler()
        self._today = today
        self._lock = threading.Lock()

    # ── Commands ──

    def generate(
        self,
        start_date=None,
        window_days: Optional[int] = None,
        horizon_end=None,
    ) -> dict[str, Any]:
        """
        New rotation generation from the first roster member.
        Supersedes every active window reaching `start_date` or later.
        Raises EmptyRosterError / ValueError before touching storage.
        """
        start, horizon = self._horizon(start_date, horizon_end)
        with self._lock:
            roster = self._roster.get_all()
            created = self._scheduler.generate(roster, start, horizon, window_days)
            stale = self._scheduler.superseded(self._assignments.get_active(), start)
            return self._commit(
                "generate", start, horizon, window_days, roster, created, stale
            )

    def set_from_date(
        self,
        on_date,
        member_id: int,
        window_days: Optional[int] = None,
        horizon_end=None,
    ) -> dict[str, Any]:
        """
        Re-anchor the rotation so `member_id` leads from `on_date`.
        Every active window is superseded (full reset).
        Raises EmptyRosterError / UnknownMemberError before touching storage.
        """
        start, horizon = self._horizon(on_date, horizon_end)
        with self._lock:
            roster = self._roster.get_all()
            created = self._scheduler.set_from_date(
                roster, start, member_id, horizon, window_days
            )
            stale = self._scheduler.superseded(
                self._assignments.get_active(), start, full_reset=True
            )
            return self._commit(
                "set_from_date", start, horizon, window_days, roster, created, stale,
                member_id,
            )

    # ── Queries ──

    def leader_for_date(self, on_date) -> dict[str, Any]:
        day = parse_date(on_date)
        member_id = self._scheduler.resolve(self._assignments.get_active(day, day), day)
        LEADER_LOOKUPS.labels(found=str(member_id is not None).lower()).inc()
        member = self._roster.get(member_id) if member_id is not None else None
        return {
            "date": day.isoformat(),
            "member_id": member_id,
            "leader": member.model_dump() if member else None,
        }

    def list_assignments(
        self,
        active_only: bool = True,
        start=None,
        end=None,
    ) -> list[dict[str, Any]]:
        lower = parse_date(start) if start else None
        upper = parse_date(end) if end else None
        if active_only:
            records = self._assignments.get_active(lower, upper)
        else:
            records = [
                a
                for a in self._assignments.get_all()
                if (lower is None or a.end_date >= lower)
                and (upper is None or a.start_date <= upper)
            ]
        return [a.model_dump(mode="json") for a in records]

    def get_history(
        self, event_type: Optional[str] = None, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        return self._history.get_all(scope="leaders", event_type=event_type, limit=limit)

    def get_stats(self) -> dict[str, Any]:
        """Aggregated rotation statistics over the active generation."""
        active = self._assignments.get_active()
        per_member: dict[int, int] = {}
        for a in active:
            per_member[a.member_id] = per_member.get(a.member_id, 0) + 1
        return {
            "roster_size": self._roster.count(),
            "total_assignments": self._assignments.count(),
            "active_assignments": len(active),
            "window_days": self._current_window_days(),
            "coverage_start": active[0].start_date.isoformat() if active else None,
            "coverage_end": max(a.end_date for a in active).isoformat() if active else None,
            "assignments_per_member": per_member,
        }

    def default_horizon_end(self, start: date) -> date:
        return add_days(add_months(start, settings.LEADER_HORIZON_MONTHS), -1)

    # ── Internal ──

    def _current_window_days(self) -> int:
        """Window length of the latest generation, else the configured default."""
        latest = self._history.get_all(scope="leaders", limit=1)
        if latest and "window_days" in latest[-1]["details"]:
            return latest[-1]["details"]["window_days"]
        return self._scheduler.window_days

    def _horizon(self, start_value, horizon_value) -> tuple[date, date]:
        start = parse_date(start_value) if start_value else self._today()
        horizon = (
            parse_date(horizon_value) if horizon_value else self.default_horizon_end(start)
        )
        if horizon < start:
            raise ValueError("horizon_end must not be before the start date")
        return start, horizon

    def _commit(
        self,
        mode: str,
        start: date,
        horizon: date,
        window_days: Optional[int],
        roster: list,
        created: list[Assignment],
        stale: list[int],
        member_id: Optional[int] = None,
    ) -> dict[str, Any]:
        superseded = self._assignments.deactivate_ids(stale)
        saved = self._assignments.save_all(created)

        ROTATION_GENERATIONS.labels(mode=mode).inc()
        ASSIGNMENTS_CREATED.inc(len(saved))
        ASSIGNMENTS_SUPERSEDED.inc(superseded)
        ACTIVE_ASSIGNMENTS.set(self._assignments.count_active())

        details: dict[str, Any] = {
            "start_date": start.isoformat(),
            "horizon_end": horizon.isoformat(),
            "window_days": self._scheduler.effective_window(window_days),
            "roster_size": len(roster),
            "assignments_created": len(saved),
            "assignments_superseded": superseded,
        }
        if member_id is not None:
            details["member_id"] = member_id
        event_type = (
            "leader_rotation_reanchored" if mode == "set_from_date" else "leader_rotation_generated"
        )
        self._history.record_event(event_type, "leaders", details)
        logger.info(
            "Leader rotation %s: start=%s, horizon=%s, created=%d, superseded=%d",
            mode, start, horizon, len(saved), superseded,
            extra={"mode": mode, "scope": "leaders", "member_id": member_id},
        )
        return {
            "mode": mode,
            **details,
            "assignments": [a.model_dump(mode="json") for a in saved],
        }
