# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Training session management — CRUD plus recurrence materialization.
A recurring template is stored as-is; its occurrences are expanded once at
creation time and stored as independent rows.
"""

from typing import Any, Optional

from swimteam.core.logging import get_logger
from swimteam.metrics.prometheus import (
    OCCURRENCES_MATERIALIZED,
    RECURRENCE_RULES_DEGRADED,
    SESSIONS_CREATED,
)
from swimteam.models.domain import TrainingSession
from swimteam.repositories.history_repository import HistoryRepository
from swimteam.repositories.session_repository import SessionRepository
from swimteam.services.dates import parse_date
from swimteam.services.recurrence import RecurrenceExpander

logger = get_logger(__name__)


class TrainingService:
    """Business logic for training sessions."""

    def __init__(
        self,
        session_repo: SessionRepository,
        history_repo: HistoryRepository,
        expander: Optional[RecurrenceExpander] = None,
    ) -> None:
        self._sessions = session_repo
        self._history = history_repo
        self._expander = expander or RecurrenceExpander()

    # ── Commands ──

    def create_session(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Store a session. For a recurring template, also store every occurrence
        its rule implies. Raises ValueError when neither title nor type is set.
        """
        session = TrainingSession.model_validate({**data, "id": None})
        self._require_label(session)

        saved = self._sessions.save(session)
        occurrences: list[TrainingSession] = []
        if saved.is_template:
            expansion = self._expander.expand_report(saved)
            occurrences = self._sessions.save_all(expansion.occurrences)
            if expansion.degraded:
                RECURRENCE_RULES_DEGRADED.inc()
            elif occurrences:
                OCCURRENCES_MATERIALIZED.labels(pattern=saved.recurring_pattern).inc(
                    len(occurrences)
                )
        SESSIONS_CREATED.labels(recurring=str(saved.is_template).lower()).inc()

        self._history.record_event(
            "session_created",
            "training",
            {
                "session_id": saved.id,
                "date": saved.date.isoformat(),
                "recurring_pattern": saved.recurring_pattern,
                "occurrences_created": len(occurrences),
            },
        )
        logger.info(
            "Training session created: id=%d, date=%s, occurrences=%d",
            saved.id, saved.date, len(occurrences),
            extra={"session_id": saved.id, "scope": "training"},
        )
        return {
            "session": saved.model_dump(mode="json"),
            "occurrences": [o.model_dump(mode="json") for o in occurrences],
        }

    def update_session(self, session_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        """
        Patch plain fields of one session. Occurrences already expanded from a
        template are independent rows and stay untouched. Raises KeyError / ValueError.
        """
        current = self._require(session_id)
        candidate = TrainingSession.model_validate({**current.model_dump(), **changes})
        self._require_label(candidate)
        updated = self._sessions.update(session_id, changes)
        self._history.record_event(
            "session_updated", "training", {"session_id": session_id, "fields": sorted(changes)}
        )
        logger.info("Training session updated: id=%d, fields=%s", session_id, sorted(changes))
        return updated.model_dump(mode="json")

    def delete_session(self, session_id: int) -> None:
        self._require(session_id)
        self._sessions.delete(session_id)
        self._history.record_event("session_deleted", "training", {"session_id": session_id})
        logger.info("Training session deleted: id=%d", session_id)

    def delete_future(self, session_id: int, include_current: bool = False) -> dict[str, Any]:
        """
        Delete the later sessions of the same series (same title, type and
        start time), optionally including the given session. Raises KeyError.
        """
        anchor = self._require(session_id)
        key = anchor.series_key()
        doomed = [
            s.id
            for s in self._sessions.get_all()
            if s.series_key() == key
            and (s.date > anchor.date or (include_current and s.id == anchor.id))
        ]
        deleted = self._sessions.delete_many(doomed)
        self._history.record_event(
            "series_deleted",
            "training",
            {
                "session_id": session_id,
                "from_date": anchor.date.isoformat(),
                "include_current": include_current,
                "deleted": deleted,
            },
        )
        logger.info(
            "Training series deleted: anchor=%d, include_current=%s, deleted=%d",
            session_id, include_current, deleted,
        )
        return {"status": "deleted", "session_id": session_id, "deleted": deleted}

    # ── Queries ──

    def get_session(self, session_id: int) -> dict[str, Any]:
        return self._require(session_id).model_dump(mode="json")

    def list_sessions(self) -> list[dict[str, Any]]:
        return [s.model_dump(mode="json") for s in self._sessions.get_all()]

    def sessions_for_date(self, on_date) -> list[dict[str, Any]]:
        day = parse_date(on_date)
        return [s.model_dump(mode="json") for s in self._sessions.get_by_date(day)]

    def sessions_for_month(self, year: int, month: int) -> list[dict[str, Any]]:
        return [s.model_dump(mode="json") for s in self._sessions.get_by_month(year, month)]

    def month_statistics(self, year: int, month: int) -> dict[str, Any]:
        sessions = self._sessions.get_by_month(year, month)
        by_type: dict[str, int] = {}
        for s in sessions:
            label = s.type or s.title or "unspecified"
            by_type[label] = by_type.get(label, 0) + 1
        return {
            "year": year,
            "month": month,
            "total_sessions": len(sessions),
            "total_distance": sum(s.distance or 0 for s in sessions),
            "recurring_templates": sum(1 for s in sessions if s.is_template),
            "sessions_by_type": by_type,
        }

    # ── Internal ──

    def _require(self, session_id: int) -> TrainingSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Training session {session_id} not found")
        return session

    @staticmethod
    def _require_label(session: TrainingSession) -> None:
        if not ((session.title or "").strip() or (session.type or "").strip()):
            raise ValueError("Either a title or a type is required")
