# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from swimteam.repositories.assignment_repository import AssignmentRepository
from swimteam.repositories.history_repository import HistoryRepository
from swimteam.repositories.roster_repository import RosterRepository
from swimteam.repositories.session_repository import SessionRepository
from swimteam.services.leader_service import LeaderService
from swimteam.services.roster_service import RosterService
from swimteam.services.training_service import TrainingService

# ── Singleton repository instances (in-memory stores) ──
_roster_repo = RosterRepository()
_assignment_repo = AssignmentRepository()
_session_repo = SessionRepository()
_history_repo = HistoryRepository()

# ── Service instances (with injected dependencies) ──
_roster_service = RosterService(
    roster_repo=_roster_repo,
    history_repo=_history_repo,
)
_leader_service = LeaderService(
    roster_repo=_roster_repo,
    assignment_repo=_assignment_repo,
    history_repo=_history_repo,
)
_training_service = TrainingService(
    session_repo=_session_repo,
    history_repo=_history_repo,
)


# ── FastAPI dependency functions ──
def get_roster_service() -> RosterService:
    return _roster_service


def get_leader_service() -> LeaderService:
    return _leader_service


def get_training_service() -> TrainingService:
    return _training_service


def get_roster_repo() -> RosterRepository:
    return _roster_repo


def get_assignment_repo() -> AssignmentRepository:
    return _assignment_repo


def get_session_repo() -> SessionRepository:
    return _session_repo


def get_history_repo() -> HistoryRepository:
    return _history_repo
