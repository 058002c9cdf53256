# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Roster management — business logic for the leader roster.
Keeps member `order` values dense (1..n) after every structural change.
"""

import json
from pathlib import Path
from typing import Any, Optional

from swimteam.core.logging import get_logger
from swimteam.metrics.prometheus import ROSTER_SIZE
from swimteam.models.domain import RosterMember
from swimteam.repositories.history_repository import HistoryRepository
from swimteam.repositories.roster_repository import RosterRepository

logger = get_logger(__name__)


class RosterService:
    """Business logic for the ordered leader roster."""

    def __init__(
        self,
        roster_repo: RosterRepository,
        history_repo: HistoryRepository,
    ) -> None:
        self._roster = roster_repo
        self._history = history_repo

    # ── Commands ──

    def add_member(self, name: str, position: Optional[int] = None) -> dict[str, Any]:
        """
        Add a member at a 1-based rotation position (appended when omitted).
        Members at or after that position move down one place.
        """
        name = name.strip()
        if not name:
            raise ValueError("Member name must not be blank")
        members = self._roster.get_all()
        member = self._roster.add(name, order=len(members) + 1)
        if position is None or position > len(members):
            members.append(member)
        else:
            members.insert(max(position, 1) - 1, member)
        self._renumber(members)

        self._history.record_event(
            "roster_member_added", "roster", {"member_id": member.id, "name": name}
        )
        logger.info(
            "Roster member added: id=%d, name=%s", member.id, name,
            extra={"member_id": member.id, "scope": "roster"},
        )
        return self.get_member(member.id)

    def update_member(
        self,
        member_id: int,
        name: Optional[str] = None,
        position: Optional[int] = None,
    ) -> dict[str, Any]:
        """Rename a member and/or move it to another 1-based position. Raises KeyError."""
        member = self._require(member_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValueError("Member name must not be blank")
            member = member.model_copy(update={"name": name})
            self._roster.save(member)
        if position is not None:
            members = [m for m in self._roster.get_all() if m.id != member_id]
            members.insert(min(max(position, 1), len(members) + 1) - 1, member)
            self._renumber(members)
        self._history.record_event(
            "roster_member_updated",
            "roster",
            {"member_id": member_id, "name": name, "position": position},
        )
        return self.get_member(member_id)

    def remove_member(self, member_id: int) -> dict[str, Any]:
        """Remove a member; existing assignments keep their member id. Raises KeyError."""
        member = self._require(member_id)
        self._roster.delete(member_id)
        self._renumber(self._roster.get_all())
        self._history.record_event(
            "roster_member_removed", "roster", {"member_id": member_id, "name": member.name}
        )
        logger.info("Roster member removed: id=%d", member_id)
        return {"status": "deleted", "member_id": member_id}

    def reorder(self, from_id: int, to_id: int) -> list[dict[str, Any]]:
        """Move `from_id` into the rotation position currently held by `to_id`."""
        moving = self._require(from_id)
        target = self._require(to_id)
        members = self._roster.get_all()
        target_index = [m.id for m in members].index(target.id)
        members = [m for m in members if m.id != moving.id]
        members.insert(target_index, moving)
        self._renumber(members)
        self._history.record_event(
            "roster_reordered", "roster", {"from_id": from_id, "to_id": to_id}
        )
        logger.info("Roster reordered: member %d moved to position %d", from_id, target_index + 1)
        return self.list_members()

    # ── Queries ──

    def list_members(self) -> list[dict[str, Any]]:
        return [m.model_dump() for m in self._roster.get_all()]

    def get_member(self, member_id: int) -> dict[str, Any]:
        return self._require(member_id).model_dump()

    # ── Seed ──

    def seed_from_file(self, path: str) -> int:
        """
        Load the initial roster from a JSON list of names (or {"name": ...}
        objects). Only runs against an empty roster.
        """
        if self._roster.count() > 0:
            return 0
        names = self._seed_names(json.loads(Path(path).read_text(encoding="utf-8")))
        for name in names:
            self._roster.add(name, order=self._roster.count() + 1)
        ROSTER_SIZE.set(self._roster.count())
        self._history.record_event(
            "roster_seeded", "roster", {"members_count": len(names), "source": path}
        )
        logger.info("Seeded %d roster members from %s", len(names), path)
        return len(names)

    # ── Internal ──

    @staticmethod
    def _seed_names(entries: Any) -> list[str]:
        """Validate the whole seed up front so a bad entry adds nobody."""
        if not isinstance(entries, list):
            raise ValueError("Roster seed must be a JSON list")
        names: list[str] = []
        for index, entry in enumerate(entries):
            raw = entry.get("name") if isinstance(entry, dict) else entry
            if not isinstance(raw, str) or not 1 <= len(raw.strip()) <= 255:
                raise ValueError(f"Roster seed entry {index} has no usable name")
            names.append(raw.strip())
        return names

    def _require(self, member_id: int) -> RosterMember:
        member = self._roster.get(member_id)
        if member is None:
            raise KeyError(f"Roster member {member_id} not found")
        return member

    def _renumber(self, members: list[RosterMember]) -> None:
        for index, member in enumerate(members, start=1):
            current = self._roster.get(member.id) or member
            if current.order != index:
                self._roster.save(current.model_copy(update={"order": index}))
        ROSTER_SIZE.set(self._roster.count())
