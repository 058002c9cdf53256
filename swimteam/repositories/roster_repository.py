# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Roster data access.
Encapsulates all read/write operations on the roster in-memory store.
NO business rules here — pure CRUD.
"""

from typing import Optional

from swimteam.models.domain import RosterMember


class RosterRepository:
    """In-memory roster storage. Owns member id assignment."""

    def __init__(self) -> None:
        self._store: dict[int, RosterMember] = {}
        self._next_id = 1

    # ── Read ──

    def get_all(self) -> list[RosterMember]:
        """Roster snapshot sorted by rotation order, then id."""
        return sorted(self._store.values(), key=lambda m: (m.order, m.id))

    def get(self, member_id: int) -> Optional[RosterMember]:
        return self._store.get(member_id)

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def add(self, name: str, order: int) -> RosterMember:
        member = RosterMember(id=self._next_id, name=name, order=order)
        self._next_id += 1
        self._store[member.id] = member
        return member

    def save(self, member: RosterMember) -> None:
        self._store[member.id] = member

    def delete(self, member_id: int) -> Optional[RosterMember]:
        return self._store.pop(member_id, None)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()
        self._next_id = 1
