# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Scheduling error taxonomy.
Local, synchronous failures reported to the immediate caller. The HTTP
layer maps ValueError subclasses to 400 and KeyError subclasses to 404.
"""


class SchedulingError(Exception):
    """Base class for every scheduling failure."""


class EmptyRosterError(SchedulingError, ValueError):
    """Raised when a rotation is requested over zero roster members."""

    def __init__(self, message: str = "Roster is empty; cannot build a leader rotation") -> None:
        super().__init__(message)


class UnknownMemberError(SchedulingError, KeyError):
    """Raised when the rotation pivot member is not part of the roster."""

    def __init__(self, member_id: int) -> None:
        self.member_id = member_id
        super().__init__(f"Roster member {member_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class InvalidRecurrenceRule(SchedulingError, ValueError):
    """Raised for a malformed recurrence rule. The expander degrades it to a no-op."""
