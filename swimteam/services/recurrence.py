# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Recurring training-session expansion — pure computation.

A template session plus a recurrence rule is turned into concrete, dated,
non-recurring occurrence records. Persisting them (and the template itself)
is the caller's job.
"""

from datetime import date
from typing import Callable, Iterator, NamedTuple, Optional

from swimteam.core.config import settings
from swimteam.core.exceptions import InvalidRecurrenceRule
from swimteam.core.logging import get_logger
from swimteam.models.domain import RECURRENCE_FIELDS, RecurrenceRule, TrainingSession
from swimteam.services.dates import add_days, add_months, one_year_after, week_start

logger = get_logger(__name__)

SUPPORTED_PATTERNS: tuple[str, ...] = (
    "daily",
    "weekly",
    "biweekly",
    "monthly",
    "weekly_by_weekdays",
)

_FIXED_STEP_DAYS: dict[str, int] = {"daily": 1, "weekly": 7, "biweekly": 14}


class Expansion(NamedTuple):
    occurrences: list[TrainingSession]
    degraded: bool = False


class RecurrenceExpander:
    """
    Expand a template into occurrences.

    Expansion stops at whichever comes first: the occurrence cap
    (`max_occurrences`, default 50), the rule's end date, or one year after
    `today()`. Each occurrence date is stepped from the previous one.
    """

    def __init__(
        self,
        today: Callable[[], date] = date.today,
        default_max_occurrences: Optional[int] = None,
    ) -> None:
        self._today = today
        self.default_max_occurrences = (
            settings.RECURRENCE_DEFAULT_MAX
            if default_max_occurrences is None
            else default_max_occurrences
        )

    def expand(
        self, template: TrainingSession, rule: Optional[RecurrenceRule] = None
    ) -> list[TrainingSession]:
        """Occurrences for `template`; a malformed rule yields none."""
        return self.expand_report(template, rule).occurrences

    def expand_report(
        self, template: TrainingSession, rule: Optional[RecurrenceRule] = None
    ) -> Expansion:
        """
        Like expand(), but also tells a rejected rule (`degraded=True`) apart
        from a valid rule that simply has no dates in range.
        """
        if rule is None:
            rule = template.rule()
        if rule is None:
            return Expansion([])
        try:
            dates = self.iter_dates(template.date, rule)
        except InvalidRecurrenceRule as e:
            logger.warning(
                "Recurrence rule ignored for session dated %s: %s", template.date, e
            )
            return Expansion([], degraded=True)
        return Expansion([self._occurrence(template, d) for d in dates])

    def iter_dates(self, start: date, rule: RecurrenceRule) -> Iterator[date]:
        """
        Lazily yield occurrence dates after `start`.
        The rule is validated eagerly; InvalidRecurrenceRule is raised here,
        not on first iteration.
        """
        pattern = self._pattern(rule)
        limit = self._limit(rule)
        safety = one_year_after(self._today())
        if pattern == "weekly_by_weekdays":
            return self._walk_weekdays(
                start, self._weekdays(rule), rule.end_date, limit, safety
            )
        return self._walk_stepped(start, pattern, rule.end_date, limit, safety)

    # ── Validation ──

    @staticmethod
    def _pattern(rule: RecurrenceRule) -> str:
        pattern = (rule.pattern or "").strip().lower()
        # A weekly rule that names weekdays means "these days every week".
        if pattern == "weekly" and rule.weekdays:
            pattern = "weekly_by_weekdays"
        if pattern not in SUPPORTED_PATTERNS:
            raise InvalidRecurrenceRule(f"Unknown recurrence pattern '{rule.pattern}'")
        return pattern

    def _limit(self, rule: RecurrenceRule) -> int:
        limit = (
            self.default_max_occurrences
            if rule.max_occurrences is None
            else rule.max_occurrences
        )
        if limit < 1:
            raise InvalidRecurrenceRule("max_occurrences must be at least 1")
        return limit

    @staticmethod
    def _weekdays(rule: RecurrenceRule) -> list[int]:
        if not rule.weekdays:
            raise InvalidRecurrenceRule("weekly_by_weekdays requires at least one weekday")
        weekdays: list[int] = []
        for weekday in rule.weekdays:
            if not 0 <= weekday <= 6:
                raise InvalidRecurrenceRule(
                    f"Weekday {weekday} out of range (0=Sunday .. 6=Saturday)"
                )
            if weekday not in weekdays:
                weekdays.append(weekday)
        return weekdays

    # ── Walks ──

    @staticmethod
    def _walk_stepped(
        start: date,
        pattern: str,
        end_date: Optional[date],
        limit: int,
        safety: date,
    ) -> Iterator[date]:
        current = start
        count = 0
        while count < limit:
            if pattern == "monthly":
                current = add_months(current, 1)
            else:
                current = add_days(current, _FIXED_STEP_DAYS[pattern])
            if end_date is not None and current > end_date:
                return
            if current > safety:
                return
            yield current
            count += 1

    @staticmethod
    def _walk_weekdays(
        start: date,
        weekdays: list[int],
        end_date: Optional[date],
        limit: int,
        safety: date,
    ) -> Iterator[date]:
        """
        Weekdays are visited in the order given, and the first candidate past
        `end_date` ends the walk. With weekdays=[5, 1] a Friday beyond the end
        date stops the walk before the following Monday is considered.
        """
        week = week_start(start)
        count = 0
        while True:
            for weekday in weekdays:
                candidate = add_days(week, weekday)
                # the template already occupies its own date
                if candidate <= start:
                    continue
                if end_date is not None and candidate > end_date:
                    return
                if candidate > safety:
                    return
                yield candidate
                count += 1
                if count >= limit:
                    return
            week = add_days(week, 7)

    # ── Records ──

    @staticmethod
    def _occurrence(template: TrainingSession, on: date) -> TrainingSession:
        return template.model_copy(
            deep=True,
            update={
                "id": None,
                "date": on,
                "is_recurring": False,
                **dict.fromkeys(RECURRENCE_FIELDS),
            },
        )
