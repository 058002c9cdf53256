# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the leader rotation engine and the shared date-window helpers.
Pure computation — no HTTP, no storage.
"""

from datetime import date, timedelta

import pytest

from swimteam.core.exceptions import EmptyRosterError, UnknownMemberError
from swimteam.models.domain import Assignment, RosterMember
from swimteam.services.dates import (
    add_months,
    iter_windows,
    js_weekday,
    month_bounds,
    one_year_after,
    parse_date,
    week_start,
    windows_intersect,
)
from swimteam.services.rotation import (
    ActiveAssignmentIndex,
    RotationScheduler,
    order_roster,
)

A = RosterMember(id=1, name="A", order=1)
B = RosterMember(id=2, name="B", order=2)
C = RosterMember(id=3, name="C", order=3)


@pytest.fixture
def roster():
    # unsorted; the scheduler orders by (order, id)
    return [C, A, B]


@pytest.fixture
def scheduler():
    return RotationScheduler(window_days=3)


def summarize(assignments):
    return [(a.member_id, a.start_date, a.end_date) for a in assignments]


def assert_tiles(assignments, start, horizon_end):
    assert assignments[0].start_date == start
    assert assignments[-1].end_date == horizon_end
    for prev, nxt in zip(assignments, assignments[1:]):
        assert nxt.start_date == prev.end_date + timedelta(days=1)
    for a in assignments:
        assert a.start_date <= a.end_date


# ============================================
# Date helpers
# ============================================
class TestDates:
    def test_parse_date_accepts_iso_string(self):
        assert parse_date("2025-06-02") == date(2025, 6, 2)

    def test_parse_date_passes_dates_through(self):
        assert parse_date(date(2025, 6, 2)) == date(2025, 6, 2)

    def test_parse_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_date("06/02/2025")
        with pytest.raises(ValueError):
            parse_date(20250602)

    def test_add_months_keeps_day(self):
        assert add_months(date(2025, 6, 15), 1) == date(2025, 7, 15)

    def test_add_months_clamps_short_month(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2025, 3, 31), 1) == date(2025, 4, 30)

    def test_add_months_crosses_year(self):
        assert add_months(date(2025, 12, 10), 1) == date(2026, 1, 10)
        assert add_months(date(2025, 11, 30), 14) == date(2027, 1, 30)

    def test_one_year_after_leap_day(self):
        assert one_year_after(date(2024, 2, 29)) == date(2025, 2, 28)

    def test_js_weekday_sunday_is_zero(self):
        assert js_weekday(date(2025, 6, 1)) == 0  # Sunday
        assert js_weekday(date(2025, 6, 2)) == 1  # Monday
        assert js_weekday(date(2025, 6, 7)) == 6  # Saturday

    def test_week_start_is_sunday(self):
        assert week_start(date(2025, 6, 4)) == date(2025, 6, 1)
        assert week_start(date(2025, 6, 1)) == date(2025, 6, 1)
        assert week_start(date(2025, 6, 7)) == date(2025, 6, 1)

    def test_month_bounds(self):
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_month_bounds_invalid_month(self):
        with pytest.raises(ValueError):
            month_bounds(2025, 13)

    def test_windows_intersect_closed_intervals(self):
        d = date(2025, 6, 2)
        assert windows_intersect(d, d, d, d)
        assert windows_intersect(d, d + timedelta(2), d + timedelta(2), d + timedelta(5))
        assert not windows_intersect(d, d + timedelta(1), d + timedelta(2), d + timedelta(5))

    def test_iter_windows_truncates_last(self):
        windows = list(iter_windows(date(2025, 6, 2), 3, date(2025, 6, 6)))
        assert windows == [
            (date(2025, 6, 2), date(2025, 6, 4)),
            (date(2025, 6, 5), date(2025, 6, 6)),
        ]

    def test_iter_windows_rejects_zero_length(self):
        with pytest.raises(ValueError):
            list(iter_windows(date(2025, 6, 2), 0, date(2025, 6, 6)))


# ============================================
# generate
# ============================================
class TestGenerate:
    def test_concrete_rotation(self, scheduler, roster):
        result = scheduler.generate(roster, date(2025, 6, 2), date(2025, 6, 11))
        assert summarize(result) == [
            (1, date(2025, 6, 2), date(2025, 6, 4)),
            (2, date(2025, 6, 5), date(2025, 6, 7)),
            (3, date(2025, 6, 8), date(2025, 6, 10)),
            (1, date(2025, 6, 11), date(2025, 6, 11)),
        ]

    def test_new_assignments_are_active_without_ids(self, scheduler, roster):
        result = scheduler.generate(roster, date(2025, 6, 2), date(2025, 6, 11))
        assert all(a.is_active for a in result)
        assert all(a.id is None for a in result)

    @pytest.mark.parametrize("window_days", [1, 2, 3, 5, 7])
    @pytest.mark.parametrize("horizon_days", [0, 1, 9, 30, 364])
    def test_windows_tile_horizon(self, roster, window_days, horizon_days):
        start = date(2025, 6, 2)
        horizon_end = start + timedelta(days=horizon_days)
        result = RotationScheduler().generate(roster, start, horizon_end, window_days)
        assert_tiles(result, start, horizon_end)
        assert all(
            (a.end_date - a.start_date).days + 1 <= window_days for a in result
        )

    def test_deterministic(self, scheduler, roster):
        args = (date(2025, 6, 2), date(2025, 12, 31))
        first = scheduler.generate(roster, *args)
        second = scheduler.generate(list(reversed(roster)), *args)
        assert summarize(first) == summarize(second)

    def test_cyclic_fairness(self, scheduler, roster):
        k = 4
        start = date(2025, 6, 2)
        horizon_end = start + timedelta(days=3 * len(roster) * k - 1)
        result = scheduler.generate(roster, start, horizon_end)
        counts = {}
        for a in result:
            counts[a.member_id] = counts.get(a.member_id, 0) + 1
        assert counts == {1: k, 2: k, 3: k}

    def test_order_ties_broken_by_id(self, scheduler):
        tied = [
            RosterMember(id=9, name="late", order=1),
            RosterMember(id=4, name="early", order=1),
            RosterMember(id=2, name="last", order=2),
        ]
        result = scheduler.generate(tied, date(2025, 6, 2), date(2025, 6, 10))
        assert [a.member_id for a in result] == [4, 9, 2]
        assert [m.id for m in order_roster(tied)] == [4, 9, 2]

    def test_roster_size_may_change_between_calls(self, scheduler, roster):
        d = RosterMember(id=4, name="D", order=4)
        start, end = date(2025, 6, 2), date(2025, 6, 13)
        small = scheduler.generate(roster, start, end)
        large = scheduler.generate(roster + [d], start, end)
        assert [a.member_id for a in small] == [1, 2, 3, 1]
        assert [a.member_id for a in large] == [1, 2, 3, 4]

    def test_default_window_from_settings(self, roster):
        result = RotationScheduler().generate(roster, date(2025, 6, 2), date(2025, 6, 4))
        assert len(result) == 1

    def test_horizon_before_start_is_empty(self, scheduler, roster):
        assert scheduler.generate(roster, date(2025, 6, 2), date(2025, 6, 1)) == []

    def test_empty_roster_raises(self, scheduler):
        with pytest.raises(EmptyRosterError):
            scheduler.generate([], date(2025, 6, 2), date(2025, 6, 11))

    def test_empty_roster_is_a_value_error(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.generate([], date(2025, 6, 2), date(2025, 6, 11))

    def test_zero_window_raises(self, scheduler, roster):
        with pytest.raises(ValueError):
            scheduler.generate(roster, date(2025, 6, 2), date(2025, 6, 11), window_days=0)


# ============================================
# set_from_date
# ============================================
class TestSetFromDate:
    def test_pivot_member_leads_first(self, scheduler, roster):
        result = scheduler.set_from_date(
            roster, date(2025, 7, 1), member_id=2, horizon_end=date(2025, 7, 12)
        )
        assert result[0].member_id == 2
        assert result[0].start_date == date(2025, 7, 1)
        assert [a.member_id for a in result] == [2, 3, 1, 2]

    def test_pivot_on_last_member_wraps(self, scheduler, roster):
        result = scheduler.set_from_date(
            roster, date(2025, 7, 1), member_id=3, horizon_end=date(2025, 7, 9)
        )
        assert [a.member_id for a in result] == [3, 1, 2]

    def test_pivot_tiles_horizon(self, scheduler, roster):
        start, end = date(2025, 7, 1), date(2025, 9, 30)
        result = scheduler.set_from_date(roster, start, 1, end)
        assert_tiles(result, start, end)

    def test_unknown_member_raises(self, scheduler, roster):
        with pytest.raises(UnknownMemberError) as exc_info:
            scheduler.set_from_date(roster, date(2025, 7, 1), 99, date(2025, 7, 12))
        assert exc_info.value.member_id == 99
        assert "99" in str(exc_info.value)

    def test_unknown_member_is_a_key_error(self, scheduler, roster):
        with pytest.raises(KeyError):
            scheduler.set_from_date(roster, date(2025, 7, 1), 99, date(2025, 7, 12))

    def test_empty_roster_checked_before_member(self, scheduler):
        with pytest.raises(EmptyRosterError):
            scheduler.set_from_date([], date(2025, 7, 1), 1, date(2025, 7, 12))


# ============================================
# superseded
# ============================================
class TestSuperseded:
    @pytest.fixture
    def existing(self):
        return [
            Assignment(id=1, member_id=1, start_date=date(2025, 6, 2), end_date=date(2025, 6, 4)),
            Assignment(id=2, member_id=2, start_date=date(2025, 6, 5), end_date=date(2025, 6, 7)),
            Assignment(id=3, member_id=3, start_date=date(2025, 6, 8), end_date=date(2025, 6, 10)),
            Assignment(
                id=4, member_id=1, start_date=date(2025, 6, 8), end_date=date(2025, 6, 10),
                is_active=False,
            ),
        ]

    def test_windows_from_start_onwards(self, existing):
        assert RotationScheduler.superseded(existing, date(2025, 6, 8)) == [3]

    def test_window_straddling_start_is_superseded(self, existing):
        assert RotationScheduler.superseded(existing, date(2025, 6, 6)) == [2, 3]

    def test_full_reset_supersedes_every_active(self, existing):
        assert RotationScheduler.superseded(existing, date(2025, 12, 1), full_reset=True) == [1, 2, 3]

    def test_inactive_never_reactivated_or_listed(self, existing):
        assert 4 not in RotationScheduler.superseded(existing, date(2025, 1, 1), full_reset=True)


# ============================================
# resolve
# ============================================
class TestResolve:
    @pytest.fixture
    def generation(self, scheduler, roster):
        result = scheduler.generate(roster, date(2025, 6, 2), date(2025, 6, 11))
        return [a.model_copy(update={"id": i}) for i, a in enumerate(result, start=1)]

    @pytest.mark.parametrize(
        "day, expected",
        [
            (date(2025, 6, 2), 1),
            (date(2025, 6, 4), 1),
            (date(2025, 6, 5), 2),
            (date(2025, 6, 10), 3),
            (date(2025, 6, 11), 1),
        ],
    )
    def test_resolves_covering_member(self, generation, day, expected):
        assert RotationScheduler.resolve(generation, day) == expected

    def test_outside_coverage_is_none(self, generation):
        assert RotationScheduler.resolve(generation, date(2025, 6, 1)) is None
        assert RotationScheduler.resolve(generation, date(2025, 6, 12)) is None

    def test_inactive_assignments_ignored(self, generation):
        generation[1] = generation[1].model_copy(update={"is_active": False})
        assert RotationScheduler.resolve(generation, date(2025, 6, 6)) is None

    def test_empty_input(self):
        assert RotationScheduler.resolve([], date(2025, 6, 6)) is None

    def test_index_only_holds_active(self, generation):
        generation[0] = generation[0].model_copy(update={"is_active": False})
        index = ActiveAssignmentIndex(generation)
        assert len(index) == 3
        assert index.lookup(date(2025, 6, 2)) is None
        assert index.lookup(date(2025, 6, 7)).member_id == 2
