import datetime as dt

import pytest

from gantt_timeline.business_calendar import advance, snap_forward_past_weekend, weekdays_between

MONDAY = dt.date(2024, 1, 1)


def _naive_weekdays(start: dt.date, end: dt.date) -> int:
    return sum(1 for n in range((end - start).days) if (start + dt.timedelta(days=n)).weekday() < 5)


@pytest.mark.parametrize("weeks", range(6))
def test_weekdays_between_mondays_counts_five_per_week(weeks):
    later = MONDAY + dt.timedelta(weeks=weeks)

    assert weekdays_between(MONDAY, later) == (later - MONDAY).days // 7 * 5


@pytest.mark.parametrize("offset", range(7))
def test_weekdays_between_same_day_is_zero(offset):
    day = MONDAY + dt.timedelta(days=offset)

    assert weekdays_between(day, day) == 0


def test_weekdays_between_matches_day_by_day_scan():
    for start_offset in range(14):
        start = MONDAY + dt.timedelta(days=start_offset)
        for length in range(22):
            end = start + dt.timedelta(days=length)
            assert weekdays_between(start, end) == _naive_weekdays(start, end), (start, end)


def test_weekdays_between_ignores_time_of_day():
    start = dt.datetime(2024, 1, 1, 17, 30)
    end = dt.datetime(2024, 1, 3, 8, 0)

    assert weekdays_between(start, end) == 2


def test_weekdays_between_across_weekend():
    friday = dt.date(2024, 1, 5)
    saturday = dt.date(2024, 1, 6)
    next_monday = dt.date(2024, 1, 8)

    assert weekdays_between(friday, next_monday) == 1
    assert weekdays_between(saturday, next_monday) == 0


def test_snap_forward_moves_weekend_to_monday_and_keeps_time():
    saturday = dt.datetime(2024, 1, 6, 10, 15)
    sunday = dt.datetime(2024, 1, 7, 10, 15)

    assert snap_forward_past_weekend(saturday) == dt.datetime(2024, 1, 8, 10, 15)
    assert snap_forward_past_weekend(sunday) == dt.datetime(2024, 1, 8, 10, 15)


def test_snap_forward_leaves_weekdays_alone():
    for offset in range(5):
        day = dt.datetime(2024, 1, 1, 9) + dt.timedelta(days=offset)
        assert snap_forward_past_weekend(day) == day


def test_advance_by_zero_is_identity_on_weekdays():
    wednesday = dt.datetime(2024, 1, 3, 9, 0)

    assert advance(wednesday, 0) == wednesday


def test_advance_is_strictly_increasing_and_skips_weekends():
    start = dt.datetime(2024, 1, 3, 9, 0)
    results = [advance(start, n) for n in range(16)]

    assert all(earlier < later for earlier, later in zip(results, results[1:]))
    assert all(result.weekday() < 5 for result in results)


def test_advance_from_friday_lands_on_monday():
    friday = dt.datetime(2024, 1, 5, 9, 0)

    assert advance(friday, 1) == dt.datetime(2024, 1, 8, 9, 0)
    assert advance(friday, 5) == dt.datetime(2024, 1, 12, 9, 0)


def test_advance_adds_fraction_as_minutes():
    monday = dt.datetime(2024, 1, 1)

    assert advance(monday, 1.5) == dt.datetime(2024, 1, 2, 12, 0)
    assert advance(monday, 0.25) == dt.datetime(2024, 1, 1, 6, 0)


def test_advance_snaps_again_when_fraction_reaches_weekend():
    friday_evening = dt.datetime(2024, 1, 5, 18, 0)

    assert advance(friday_evening, 0.5) == dt.datetime(2024, 1, 8, 6, 0)


def test_advance_is_monotonic_in_fractional_days():
    start = dt.datetime(2024, 1, 4, 12, 0)
    results = [advance(start, quarter / 4) for quarter in range(21)]

    assert all(earlier <= later for earlier, later in zip(results, results[1:]))
    assert all(result.weekday() < 5 for result in results)


def test_advance_accepts_plain_dates():
    assert advance(dt.date(2024, 1, 5), 1) == dt.datetime(2024, 1, 8)
