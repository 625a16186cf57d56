import datetime as dt

import pytest

from gantt_timeline.ticks import generate_ticks

ANCHOR = dt.datetime(2024, 1, 1, 9, 0)


def test_daily_ticks_cover_each_business_day():
    ticks = generate_ticks(ANCHOR, drawable_width=500, business_days=5, granularity=1)

    assert [tick.x1 for tick in ticks] == [0, 100, 200, 300, 400, 500]
    assert [tick.x2 for tick in ticks] == [99, 199, 299, 399, 499, 599]
    assert [tick.start_date for tick in ticks] == [dt.date(2024, 1, day) for day in (1, 2, 3, 4, 5, 8)]
    assert all(tick.day_span == 1 and tick.day_width == 100 for tick in ticks)


@pytest.mark.parametrize("width", [500, 640, 992, 1000])
def test_daily_tick_count_matches_span_within_one(width):
    ticks = generate_ticks(ANCHOR, drawable_width=width, business_days=5, granularity=1)

    assert len(ticks) in (5, 6)


def test_ticks_are_contiguous_and_dates_increase():
    ticks = generate_ticks(ANCHOR, drawable_width=992, business_days=5, granularity=1)

    for current, following in zip(ticks, ticks[1:]):
        assert current.x2 + 1 == following.x1
        assert current.start_date < following.start_date
    assert ticks[-1].start_date == dt.date(2024, 1, 8)


def test_multi_day_ticks_skip_weekends():
    ticks = generate_ticks(ANCHOR, drawable_width=1000, business_days=10, granularity=2)

    assert [tick.x1 for tick in ticks] == [0, 200, 400, 600, 800, 1000]
    assert [tick.start_date for tick in ticks] == [
        dt.date(2024, 1, 1),
        dt.date(2024, 1, 3),
        dt.date(2024, 1, 5),
        dt.date(2024, 1, 9),
        dt.date(2024, 1, 11),
        dt.date(2024, 1, 15),
    ]
    assert all(tick.day_span == 2 and tick.day_width == 100 for tick in ticks)


def test_weekend_anchor_is_followed_by_monday():
    saturday = dt.datetime(2024, 1, 6, 9, 0)

    ticks = generate_ticks(saturday, drawable_width=500, business_days=5, granularity=1)

    assert ticks[0].start_date == dt.date(2024, 1, 6)
    assert ticks[1].start_date == dt.date(2024, 1, 8)


def test_granularity_below_one_is_rejected():
    with pytest.raises(ValueError):
        generate_ticks(ANCHOR, drawable_width=500, business_days=5, granularity=0)


def test_width_narrower_than_span_is_rejected():
    with pytest.raises(ValueError):
        generate_ticks(ANCHOR, drawable_width=4, business_days=5, granularity=1)


@pytest.mark.parametrize(
    "granularity, days",
    [(2, [1, 3, 5, 9]), (3, [1, 4, 9])],
)
def test_trailing_tick_starts_past_the_last_business_day(granularity, days):
    ticks = generate_ticks(ANCHOR, drawable_width=500, business_days=5, granularity=granularity)

    assert [tick.start_date for tick in ticks] == [dt.date(2024, 1, day) for day in days]
    assert ticks[-1].x1 >= 500
