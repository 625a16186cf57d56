from __future__ import annotations

import datetime as dt


MINUTES_PER_DAY = 1440
BUSINESS_DAYS_PER_WEEK = 5
SATURDAY = 5
SUNDAY = 6


def weekdays_between(start: dt.date, end: dt.date) -> int:
    """
    Count business days (Mon-Fri) in the half-open range [start, end).

    Both dates are moved back to the Sunday opening their week; whole weeks
    contribute five days each and the weekday offsets of the two boundaries
    correct the total. Sunday has offset 0 but, like Monday, has no business
    days before it in the week, so a Sunday boundary is corrected by one.
    Time of day is ignored.

    `end` earlier than `start` is not supported and yields a negative count.
    """

    start_day = _as_date(start)
    end_day = _as_date(end)

    offset = -_sunday_offset(start_day)
    if start_day.weekday() == SUNDAY:
        offset -= 1
    week_start = start_day - dt.timedelta(days=_sunday_offset(start_day))

    offset += _sunday_offset(end_day)
    if end_day.weekday() == SUNDAY:
        offset += 1
    week_end = end_day - dt.timedelta(days=_sunday_offset(end_day))

    weeks = (week_end - week_start).days // 7
    return weeks * BUSINESS_DAYS_PER_WEEK + offset


def snap_forward_past_weekend(value: dt.datetime) -> dt.datetime:
    """
    Move a weekend timestamp forward to Monday, keeping the time of day.

    Saturday steps one day onto Sunday, which then steps one more day; a
    Sunday steps a single day.
    """

    if value.weekday() == SATURDAY:
        value = value + dt.timedelta(days=1)
    if value.weekday() == SUNDAY:
        value = value + dt.timedelta(days=1)
    return value


def advance(value: dt.datetime, business_days: float) -> dt.datetime:
    """
    Advance `value` by a possibly fractional number of business days.

    Whole days are stepped one at a time, snapping past weekends after each
    step. The fractional remainder is added as whole minutes of a 24 hour
    day, followed by one more weekend snap.
    """

    current = _as_datetime(value)
    whole_days = int(business_days)
    for _ in range(whole_days):
        current = snap_forward_past_weekend(current + dt.timedelta(days=1))

    minutes = int(MINUTES_PER_DAY * (business_days - whole_days))
    return snap_forward_past_weekend(current + dt.timedelta(minutes=minutes))


def is_weekend(value: dt.date) -> bool:
    return value.weekday() >= SATURDAY


def _sunday_offset(day: dt.date) -> int:
    # Days since the preceding Sunday (Sunday itself is 0).
    return (day.weekday() + 1) % 7


def _as_date(value: dt.date) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def _as_datetime(value: dt.date) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value
    return dt.datetime.combine(value, dt.time())
