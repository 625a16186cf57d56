from __future__ import annotations

import datetime as dt
from typing import Sequence

from .business_calendar import weekdays_between
from .task_models import Position, Tick


class LayoutResolutionError(Exception):
    """Raised when a date cannot be placed on the tick table (date range computed wrongly)."""


def resolve_position(ticks: Sequence[Tick], start: dt.datetime, end: dt.datetime) -> Position:
    """
    Resolve the pixel interval covering [start, end] on the given tick table.

    The bar is `span` business days wide, where a span under one day still
    takes one day. A start aligned with a tick begins at that tick; otherwise
    x1 is extrapolated backwards from the first tick that starts after it.
    """

    span = weekdays_between(start, end)
    if span < 1:
        span = 1

    start_day = start.date()
    for tick in ticks:
        if tick.start_date == start_day:
            x1 = tick.x1
            return Position(x1=x1, x2=x1 + tick.day_width * span)
        if tick.start_date > start_day:
            days_adj = weekdays_between(start_day, tick.start_date) + 1
            x1 = tick.x1 - tick.day_width * days_adj
            return Position(x1=x1, x2=x1 + tick.day_width * span)

    raise LayoutResolutionError(f"Cannot determine position for {start} - {end}")
