from __future__ import annotations

import datetime as dt
import logging

from .business_calendar import advance, weekdays_between
from .task_models import Tick


logger = logging.getLogger(__name__)


def generate_ticks(
    anchor: dt.datetime,
    drawable_width: int,
    business_days: int,
    granularity: int = 1,
) -> list[Tick]:
    """
    Build the tick table for a timeline `drawable_width` pixels wide.

    - One business day is `drawable_width // business_days` pixels.
    - Every tick covers `granularity` business days; the first starts at the
      anchor's date and pixel 0.
    - Ticks are emitted left to right until the pixel cursor passes the
      drawable width and a tick starts past the last business day of the
      span, so every start inside the span has a tick at or after it. The
      trailing tick runs past the right edge.
    """

    if granularity < 1:
        raise ValueError(f"tick granularity must be at least 1 business day, got {granularity}")
    if business_days < 1:
        raise ValueError(f"business day span must be positive, got {business_days}")

    day_width = drawable_width // business_days
    if day_width < 1:
        raise ValueError(
            f"chart is too narrow: {drawable_width}px cannot hold {business_days} business days"
        )

    step = day_width * granularity
    current = anchor
    ticks = [Tick(x1=0, x2=step - 1, start_date=anchor.date(), day_span=granularity)]

    cursor = step
    while cursor < drawable_width or weekdays_between(anchor, current) < business_days:
        current = advance(current, granularity)
        ticks.append(Tick(x1=cursor, x2=cursor + step - 1, start_date=current.date(), day_span=granularity))
        cursor += step

    logger.debug(
        "Generated %d ticks (%d px/day, %d day(s)/tick) from %s",
        len(ticks),
        day_width,
        granularity,
        ticks[0].start_date,
    )
    return ticks
