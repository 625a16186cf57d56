from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Literal


FontId = Literal["timeline", "bar", "date"]
"""Font slots used for text measurement: header labels, task labels, date-range labels."""

TextMeasurer = Callable[[str, FontId], int]
"""Returns the rendered width in pixels of a string drawn in a font slot."""


@dataclass(frozen=True)
class Task:
    """A single task row; a task without duration_hours is a milestone."""

    id: str
    title: str
    start: datetime
    end: datetime
    duration_hours: int | None = None
    effort_hours: int | None = None
    completed: str = ""
    assigned: str = ""

    @property
    def is_milestone(self) -> bool:
        """Milestones carry no duration and render as a point."""
        return self.duration_hours is None

    @property
    def depth(self) -> int:
        """Hierarchy depth, i.e. the number of dot-separated id segments."""
        return len(self.id.split("."))


@dataclass(frozen=True)
class DateRange:
    """Chart window: earliest start up to (exclusive) the day after the latest end."""

    start: datetime
    end: datetime
    business_days: int


@dataclass(frozen=True)
class Tick:
    """
    One calendar cell of the timeline.

    x1/x2 are inclusive pixel bounds relative to the drawable origin, so the
    next tick starts at x2 + 1. day_span is the nominal number of business
    days covered.
    """

    x1: int
    x2: int
    start_date: date
    day_span: int

    @property
    def pixel_width(self) -> int:
        return self.x2 - self.x1 + 1

    @property
    def day_width(self) -> int:
        """Pixels per business day inside this tick."""
        return self.pixel_width // self.day_span


@dataclass(frozen=True)
class Position:
    x1: int
    x2: int


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class TextAnchor:
    """Baseline-anchored text placement."""

    x: float
    y: float
    text: str
    font: FontId


@dataclass(frozen=True)
class TaskLayout:
    """Placed geometry for one task: a bar or a milestone point, plus its two labels."""

    task: Task
    position: Position
    label: TextAnchor
    dates: TextAnchor
    bar: Rect | None = None
    marker: Point | None = None


@dataclass(frozen=True)
class TimelineHeader:
    band: Rect
    labels: list[TextAnchor] = field(default_factory=list)
    tick_xs: list[int] = field(default_factory=list)
    tick_top: float = 0
    tick_bottom: float = 0
    grid_bottom: float = 0


@dataclass(frozen=True)
class TodayMarker:
    """Elapsed-time bar: `position` pixels of whole days plus a partial-day segment."""

    x: float
    y: float
    position: int
    portion: int
    height: float


@dataclass(frozen=True)
class ChartLayout:
    """Everything the renderer needs, in canvas pixel coordinates."""

    width: int
    height: int
    chart_width: int
    day_width: int
    date_range: DateRange
    ticks: list[Tick]
    header: TimelineHeader
    today: TodayMarker
    tasks: list[TaskLayout] = field(default_factory=list)
