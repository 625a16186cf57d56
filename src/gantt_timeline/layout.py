from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable

from .business_calendar import MINUTES_PER_DAY, is_weekend, weekdays_between
from .chart_style import ChartStyle
from .filtering import filter_tasks
from .positions import LayoutResolutionError, resolve_position
from .task_models import (
    ChartLayout,
    DateRange,
    Point,
    Position,
    Rect,
    Task,
    TaskLayout,
    TextAnchor,
    TextMeasurer,
    Tick,
    TimelineHeader,
    TodayMarker,
)
from .ticks import generate_ticks


logger = logging.getLogger(__name__)

WIDEST_DATE_LABEL = "May 22 - May 22"
"""Sample date-range label used to reserve room right of the chart when width is automatic."""


class InputParseError(Exception):
    """Raised when an input row holds a malformed timestamp or numeric field."""

    def __init__(self, row: int, field: str, value: str, reason: str | None = None) -> None:
        self.row = row
        self.field = field
        self.value = value
        self.reason = reason
        message = f"unable to parse '{field}' of row {row} ({value!r})"
        if reason:
            message = f"{message} - {reason}"
        super().__init__(message)


class EmptyDatasetError(Exception):
    """Raised when no task is left to chart after filtering."""


@dataclass(frozen=True)
class RenderOptions:
    """Caller-supplied chart parameters; a width or height of 0 means automatic."""

    width: int = 0
    height: int = 0
    granularity: int = 1
    max_depth: int = 2
    zoom: str = ""


def build_layout(
    tasks: Iterable[Task],
    options: RenderOptions,
    measure_text: TextMeasurer,
    style: ChartStyle | None = None,
    today: dt.datetime | None = None,
) -> ChartLayout:
    """
    Lay out a chart for the given tasks.

    - Filters by depth and zoom, then derives the date window from what is left.
    - Builds the tick table once and resolves every task against it, in input order.
    - Places the header labels, the "today" marker and each task row.
    """

    style = style or ChartStyle()
    today = today or dt.datetime.now()

    all_tasks = list(tasks)
    selected = filter_tasks(all_tasks, options.max_depth, options.zoom)
    logger.debug(
        "Kept %d of %d task(s) (max depth %d, zoom %r)",
        len(selected),
        len(all_tasks),
        options.max_depth,
        options.zoom,
    )
    if not selected:
        raise EmptyDatasetError("no tasks left to chart after filtering")

    date_range = compute_date_range(selected)
    logger.debug(
        "Date range %s - %s spans %d business day(s)",
        date_range.start,
        date_range.end,
        date_range.business_days,
    )

    chart_width, canvas_width = _resolve_width(options, style, measure_text)
    canvas_height = options.height or _auto_height(len(selected), style)
    drawable_width = chart_width - style.padding * 2

    ticks = generate_ticks(date_range.start, drawable_width, date_range.business_days, options.granularity)
    day_width = drawable_width // date_range.business_days

    header = _layout_header(date_range, ticks, chart_width, canvas_height, style, measure_text)

    y = style.padding + style.header_height + style.padding
    today_marker = _layout_today(date_range, ticks, day_width, drawable_width, today, y, style)

    rows: list[TaskLayout] = []
    for task in selected:
        rows.append(_layout_task(task, ticks, y, style))
        y += style.row_height

    return ChartLayout(
        width=canvas_width,
        height=canvas_height,
        chart_width=chart_width,
        day_width=day_width,
        date_range=date_range,
        ticks=ticks,
        header=header,
        today=today_marker,
        tasks=rows,
    )


def compute_date_range(tasks: list[Task]) -> DateRange:
    """Earliest start to one day past the latest end; raises on an empty task list."""

    if not tasks:
        raise EmptyDatasetError("cannot compute a date range without tasks")
    start = min(task.start for task in tasks)
    end = max(task.end for task in tasks) + dt.timedelta(days=1)
    return DateRange(start=start, end=end, business_days=max(1, weekdays_between(start, end)))


def format_day(value: dt.date) -> str:
    """Short month and unpadded day, e.g. `Jan 2`."""
    return f"{value:%b} {value.day}"


def _resolve_width(options: RenderOptions, style: ChartStyle, measure_text: TextMeasurer) -> tuple[int, int]:
    if options.width:
        return options.width, options.width
    chart_width = style.default_chart_width
    canvas_width = chart_width + style.padding + measure_text(WIDEST_DATE_LABEL, "date")
    return chart_width, canvas_width


def _auto_height(task_count: int, style: ChartStyle) -> int:
    return style.padding + style.header_height + style.padding + task_count * style.row_height + style.padding


def _layout_header(
    date_range: DateRange,
    ticks: list[Tick],
    chart_width: int,
    canvas_height: int,
    style: ChartStyle,
    measure_text: TextMeasurer,
) -> TimelineHeader:
    top = style.padding
    band = Rect(style.padding, top, chart_width - style.padding * 2, style.header_height)
    inset = (style.header_height - style.timeline_font_size) // 2
    text_y = top + style.header_height - inset - 2

    first_label = format_day(date_range.start)
    last_label = format_day(date_range.end)
    last_label_x = chart_width - style.padding - style.padding_xs - measure_text(last_label, "timeline")
    labels = [
        TextAnchor(style.padding + style.padding_xs, text_y, first_label, "timeline"),
        TextAnchor(last_label_x, text_y, last_label, "timeline"),
    ]

    # Tick labels are centred on their tick and dropped when they would crowd a neighbour.
    label_x_end = measure_text(first_label, "timeline") + style.padding_s
    tick_limit = chart_width - style.padding * 3
    tick_xs: list[int] = []
    for tick in ticks[1:]:
        if tick.x1 >= tick_limit:
            break
        if tick.x1 > label_x_end + style.padding:
            label = format_day(tick.start_date)
            label_width = measure_text(label, "timeline")
            if tick.x1 + label_width < last_label_x:
                labels.append(TextAnchor(style.padding + tick.x1 - label_width // 2, text_y, label, "timeline"))
            label_x_end = tick.x1 + label_width
        tick_xs.append(style.padding + tick.x1)

    tick_top = top + style.header_height - inset + style.row_gap_xs
    return TimelineHeader(
        band=band,
        labels=labels,
        tick_xs=tick_xs,
        tick_top=tick_top,
        tick_bottom=tick_top - 2 + style.tick_height,
        grid_bottom=canvas_height - top,
    )


def _layout_today(
    date_range: DateRange,
    ticks: list[Tick],
    day_width: int,
    drawable_width: int,
    today: dt.datetime,
    rows_top: int,
    style: ChartStyle,
) -> TodayMarker:
    position = 0
    portion = 0
    if today > date_range.end:
        position = drawable_width
    elif today > date_range.start:
        yesterday = today - dt.timedelta(days=1)
        if yesterday.date() >= date_range.start.date():
            position = resolve_position(ticks, date_range.start, yesterday).x2
        if not is_weekend(today):
            minutes = today.hour * 60 + today.minute
            portion = int(minutes / MINUTES_PER_DAY * day_width)

    return TodayMarker(
        x=style.padding,
        y=rows_top - style.padding - style.today_height,
        position=position,
        portion=portion,
        height=style.today_height,
    )


def _layout_task(task: Task, ticks: list[Tick], top: int, style: ChartStyle) -> TaskLayout:
    try:
        resolved = resolve_position(ticks, task.start, task.end)
    except LayoutResolutionError as exc:
        raise LayoutResolutionError(f"task '{task.id}': {exc}") from exc

    left = style.padding
    label_y = top + style.text_height
    bar_y = top + style.text_height + style.row_gap_xs
    label_text = f"{task.id} - {task.title}"
    dates_text = f"{format_day(task.start)} - {format_day(task.end)}"

    if task.is_milestone:
        x = resolved.x1
        return TaskLayout(
            task=task,
            position=Position(x1=x, x2=x),
            label=TextAnchor(left + x - style.milestone_width // 2, label_y, label_text, "bar"),
            dates=TextAnchor(left + x + style.milestone_width + left, bar_y + style.text_height - 3, dates_text, "date"),
            marker=Point(left + x, bar_y + style.bar_height / 2),
        )

    return TaskLayout(
        task=task,
        position=resolved,
        label=TextAnchor(left + resolved.x1, label_y, label_text, "bar"),
        dates=TextAnchor(left + resolved.x2 + left, bar_y + style.text_height - 3, dates_text, "date"),
        bar=Rect(left + resolved.x1, bar_y, resolved.x2 - resolved.x1, style.bar_height),
    )
