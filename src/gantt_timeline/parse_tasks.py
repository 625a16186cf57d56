from __future__ import annotations

import csv
import datetime as _dt
import logging

from .layout import InputParseError
from .task_models import Task


logger = logging.getLogger(__name__)

DATE_FORMAT = "%m/%d/%y, %I:%M %p"
"""Timestamp layout of the Start/End columns, e.g. `1/2/24, 9:00 AM`."""

FIRST_DATA_ROW = 2

# Column positions in the exported task sheet.
COL_ID = 0
COL_TITLE = 1
COL_START = 2
COL_END = 3
COL_DURATION = 4
COL_EFFORT = 6
COL_COMPLETED = 8
COL_ASSIGNED = 10


def load_tasks(path: str) -> list[Task]:
    """Load tasks from a CSV export; the first row is a header and is skipped."""

    with open(path, "r", newline="", encoding="utf-8") as fh:
        tasks = parse_rows(csv.reader(fh))

    logger.debug("Loaded %d task(s) from %s", len(tasks), path)
    return tasks


def parse_rows(rows) -> list[Task]:
    """Map raw CSV rows (header included) to tasks, in input order."""

    iterator = iter(rows)
    if next(iterator, None) is None:
        raise InputParseError(row=1, field="Header", value="", reason="missing header row")

    tasks: list[Task] = []
    for index, row in enumerate(iterator, start=FIRST_DATA_ROW):
        tasks.append(_parse_row(row, index))
    return tasks


def _parse_row(row: list[str], index: int) -> Task:
    return Task(
        id=_cell(row, COL_ID),
        title=_cell(row, COL_TITLE),
        start=_parse_timestamp(_cell(row, COL_START), index, "Start"),
        end=_parse_timestamp(_cell(row, COL_END), index, "End"),
        duration_hours=_parse_optional_int(_cell(row, COL_DURATION), index, "Duration Hours"),
        effort_hours=_parse_optional_int(_cell(row, COL_EFFORT), index, "Effort Hours"),
        completed=_cell(row, COL_COMPLETED),
        assigned=_cell(row, COL_ASSIGNED),
    )


def _cell(row: list[str], column: int) -> str:
    if column >= len(row):
        return ""
    return row[column]


def _parse_timestamp(value: str, index: int, field: str) -> _dt.datetime:
    if not value.strip():
        raise InputParseError(row=index, field=field, value=value, reason="missing timestamp")
    try:
        return _dt.datetime.strptime(value.strip(), DATE_FORMAT)
    except ValueError as exc:
        raise InputParseError(row=index, field=field, value=value, reason=str(exc)) from exc


def _parse_optional_int(value: str, index: int, field: str) -> int | None:
    text = value.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError as exc:
        raise InputParseError(row=index, field=field, value=value, reason="expected integer") from exc
