from __future__ import annotations

from typing import Iterable

from .task_models import Task


def filter_tasks(tasks: Iterable[Task], max_depth: int, zoom: str = "") -> list[Task]:
    """
    Return the tasks to chart, in input order.

    A task is kept when its id has at most `max_depth` segments and, if a
    zoom id is given, the id is the zoom id itself or one of its descendants.
    """

    return [task for task in tasks if task.depth <= max_depth and in_zoom(task.id, zoom)]


def in_zoom(task_id: str, zoom: str) -> bool:
    if not zoom:
        return True
    return task_id == zoom or task_id.startswith(f"{zoom}.")
