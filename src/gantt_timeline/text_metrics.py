from __future__ import annotations

import math
from functools import lru_cache

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextPath

from .chart_style import ChartStyle
from .task_models import FontId, TextMeasurer


def matplotlib_measurer(style: ChartStyle) -> TextMeasurer:
    """Build a measurer backed by matplotlib's glyph outlines for the style's font family."""

    @lru_cache(maxsize=512)
    def measure(text: str, font_id: FontId) -> int:
        if not text:
            return 0
        size, weight = style.font(font_id)
        prop = FontProperties(family=style.font_family, weight=weight)
        path = TextPath((0, 0), text, size=size, prop=prop)
        return int(math.ceil(path.get_extents().width))

    return measure
