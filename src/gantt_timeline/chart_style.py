from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

import yaml

from .task_models import FontId


class StyleValidationError(Exception):
    """Raised when a style file is malformed (unknown keys, wrong value types)."""


@dataclass(frozen=True)
class ChartStyle:
    """
    Geometry, fonts and colours of the chart.

    Lengths are pixels; font sizes are points, which equal pixels at the
    72 DPI the renderer draws at.
    """

    padding: int = 16
    padding_s: int = 12
    padding_xs: int = 3
    row_gap_xs: int = 4
    row_gap_s: int = 8
    header_height: int = 48
    tick_height: int = 12
    today_height: int = 5
    bar_height: int = 18
    text_height: int = 16
    milestone_width: int = 16
    corner_radius: int = 4
    default_chart_width: int = 1024

    font_family: str = "DejaVu Sans"
    timeline_font_size: int = 14
    bar_font_size: int = 12
    date_font_size: int = 11

    background: str = "white"
    text_color: str = "black"
    timeline_color: str = "#44536a"
    timeline_text_color: str = "white"
    bar_color: str = "#589ad7"
    milestone_color: str = "#ecb22f"
    today_color: str = "#d4182d"
    today_partial_color: str = "orange"
    tick_color: str = "white"
    tick_linewidth: float = 2.0
    border_color: str = "#f0f0f0"

    def font(self, font_id: FontId) -> tuple[int, str]:
        """Return (size, weight) for a font slot."""
        if font_id == "timeline":
            return self.timeline_font_size, "bold"
        if font_id == "bar":
            return self.bar_font_size, "bold"
        if font_id == "date":
            return self.date_font_size, "normal"
        raise KeyError(f"unknown font id '{font_id}'")

    @property
    def row_height(self) -> int:
        """Vertical space taken by one task: label, gap, bar, gap."""
        return self.text_height + self.row_gap_xs + self.bar_height + self.row_gap_s


_FIELD_TYPES: dict[str, str] = {f.name: str(f.type) for f in fields(ChartStyle)}


def load_style(path: str) -> ChartStyle:
    """Load style overrides from a YAML file with a top-level `style` mapping."""

    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    return parse_style(raw)


def parse_style(data: Any, base: ChartStyle | None = None) -> ChartStyle:
    base = base or ChartStyle()
    if data is None:
        return base
    if not isinstance(data, dict):
        raise StyleValidationError("root: expected mapping at top level")
    _assert_allowed_keys(data, {"style"}, "root")

    overrides_raw = data.get("style")
    if overrides_raw is None:
        return base
    if not isinstance(overrides_raw, dict):
        raise StyleValidationError("style: expected mapping")
    _assert_allowed_keys(overrides_raw, set(_FIELD_TYPES), "style")

    overrides: dict[str, Any] = {}
    for key, value in overrides_raw.items():
        overrides[key] = _coerce(value, _FIELD_TYPES[key], f"style.{key}")
    return replace(base, **overrides)


def _coerce(value: Any, type_name: str, path: str) -> Any:
    if type_name == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise StyleValidationError(f"{path}: expected integer")
        if value < 0:
            raise StyleValidationError(f"{path}: expected non-negative integer")
        return value
    if type_name == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise StyleValidationError(f"{path}: expected number")
        return float(value)
    if not isinstance(value, str) or not value.strip():
        raise StyleValidationError(f"{path}: expected non-empty string")
    return value


def _assert_allowed_keys(data: dict[str, Any], allowed: set[str], path: str) -> None:
    extras = sorted(str(key) for key in set(data.keys()) - allowed)
    if extras:
        raise StyleValidationError(f"{path}: unexpected fields {extras}")
