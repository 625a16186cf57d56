from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import matplotlib

matplotlib.use("Agg")  # ensure headless, deterministic output
import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch, Polygon, Rectangle

from .chart_style import ChartStyle
from .task_models import ChartLayout, Rect, TaskLayout, TextAnchor, TimelineHeader, TodayMarker

# At 72 DPI one point is one pixel, so layout coordinates map 1:1 onto the figure.
DPI = 72
GRID_Z = 0
BAND_Z = 1
MARK_Z = 2
SHAPE_Z = 3
TEXT_Z = 4


def render_chart(layout: ChartLayout, out: str | BinaryIO, style: ChartStyle | None = None) -> None:
    """
    Render a laid-out chart as SVG to a path or a binary stream.

    - The axes span the whole figure with y growing downwards, matching the
      pixel coordinates produced by the layout.
    - Nothing is measured or positioned here; every shape comes from `layout`.
    """

    style = style or ChartStyle()

    fig = plt.figure(figsize=(layout.width / DPI, layout.height / DPI), dpi=DPI)
    fig.patch.set_facecolor(style.background)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height, 0)
    ax.axis("off")

    _draw_header(ax, layout.header, style)
    _draw_today(ax, layout.today, style)
    for row in layout.tasks:
        _draw_task(ax, row, style)

    if isinstance(out, (str, Path)):
        Path(out).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, format="svg", dpi=DPI, facecolor=fig.get_facecolor())
    plt.close(fig)


def _draw_header(ax: plt.Axes, header: TimelineHeader, style: ChartStyle) -> None:
    band = header.band
    _rounded_rect(ax, band, style.timeline_color, style.corner_radius, BAND_Z)

    for x in (band.x, band.x + band.width):
        ax.plot([x, x], [band.y + band.height, header.grid_bottom], color=style.border_color, linewidth=1, zorder=GRID_Z)

    for x in header.tick_xs:
        ax.plot([x, x], [header.tick_top, header.grid_bottom], color=style.border_color, linewidth=1, zorder=GRID_Z)
        ax.plot(
            [x, x],
            [header.tick_top, header.tick_bottom],
            color=style.tick_color,
            linewidth=style.tick_linewidth,
            zorder=MARK_Z,
        )

    for label in header.labels:
        _text(ax, label, style, color=style.timeline_text_color)


def _draw_today(ax: plt.Axes, marker: TodayMarker, style: ChartStyle) -> None:
    if marker.position > 0:
        _rounded_rect(
            ax,
            Rect(marker.x, marker.y, marker.position, marker.height),
            style.today_color,
            style.corner_radius,
            SHAPE_Z,
        )
        # Square off the top edge and the right end so only the left end stays rounded.
        _rect(ax, Rect(marker.x, marker.y, marker.position, marker.height / 2), style.today_color)
        if marker.position > style.padding:
            _rect(ax, Rect(marker.x + style.padding, marker.y, marker.position - style.padding, marker.height), style.today_color)
    if marker.portion > 0:
        _rect(ax, Rect(marker.x + marker.position, marker.y, marker.portion, marker.height), style.today_partial_color)


def _draw_task(ax: plt.Axes, row: TaskLayout, style: ChartStyle) -> None:
    _text(ax, row.label, style)

    if row.bar is not None and row.bar.width > 0:
        _rounded_rect(ax, row.bar, style.bar_color, style.corner_radius, SHAPE_Z)
    elif row.marker is not None:
        half_w = style.milestone_width / 2
        half_h = style.bar_height / 2
        cx, cy = row.marker.x, row.marker.y
        diamond = [(cx - half_w, cy), (cx, cy - half_h), (cx + half_w, cy), (cx, cy + half_h)]
        ax.add_patch(Polygon(diamond, closed=True, facecolor=style.milestone_color, linewidth=0, zorder=SHAPE_Z))

    _text(ax, row.dates, style)


def _rounded_rect(ax: plt.Axes, rect: Rect, color: str, radius: float, zorder: int) -> None:
    if rect.width <= 0 or rect.height <= 0:
        return
    radius = min(radius, rect.width / 2, rect.height / 2)
    ax.add_patch(
        FancyBboxPatch(
            (rect.x, rect.y),
            rect.width,
            rect.height,
            boxstyle=f"round,pad=0,rounding_size={radius}",
            facecolor=color,
            linewidth=0,
            zorder=zorder,
        )
    )


def _rect(ax: plt.Axes, rect: Rect, color: str) -> None:
    if rect.width <= 0 or rect.height <= 0:
        return
    ax.add_patch(Rectangle((rect.x, rect.y), rect.width, rect.height, facecolor=color, linewidth=0, zorder=SHAPE_Z))


def _text(ax: plt.Axes, anchor: TextAnchor, style: ChartStyle, color: str | None = None) -> None:
    size, weight = style.font(anchor.font)
    ax.text(
        anchor.x,
        anchor.y,
        anchor.text,
        ha="left",
        va="baseline",
        fontsize=size,
        fontweight=weight,
        fontfamily=style.font_family,
        color=color or style.text_color,
        zorder=TEXT_Z,
    )
