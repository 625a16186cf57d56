from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
from importlib import metadata

import yaml

from .chart_style import ChartStyle, StyleValidationError, load_style
from .layout import EmptyDatasetError, InputParseError, LayoutResolutionError, RenderOptions, build_layout
from .parse_tasks import load_tasks
from .render_svg import render_chart
from .text_metrics import matplotlib_measurer


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _parse_today(value: str) -> dt.datetime:
    try:
        today = dt.datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid timestamp '{value}', expected YYYY-MM-DD[THH:MM]") from exc
    # Task timestamps are naive local time.
    if today.tzinfo is not None:
        today = today.astimezone().replace(tzinfo=None)
    return today


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gantt-timeline",
        description="Render a task list as a business-day Gantt chart (SVG)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input", help="Path to task CSV")
    parser.add_argument("-o", "--out", help="Output SVG path; stdout when omitted")
    parser.add_argument("-w", "--width", type=int, default=0, help="Force a specific width (0 = automatic)")
    parser.add_argument("-H", "--height", type=int, default=0, help="Force a specific height (0 = automatic)")
    parser.add_argument("--level", type=int, default=2, help="Maximum id depth to output")
    parser.add_argument("--zoom", default="", help="Portion of ids to focus on, e.g. 1.4.1")
    parser.add_argument("-t", "--tick-days", type=int, default=1, help="Number of business days per tick mark")
    parser.add_argument("--style", help="YAML file overriding chart style settings")
    parser.add_argument("--today", type=_parse_today, help="Override the current time, e.g. 2024-01-03T12:00")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log layout details to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_tool_version()}")
    return parser


def _tool_version() -> str:
    try:
        return metadata.version("gantt-timeline")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, datefmt=LOG_DATEFMT, stream=sys.stderr)

    try:
        style = load_style(args.style) if args.style else ChartStyle()
    except (yaml.YAMLError, StyleValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except FileNotFoundError:
        print(f"Error: style file not found: {args.style}", file=sys.stderr)
        return 1

    try:
        tasks = load_tasks(args.input)
    except InputParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except FileNotFoundError:
        print(f"Error: input file not found: {args.input}", file=sys.stderr)
        return 1
    except Exception as exc:  # Unexpected
        print(f"Unexpected error while loading tasks: {exc}", file=sys.stderr)
        return 1

    options = RenderOptions(
        width=args.width,
        height=args.height,
        granularity=args.tick_days,
        max_depth=args.level,
        zoom=args.zoom,
    )

    try:
        layout = build_layout(tasks, options, matplotlib_measurer(style), style=style, today=args.today)
    except (EmptyDatasetError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except LayoutResolutionError as exc:
        print(f"Internal layout error: {exc}", file=sys.stderr)
        return 3

    try:
        if args.out:
            render_chart(layout, args.out, style)
        else:
            render_chart(layout, sys.stdout.buffer, style)
            sys.stdout.flush()
    except Exception as exc:
        print(f"Unexpected error while rendering: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
