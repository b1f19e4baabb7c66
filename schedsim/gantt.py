from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutionSlice, Timeline

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def slice_label(sl: ExecutionSlice) -> str:
    return "idle" if sl.is_idle else f"P{sl.pid}"


def time_marks(boundaries: List[Tuple[int, int]]) -> str:
    """
    Lay out (column, time) pairs so each time starts at its boundary column.

    Marks that would run into the previous one are dropped, except the
    last, which is always shown (shifted right if it has to be).
    """
    out = ""
    for i, (column, value) in enumerate(boundaries):
        last = i == len(boundaries) - 1
        if out and column <= len(out):
            if not last:
                continue
            column = len(out) + 1
        out = out.ljust(column) + str(value)
    return out


def render_gantt(timeline: Timeline) -> str:
    """
    Plain-text Gantt chart. Idle slices are drawn with dots and every slice
    boundary with a bar, so the time marks sit under the bars.
    """
    if not len(timeline):
        return "(no execution)"

    line = "|"
    labels = " "
    boundaries = [(0, 0)]

    for sl in timeline:
        width = max(1, sl.duration)
        line += ("." if sl.is_idle else "=") * width + "|"
        labels += ("" if sl.is_idle else slice_label(sl))[:width].ljust(width) + " "
        boundaries.append((len(line) - 1, sl.end_time))

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels.rstrip(),
            time_marks(boundaries),
        ]
    )


def build_rich_gantt(timeline: Timeline) -> Panel:
    """
    Build a Rich Panel containing a colored Gantt chart with time marks on
    the slice boundaries.
    """
    if not len(timeline):
        return Panel("No execution", title="Gantt Chart")

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(COLORS)
            pid_to_color[pid] = COLORS[idx]
        return pid_to_color[pid]

    bars = Text()
    labels = Text()
    boundaries = [(0, 0)]
    column = 0

    for sl in timeline:
        width = max(1, sl.duration)

        if sl.is_idle:
            bars.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            bars.append(" " * width, style=f"on {pid_color(sl.pid)}")
            labels.append(slice_label(sl)[:width].ljust(width), style="bold")

        column += width
        boundaries.append((column, sl.end_time))

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)
    table.add_row(Text(time_marks(boundaries), style="dim"))

    return Panel.fit(table, title="Gantt Chart")
