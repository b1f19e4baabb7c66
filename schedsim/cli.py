from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import DEFAULT_COMPARE_ALGORITHMS, DEFAULT_QUANTUM, configure_logging
from .engine import compare, simulate
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize
from .models import Algorithm, ScheduleResult
from .workload_io import load_workload

ALGORITHM_HELP = ", ".join(a.value for a in Algorithm)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, RR, SRTF, Priority).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="Logging level (default: $SCHEDSIM_LOG_LEVEL or WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({ALGORITHM_HELP}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print a plain-text Gantt chart instead of the colored one.",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the timeline and metrics as JSON.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=None,
        help=f"Algorithms to compare (default: {' '.join(DEFAULT_COMPARE_ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm.label}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        console.print(build_rich_gantt(result.timeline))

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
        "Priority",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    metrics = result.metrics
    for p in metrics.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
            "" if p.priority is None else str(p.priority),
        )

    console.print(proc_table)
    console.print()

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Total waiting", str(metrics.total_waiting))
    sys_table.add_row("Total turnaround", str(metrics.total_turnaround))
    sys_table.add_row("Avg waiting", f"{metrics.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{metrics.avg_turnaround:.2f}")
    sys_table.add_row("Avg response", f"{metrics.avg_response:.2f}")
    sys_table.add_row("Total time", str(metrics.total_time))
    sys_table.add_row("Busy time", str(metrics.busy_time))
    sys_table.add_row("Throughput (proc/time)", f"{metrics.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{metrics.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(results: List[ScheduleResult], console: Console, title: str) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("CPU util", justify="right")

    for result in results:
        summary = summarize(result.metrics)
        summary_table.add_row(
            result.algorithm.label,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
            f"{summary['cpu_utilization']*100:.1f}%",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = simulate(processes, args.algorithm, quantum=args.quantum)
            if args.json:
                console.print_json(json.dumps(result.as_dict()))
            else:
                _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            workload_path = Path(args.workload)
            processes = load_workload(workload_path)
            results = compare(processes, args.algorithms, quantum=args.quantum)
            _print_comparison(results, console, title=f"Algorithm comparison: {workload_path}")
            return 0
    except SchedulerError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
