from __future__ import annotations

from typing import Dict, List, Sequence

from .errors import TimelineConsistencyError
from .models import Metrics, Process, ProcessMetrics, Timeline


def compute_metrics(timeline: Timeline, processes: Sequence[Process]) -> Metrics:
    """
    Derive per-process and aggregate metrics from an assembled timeline.

    A process's start is its first slice and its completion is the end of
    its last slice. Every input process must appear in the timeline.
    """
    first_start: Dict[int, int] = {}
    last_end: Dict[int, int] = {}
    for s in timeline:
        if s.is_idle:
            continue
        first_start.setdefault(s.pid, s.start_time)
        last_end[s.pid] = s.end_time

    per_process: List[ProcessMetrics] = []
    for p in sorted(processes, key=lambda x: x.pid):
        if p.pid not in first_start:
            raise TimelineConsistencyError(f"P{p.pid} never appears in the timeline")

        start_time = first_start[p.pid]
        completion_time = last_end[p.pid]
        turnaround_time = completion_time - p.arrival_time

        per_process.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=start_time - p.arrival_time,
                priority=p.priority,
            )
        )

    busy_time = sum(p.burst_time for p in processes)
    if busy_time != timeline.busy_time:
        raise TimelineConsistencyError(
            f"Timeline has {timeline.busy_time} busy units but processes need {busy_time}"
        )

    total_time = timeline.makespan
    cpu_utilization = busy_time / total_time if total_time > 0 else 0.0

    return Metrics(
        processes=per_process,
        total_waiting=sum(m.waiting_time for m in per_process),
        total_turnaround=sum(m.turnaround_time for m in per_process),
        total_time=total_time,
        busy_time=busy_time,
        cpu_utilization=cpu_utilization,
    )


def summarize(metrics: Metrics) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    return {
        "avg_waiting": metrics.avg_waiting,
        "avg_turnaround": metrics.avg_turnaround,
        "avg_response": metrics.avg_response,
        "cpu_utilization": metrics.cpu_utilization,
        "throughput": metrics.throughput,
    }
