"""
Timeline assembly.

Strategies hand back a decision sequence: non-idle slices with start times
they computed themselves. The assembler checks that sequence against the
input processes, fills the gaps with idle slices and freezes the result.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .errors import TimelineConsistencyError
from .models import ExecutionSlice, Process, Timeline


def assemble_timeline(decisions: Iterable[ExecutionSlice], processes: Sequence[Process]) -> Timeline:
    by_pid: Dict[int, Process] = {p.pid: p for p in processes}
    executed: Dict[int, int] = {pid: 0 for pid in by_pid}

    clock = 0
    slices: List[ExecutionSlice] = []

    for d in decisions:
        if d.pid not in by_pid:
            raise TimelineConsistencyError(f"Decision for unknown process {d.pid!r}")
        if d.duration <= 0:
            raise TimelineConsistencyError(f"P{d.pid}: non-positive duration {d.duration} at t={d.start_time}")
        if d.start_time < clock:
            raise TimelineConsistencyError(f"P{d.pid}: starts at t={d.start_time} but CPU is busy until t={clock}")

        p = by_pid[d.pid]
        if d.start_time < p.arrival_time:
            raise TimelineConsistencyError(f"P{d.pid}: starts at t={d.start_time} before arriving at t={p.arrival_time}")

        if d.start_time > clock:
            slices.append(ExecutionSlice(pid=None, start_time=clock, duration=d.start_time - clock))

        slices.append(d)
        executed[d.pid] += d.duration
        clock = d.end_time

    for pid, ran in executed.items():
        if ran != by_pid[pid].burst_time:
            raise TimelineConsistencyError(f"P{pid}: ran {ran} units, burst time is {by_pid[pid].burst_time}")

    return Timeline(slices=tuple(slices))


def validate_timeline(timeline: Timeline) -> None:
    """
    Check that slices are contiguous and cover [0, makespan) exactly.
    """
    clock = 0
    for s in timeline:
        if s.duration <= 0:
            raise TimelineConsistencyError(f"Slice at t={s.start_time} has non-positive duration {s.duration}")
        if s.start_time != clock:
            raise TimelineConsistencyError(f"Slice starts at t={s.start_time}, expected t={clock}")
        clock = s.end_time
