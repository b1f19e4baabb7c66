"""
The six scheduling strategies.

Each one takes a request already accepted by validation.validate_request
and returns the decision sequence with start times it stamped itself.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Dict, List, Optional, Sequence

from .errors import UnknownAlgorithmError
from .models import Algorithm, ExecutionSlice, Process, RuntimeProcess
from .ordering import ARRIVAL_ORDER, HIGHEST_PRIORITY, SHORTEST_BURST, SHORTEST_REMAINING, RankKey

logger = logging.getLogger(__name__)

Strategy = Callable[..., List[ExecutionSlice]]


def _extend(decisions: List[ExecutionSlice], pid: int, start_time: int, duration: int) -> None:
    # Continuing the same process without a switch stays one segment.
    if decisions:
        last = decisions[-1]
        if last.pid == pid and last.end_time == start_time:
            decisions[-1] = ExecutionSlice(pid=pid, start_time=last.start_time, duration=last.duration + duration)
            return
    decisions.append(ExecutionSlice(pid=pid, start_time=start_time, duration=duration))


def _run_to_completion(processes: Sequence[Process], rank: RankKey) -> List[ExecutionSlice]:
    """
    Shared loop for the non-preemptive strategies.

    Whenever the CPU is free, pick the best ready process under `rank` and
    run it to completion. If nothing is ready, jump to the next arrival.
    """
    pending: List[Process] = sorted(processes, key=ARRIVAL_ORDER)

    time = 0
    decisions: List[ExecutionSlice] = []

    while pending:
        ready = [p for p in pending if p.arrival_time <= time]

        if not ready:
            # pending stays sorted by arrival, so the head is the next one in.
            time = pending[0].arrival_time
            continue

        p = min(ready, key=rank)
        decisions.append(ExecutionSlice(pid=p.pid, start_time=time, duration=p.burst_time))
        logger.debug("t=%d: P%d runs to completion (%d units)", time, p.pid, p.burst_time)

        pending.remove(p)
        time += p.burst_time

    return decisions


def _run_preemptive(processes: Sequence[Process], rank: RankKey) -> List[ExecutionSlice]:
    """
    Shared loop for the preemptive strategies.

    The ready set is re-ranked at every arrival and every completion. Ranks
    never worsen for the running process, so a newcomer only takes the CPU
    when it is strictly better under `rank`.
    """
    arena = RuntimeProcess.arena(processes)
    incoming = deque(sorted(arena.values(), key=ARRIVAL_ORDER))
    ready: List[RuntimeProcess] = []

    time = 0
    decisions: List[ExecutionSlice] = []
    running: Optional[RuntimeProcess] = None

    while ready or incoming:
        while incoming and incoming[0].arrival_time <= time:
            ready.append(incoming.popleft())

        if not ready:
            time = incoming[0].arrival_time
            continue

        current = min(ready, key=rank)
        if running is not None and running is not current:
            running.last_ready_time = time
            logger.debug("t=%d: P%d preempts P%d", time, current.pid, running.pid)

        # Run until completion or the next arrival, whichever comes first.
        if incoming:
            run_time = min(current.remaining_time, incoming[0].arrival_time - time)
        else:
            run_time = current.remaining_time

        _extend(decisions, current.pid, time, run_time)
        time += run_time
        current.remaining_time -= run_time

        if current.done:
            ready.remove(current)
            running = None
        else:
            running = current

    return decisions


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    First-Come First-Serve (non-preemptive).
    """
    time = 0
    decisions: List[ExecutionSlice] = []

    for p in sorted(processes, key=ARRIVAL_ORDER):
        start_time = max(time, p.arrival_time)
        decisions.append(ExecutionSlice(pid=p.pid, start_time=start_time, duration=p.burst_time))
        time = start_time + p.burst_time

    return decisions


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time.
    """
    return _run_to_completion(processes, SHORTEST_BURST)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive during a slice (or exactly at its end) join the
    queue ahead of the process that was just preempted.
    The quantum is expected to be checked already by validate_request.
    """
    arena = RuntimeProcess.arena(processes)
    incoming = deque(sorted(arena.values(), key=ARRIVAL_ORDER))
    ready: deque[RuntimeProcess] = deque()

    time = 0
    decisions: List[ExecutionSlice] = []

    def enqueue_new_arrivals(current_time: int) -> None:
        while incoming and incoming[0].arrival_time <= current_time:
            ready.append(incoming.popleft())

    enqueue_new_arrivals(time)

    while ready or incoming:
        if not ready:
            # Jump to next arrival if CPU is idle
            time = incoming[0].arrival_time
            enqueue_new_arrivals(time)
            continue

        rp = ready.popleft()
        run_time = min(quantum, rp.remaining_time)
        decisions.append(ExecutionSlice(pid=rp.pid, start_time=time, duration=run_time))

        time += run_time
        rp.remaining_time -= run_time

        enqueue_new_arrivals(time)

        if not rp.done:
            rp.last_ready_time = time
            ready.append(rp)

    return decisions


def schedule_srtf(processes: Sequence[Process], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    Shortest Remaining Time First (preemptive SJF).
    """
    return _run_preemptive(processes, SHORTEST_REMAINING)


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then pid.
    """
    return _run_to_completion(processes, HIGHEST_PRIORITY)


def schedule_priority_preemptive(
    processes: Sequence[Process], quantum: Optional[int] = None
) -> List[ExecutionSlice]:
    """
    Static Priority scheduling (preemptive).

    An arriving process takes the CPU only if its priority value is
    strictly lower than the running one's.
    """
    return _run_preemptive(processes, HIGHEST_PRIORITY)


ALGORITHMS: Dict[Algorithm, Strategy] = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.SJF: schedule_sjf,
    Algorithm.RR: schedule_rr,
    Algorithm.SRTF: schedule_srtf,
    Algorithm.PRIORITY_NP: schedule_priority,
    Algorithm.PRIORITY_P: schedule_priority_preemptive,
}


def parse_algorithm(name: "str | Algorithm") -> Algorithm:
    try:
        return Algorithm.parse(name)
    except ValueError as exc:
        known = ", ".join(a.value for a in Algorithm)
        raise UnknownAlgorithmError(f"Unknown algorithm '{name}' (choose from: {known})") from exc


def get_strategy(algorithm: "str | Algorithm") -> Strategy:
    return ALGORITHMS[parse_algorithm(algorithm)]
