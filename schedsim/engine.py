from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .algorithms import ALGORITHMS, parse_algorithm
from .config import DEFAULT_COMPARE_ALGORITHMS, DEFAULT_QUANTUM
from .metrics import compute_metrics
from .models import Algorithm, Process, ScheduleResult
from .timeline import assemble_timeline
from .validation import validate_processes, validate_request

logger = logging.getLogger(__name__)


def simulate(
    processes: Sequence[Process],
    algorithm: "str | Algorithm",
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Run one simulation: validate, schedule, assemble the timeline and
    compute metrics.

    All input errors are raised before the strategy runs.
    """
    alg = parse_algorithm(algorithm)
    effective_quantum = validate_request(processes, alg, quantum)

    # The caller's list is never handed to a strategy directly.
    snapshot = tuple(processes)

    decisions = ALGORITHMS[alg](snapshot, quantum=effective_quantum)
    logger.debug("%s produced %d decisions", alg.label, len(decisions))

    timeline = assemble_timeline(decisions, snapshot)
    metrics = compute_metrics(timeline, snapshot)

    logger.info(
        "%s: %d processes, makespan %d, utilization %.1f%%",
        alg.label,
        len(snapshot),
        metrics.total_time,
        metrics.cpu_utilization * 100,
    )

    return ScheduleResult(
        algorithm=alg,
        quantum=effective_quantum,
        processes=list(snapshot),
        timeline=timeline,
        metrics=metrics,
    )


def compare(
    processes: Sequence[Process],
    algorithms: Optional[Iterable["str | Algorithm"]] = None,
    quantum: int = DEFAULT_QUANTUM,
) -> List[ScheduleResult]:
    """
    Run several algorithms on the same workload.

    When the algorithm list is left to the default, priority algorithms are
    skipped for workloads without priorities instead of failing the whole
    comparison. Explicitly requested algorithms always propagate errors.
    """
    validate_processes(processes)

    explicit = algorithms is not None
    names = list(algorithms) if explicit else list(DEFAULT_COMPARE_ALGORITHMS)
    has_priorities = all(p.priority is not None for p in processes)

    results: List[ScheduleResult] = []
    for name in names:
        alg = parse_algorithm(name)
        if alg.needs_priority and not has_priorities and not explicit:
            logger.warning("Skipping %s: workload has processes without a priority", alg.label)
            continue
        q = quantum if alg.needs_quantum else None
        results.append(simulate(processes, alg, quantum=q))

    return results
