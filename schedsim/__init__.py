"""
schedsim package.

Simulates classic CPU scheduling algorithms over a set of processes and
reports the execution timeline together with waiting, turnaround and
utilization metrics.
"""

from .engine import compare, simulate
from .errors import (
    EmptyInputError,
    InvalidDurationError,
    InvalidProcessError,
    InvalidQuantumError,
    MissingPriorityError,
    SchedulerError,
    TimelineConsistencyError,
    UnknownAlgorithmError,
    WorkloadFormatError,
)
from .models import Algorithm, ExecutionSlice, Metrics, Process, ProcessMetrics, ScheduleResult, Timeline

__all__ = [
    "Algorithm",
    "EmptyInputError",
    "ExecutionSlice",
    "InvalidDurationError",
    "InvalidProcessError",
    "InvalidQuantumError",
    "Metrics",
    "MissingPriorityError",
    "Process",
    "ProcessMetrics",
    "ScheduleResult",
    "SchedulerError",
    "Timeline",
    "TimelineConsistencyError",
    "UnknownAlgorithmError",
    "WorkloadFormatError",
    "compare",
    "simulate",
]
