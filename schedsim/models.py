from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class Algorithm(Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    RR = "rr"
    SRTF = "srtf"
    PRIORITY_NP = "priority"
    PRIORITY_P = "priority-p"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def needs_quantum(self) -> bool:
        return self is Algorithm.RR

    @property
    def needs_priority(self) -> bool:
        return self in (Algorithm.PRIORITY_NP, Algorithm.PRIORITY_P)

    @property
    def preemptive(self) -> bool:
        return self in (Algorithm.RR, Algorithm.SRTF, Algorithm.PRIORITY_P)

    @classmethod
    def parse(cls, name: "str | Algorithm") -> "Algorithm":
        """
        Resolve an algorithm from its canonical value or a common alias.

        Raises ValueError when the name is not recognised.
        """
        if isinstance(name, Algorithm):
            return name
        key = name.strip().lower().replace("_", "-").replace(" ", "-")
        if key in _ALIASES:
            return _ALIASES[key]
        return cls(key)


_LABELS = {
    Algorithm.FCFS: "FCFS",
    Algorithm.SJF: "SJF (non-preemptive)",
    Algorithm.RR: "Round Robin",
    Algorithm.SRTF: "SRTF",
    Algorithm.PRIORITY_NP: "Priority (non-preemptive)",
    Algorithm.PRIORITY_P: "Priority (preemptive)",
}

_ALIASES = {
    "first-come-first-served": Algorithm.FCFS,
    "shortest-job-first": Algorithm.SJF,
    "round-robin": Algorithm.RR,
    "shortest-remaining-time-first": Algorithm.SRTF,
    "npps": Algorithm.PRIORITY_NP,
    "priority-np": Algorithm.PRIORITY_NP,
    "priority-nonpreemptive": Algorithm.PRIORITY_NP,
    "priority-non-preemptive": Algorithm.PRIORITY_NP,
    "pps": Algorithm.PRIORITY_P,
    "priority-preemptive": Algorithm.PRIORITY_P,
}


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None


@dataclass
class RuntimeProcess:
    """
    Mutable per-run view of a Process.

    Owned by the strategy executing a run and discarded afterwards; the
    wrapped Process itself is never modified.
    """

    process: Process
    remaining_time: int
    last_ready_time: int

    @classmethod
    def arena(cls, processes: Iterable[Process]) -> Dict[int, "RuntimeProcess"]:
        return {
            p.pid: cls(process=p, remaining_time=p.burst_time, last_ready_time=p.arrival_time)
            for p in processes
        }

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def priority(self) -> Optional[int]:
        return self.process.priority

    @property
    def done(self) -> bool:
        return self.remaining_time == 0


@dataclass(frozen=True)
class ExecutionSlice:
    """
    One contiguous span of CPU time. A pid of None marks an idle slice.
    """

    pid: Optional[int]
    start_time: int
    duration: int

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration

    @property
    def is_idle(self) -> bool:
        return self.pid is None


@dataclass(frozen=True)
class Timeline:
    slices: Tuple[ExecutionSlice, ...] = ()

    def __iter__(self) -> Iterator[ExecutionSlice]:
        return iter(self.slices)

    def __len__(self) -> int:
        return len(self.slices)

    def __getitem__(self, index: int) -> ExecutionSlice:
        return self.slices[index]

    @property
    def makespan(self) -> int:
        return self.slices[-1].end_time if self.slices else 0

    @property
    def busy_time(self) -> int:
        return sum(s.duration for s in self.slices if not s.is_idle)

    @property
    def idle_time(self) -> int:
        return sum(s.duration for s in self.slices if s.is_idle)

    @property
    def has_idle(self) -> bool:
        return any(s.is_idle for s in self.slices)

    def for_process(self, pid: int) -> List[ExecutionSlice]:
        return [s for s in self.slices if s.pid == pid]


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: Optional[int] = None


@dataclass
class Metrics:
    processes: List[ProcessMetrics]
    total_waiting: int
    total_turnaround: int
    total_time: int
    busy_time: int
    cpu_utilization: float

    @property
    def avg_waiting(self) -> float:
        return self.total_waiting / len(self.processes) if self.processes else 0.0

    @property
    def avg_turnaround(self) -> float:
        return self.total_turnaround / len(self.processes) if self.processes else 0.0

    @property
    def avg_response(self) -> float:
        if not self.processes:
            return 0.0
        return sum(p.response_time for p in self.processes) / len(self.processes)

    @property
    def throughput(self) -> float:
        return len(self.processes) / self.total_time if self.total_time > 0 else 0.0

    def for_process(self, pid: int) -> ProcessMetrics:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)


@dataclass
class ScheduleResult:
    algorithm: Algorithm
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: Timeline = field(default_factory=Timeline)
    metrics: Optional[Metrics] = None

    def as_dict(self) -> dict:
        """
        JSON-serialisable view of the run: timeline slices plus per-process
        and aggregate metrics.
        """
        out: dict = {
            "algorithm": self.algorithm.value,
            "quantum": self.quantum,
            "timeline": [
                {"pid": s.pid, "start_time": s.start_time, "duration": s.duration}
                for s in self.timeline
            ],
        }
        if self.metrics is not None:
            m = self.metrics
            out["processes"] = [asdict(p) for p in m.processes]
            out["summary"] = {
                "total_waiting": m.total_waiting,
                "total_turnaround": m.total_turnaround,
                "total_time": m.total_time,
                "busy_time": m.busy_time,
                "cpu_utilization": m.cpu_utilization,
                "avg_waiting": m.avg_waiting,
                "avg_turnaround": m.avg_turnaround,
                "avg_response": m.avg_response,
                "throughput": m.throughput,
            }
        return out
