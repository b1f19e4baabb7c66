from __future__ import annotations

from typing import List, Optional, Sequence

from .config import MAX_QUANTUM
from .errors import (
    EmptyInputError,
    InvalidDurationError,
    InvalidProcessError,
    InvalidQuantumError,
    MissingPriorityError,
)
from .models import Algorithm, Process


def validate_processes(processes: Sequence[Process]) -> None:
    if not processes:
        raise EmptyInputError("No processes supplied")

    seen: set[int] = set()
    for p in processes:
        if p.pid <= 0:
            raise InvalidProcessError(f"Process id must be a positive integer, got {p.pid}")
        if p.pid in seen:
            raise InvalidProcessError(f"Duplicate process id {p.pid}")
        seen.add(p.pid)

        if p.arrival_time < 0:
            raise InvalidDurationError(f"P{p.pid}: arrival time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise InvalidDurationError(f"P{p.pid}: burst time must be > 0, got {p.burst_time}")


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None:
        raise InvalidQuantumError("Round Robin requires a quantum (use --quantum)")
    if quantum <= 0:
        raise InvalidQuantumError(f"Quantum must be positive, got {quantum}")
    if quantum > MAX_QUANTUM:
        raise InvalidQuantumError(f"Quantum cannot be greater than {MAX_QUANTUM}, got {quantum}")
    return quantum


def require_priorities(processes: Sequence[Process]) -> None:
    missing: List[int] = [p.pid for p in processes if p.priority is None]
    if missing:
        listed = ", ".join(f"P{pid}" for pid in missing)
        raise MissingPriorityError(f"Priority scheduling needs a priority for every process (missing: {listed})")


def validate_request(
    processes: Sequence[Process],
    algorithm: Algorithm,
    quantum: Optional[int] = None,
) -> Optional[int]:
    """
    Check a whole simulation request and return the effective quantum.

    The quantum is only meaningful for round robin; every other algorithm
    gets None back regardless of what was passed.
    """
    validate_processes(processes)
    if algorithm.needs_priority:
        require_priorities(processes)
    if algorithm.needs_quantum:
        return validate_quantum(quantum)
    return None
