from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import WorkloadFormatError
from .models import Process


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in (".json", ".csv"):
        raise WorkloadFormatError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    try:
        if suffix == ".json":
            return _load_json(path)
        return _load_csv(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise WorkloadFormatError(f"Cannot read workload {path}: {exc}") from exc


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadFormatError(f"{path}: invalid JSON ({exc})") from exc

    # Accept either a bare list or {"processes": [...]}.
    if isinstance(raw, dict):
        raw = raw.get("processes")

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _parse_int(value) -> int:
    # Time units are whole numbers; 2.7 or True must not be truncated to 2 or 1.
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    if isinstance(value, int):
        return value
    return int(str(value).strip())


def _parse_pid(value) -> int:
    if isinstance(value, str):
        text = value.strip()
        if text[:1] in ("P", "p"):
            text = text[1:]
        return int(text)
    return _parse_int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _parse_pid(mapping["pid"])
        arrival_time = _parse_int(mapping["arrival_time"])
        burst_time = _parse_int(mapping["burst_time"])

        priority_val = mapping.get("priority")
        priority = _parse_int(priority_val) if priority_val not in (None, "") else None
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
