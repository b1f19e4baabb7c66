from __future__ import annotations

from typing import Callable, Tuple

RankKey = Callable[[object], Tuple]


def rank_by(*fields: str) -> RankKey:
    """
    Build a sort key over the named attributes, always finishing with
    arrival_time and then pid.

    Every strategy ranks candidates through this so equally eligible
    processes resolve the same way: earlier arrival first, then lower pid.
    """
    tail = tuple(f for f in ("arrival_time", "pid") if f not in fields)
    names = fields + tail

    def key(item) -> Tuple:
        return tuple(getattr(item, name) for name in names)

    return key


ARRIVAL_ORDER = rank_by("arrival_time")
SHORTEST_BURST = rank_by("burst_time")
SHORTEST_REMAINING = rank_by("remaining_time")
HIGHEST_PRIORITY = rank_by("priority")
