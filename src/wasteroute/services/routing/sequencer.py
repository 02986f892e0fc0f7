"""Greedy nearest-neighbor sequencing of stop candidates.

Starting at the depot, the crew repeatedly moves to the closest unvisited
candidate until the stop budget is spent. Candidates within ``tie_epsilon_km``
of the closest one are treated as equidistant; among those the higher
``priority_hint`` wins, then the earlier position in the input. The result is
therefore fully determined by the input, even for collocated stops.

Work is O(n^2) in the candidate count, which stays in the tens per run.
"""

from __future__ import annotations

from typing import Sequence

from ..geospatial import DistanceFn, distance as haversine_distance
from .models import Coordinate, StopCandidate

DEFAULT_TIE_EPSILON_KM = 0.05


def _pick_next(
    remaining: list[tuple[int, StopCandidate]],
    position: Coordinate,
    distance: DistanceFn,
    tie_epsilon_km: float,
) -> int:
    """Return the index into ``remaining`` of the next stop to visit."""

    distances = [distance(position, candidate.location) for _, candidate in remaining]
    nearest = min(distances)

    best_slot = -1
    best_key: tuple[float, int] | None = None
    for slot, ((input_index, candidate), leg) in enumerate(zip(remaining, distances)):
        if leg - nearest > tie_epsilon_km:
            continue
        # Higher priority first, then earlier input position.
        key = (-candidate.priority_hint, input_index)
        if best_key is None or key < best_key:
            best_key = key
            best_slot = slot
    return best_slot


def sequence_candidates(
    candidates: Sequence[StopCandidate],
    start: Coordinate,
    max_stops: int,
    *,
    distance: DistanceFn = haversine_distance,
    tie_epsilon_km: float = DEFAULT_TIE_EPSILON_KM,
) -> list[StopCandidate]:
    """Order candidates into a visit sequence of at most ``max_stops`` stops."""

    if max_stops <= 0 or not candidates:
        return []

    remaining = list(enumerate(candidates))
    ordered: list[StopCandidate] = []
    position = start

    while remaining and len(ordered) < max_stops:
        slot = _pick_next(remaining, position, distance, tie_epsilon_km)
        _, chosen = remaining.pop(slot)
        ordered.append(chosen)
        position = chosen.location

    return ordered
