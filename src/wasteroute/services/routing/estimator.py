"""Distance and duration estimation for a sequenced route."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..geospatial import DistanceFn, distance as haversine_distance
from .models import Coordinate, OptimizedRoute, RouteStop, StopCandidate, StopKind

DEFAULT_AVERAGE_SPEED_KMH = 30.0
DEFAULT_SERVICE_TIME_MINUTES = 5.0


@dataclass(frozen=True, slots=True)
class RouteEstimate:
    annotated_stops: tuple[RouteStop, ...]
    total_distance_km: float
    estimated_duration_minutes: float


def travel_minutes(distance_km: float, average_speed_kmh: float) -> float:
    return distance_km / average_speed_kmh * 60.0


def estimate_route(
    sequence: Sequence[StopCandidate],
    start: Coordinate,
    *,
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH,
    service_time_minutes: float = DEFAULT_SERVICE_TIME_MINUTES,
    distance: DistanceFn = haversine_distance,
) -> RouteEstimate:
    """Walk the sequence from ``start`` and annotate every stop.

    Arrival at a stop is the travel time so far plus the service time of the
    stops already visited. The route total is the last cumulative distance.
    """

    stops: list[RouteStop] = []
    cumulative_km = 0.0
    position = start

    for index, candidate in enumerate(sequence):
        cumulative_km += distance(position, candidate.location)
        stops.append(
            RouteStop(
                candidate=candidate,
                sequence_position=index + 1,
                cumulative_distance_km=cumulative_km,
                arrival_offset_minutes=travel_minutes(cumulative_km, average_speed_kmh)
                + index * service_time_minutes,
            )
        )
        position = candidate.location

    total_duration = travel_minutes(cumulative_km, average_speed_kmh) + len(stops) * service_time_minutes
    return RouteEstimate(
        annotated_stops=tuple(stops),
        total_distance_km=cumulative_km,
        estimated_duration_minutes=total_duration,
    )


def efficiency_score(route: OptimizedRoute, completion_percentage: float = 0.0) -> int:
    """Score a route from 0 to 100.

    40% average fill level of collected bins, 30% distance efficiency
    (``100 - 10 * km per stop``, floored at zero), 30% completion.
    """

    if not route.stops:
        return 0

    fill_levels = [
        float(stop.metadata.get("fill_level") or 0)
        for stop in route.stops
        if stop.kind is StopKind.BIN_COLLECTION
    ]
    average_fill = sum(fill_levels) / route.total_stops
    distance_per_stop = route.total_distance_km / route.total_stops

    score = (
        average_fill * 0.4
        + max(0.0, 100.0 - distance_per_stop * 10.0) * 0.3
        + completion_percentage * 0.3
    )
    return round(score)
