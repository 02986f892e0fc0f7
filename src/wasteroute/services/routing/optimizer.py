"""Single-call route optimization: candidates in, finished route out."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Sequence

from ...models.domain import BinRecord, RequestRecord
from ..geospatial import DistanceFn, distance as haversine_distance
from .candidates import partition_candidates
from .errors import InvalidInputError
from .estimator import efficiency_score, estimate_route
from .models import OptimizationOptions, OptimizedRoute, StopKind
from .sequencer import sequence_candidates


def optimize(
    bins: Sequence[BinRecord],
    requests: Sequence[RequestRecord],
    options: OptimizationOptions,
    *,
    distance: DistanceFn = haversine_distance,
) -> OptimizedRoute:
    """Build, sequence and estimate a collection route.

    Raises ``InvalidInputError`` or ``ConfigurationOutOfRangeError`` for bad
    options. Anything else degrades to fewer stops; no eligible candidates
    yields an empty route.
    """

    if not isinstance(options, OptimizationOptions):
        raise InvalidInputError("Optimization options are required.")

    candidates, rejected = partition_candidates(bins, requests, options)
    metadata = {
        "eligible_bins": sum(1 for c in candidates if c.kind is StopKind.BIN_COLLECTION),
        "approved_requests": sum(1 for c in candidates if c.kind is StopKind.REQUEST_PICKUP),
        "dropped_candidates": rejected,
        "fill_level_threshold": options.fill_level_threshold,
        "max_stops": options.max_stops,
        "optimization_timestamp": datetime.now(timezone.utc).isoformat(),
    }

    sequence = sequence_candidates(
        candidates,
        options.start_location,
        options.max_stops,
        distance=distance,
        tie_epsilon_km=options.tie_epsilon_km,
    )
    if not sequence:
        metadata["efficiency_score"] = 0
        return OptimizedRoute.empty(metadata)

    estimate = estimate_route(
        sequence,
        options.start_location,
        average_speed_kmh=options.average_speed_kmh,
        service_time_minutes=options.service_time_minutes,
        distance=distance,
    )
    route = OptimizedRoute(
        stops=estimate.annotated_stops,
        total_distance_km=estimate.total_distance_km,
        estimated_duration_minutes=estimate.estimated_duration_minutes,
    )
    metadata["efficiency_score"] = efficiency_score(route)
    return replace(route, metadata=metadata)
