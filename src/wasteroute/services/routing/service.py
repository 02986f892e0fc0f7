"""Route optimization workflow: fetch collection data, optimize, store the draft."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ...config import settings
from ...data.bins_repository import get_collectable_bins
from ...data.requests_repository import get_approved_requests
from ...persistence.filesystem import FileStorage
from ...schemas.routing import (
    CoordinateModel,
    OptimizedRouteResponse,
    RouteOptimizationRequest,
    RouteStopModel,
    StoredRouteSummary,
)
from ..outputs.routing_formatter import optimized_route_to_csv, optimized_route_to_json
from .errors import InvalidInputError
from .models import Coordinate, OptimizationOptions, OptimizedRoute
from .optimizer import optimize

logger = logging.getLogger(__name__)

DRAFT_STATUS = "draft"


def _start_location(payload: RouteOptimizationRequest) -> Coordinate:
    if payload.start_location is None:
        return Coordinate(lat=settings.default_start_lat, lng=settings.default_start_lng)
    try:
        return Coordinate(lat=payload.start_location.lat, lng=payload.start_location.lng)
    except InvalidInputError as exc:
        raise InvalidInputError(f"Invalid start location: {exc}") from exc


def build_options(payload: RouteOptimizationRequest) -> OptimizationOptions:
    """Merge request overrides with configured defaults."""

    return OptimizationOptions(
        start_location=_start_location(payload),
        fill_level_threshold=payload.fill_level_threshold
        if payload.fill_level_threshold is not None
        else settings.fill_level_threshold,
        max_stops=payload.max_stops if payload.max_stops is not None else settings.max_stops,
        include_requests=payload.include_requests,
        average_speed_kmh=settings.average_speed_kmh,
        service_time_minutes=settings.service_time_minutes,
        tie_epsilon_km=settings.tie_epsilon_km,
    )


def default_route_name(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return f"Optimized Route - {moment.date().isoformat()}"


def _to_response(route: OptimizedRoute) -> OptimizedRouteResponse:
    return OptimizedRouteResponse(
        total_stops=route.total_stops,
        total_distance=route.total_distance_km,
        estimated_duration=route.estimated_duration_minutes,
        metadata=dict(route.metadata),
        stops=[
            RouteStopModel(
                stop_type=stop.kind.value,
                reference_id=stop.reference_id,
                address=stop.address,
                location=CoordinateModel(lat=stop.location.lat, lng=stop.location.lng),
                sequence_position=stop.sequence_position,
                cumulative_distance=stop.cumulative_distance_km,
                arrival_offset_minutes=stop.arrival_offset_minutes,
                priority=stop.candidate.priority_label,
                metadata=dict(stop.metadata),
            )
            for stop in route.stops
        ],
    )


def save_route(
    route: OptimizedRoute,
    *,
    route_name: str,
    coordinator_id: str | None = None,
    storage: FileStorage | None = None,
) -> str:
    """Write a finished route as a draft run directory and return its id."""

    storage = storage or FileStorage()
    summary = optimized_route_to_json(route)
    summary.update({"route_name": route_name, "coordinator_id": coordinator_id, "status": DRAFT_STATUS})
    run_dir = storage.save_run(summary, optimized_route_to_csv(route), prefix="route")
    logger.info(f"Stored route '{route_name}' with {route.total_stops} stops in {run_dir}")
    return run_dir.name


def optimize_collection_route(payload: RouteOptimizationRequest) -> OptimizedRouteResponse:
    options = build_options(payload)

    bins = get_collectable_bins(options.fill_level_threshold)
    requests = get_approved_requests() if options.include_requests else []
    logger.info(
        f"Optimizing route from ({options.start_location.lat}, {options.start_location.lng}) "
        f"with {len(bins)} bins and {len(requests)} requests"
    )

    route = optimize(bins, requests, options)

    dropped = route.metadata.get("dropped_candidates") or []
    if dropped:
        logger.warning(f"Dropped {len(dropped)} candidates with unusable coordinates: {', '.join(dropped)}")
    if not route.stops:
        logger.info("No stops eligible for collection; returning empty route")

    response = _to_response(route)
    if payload.persist and route.stops:
        route_name = payload.route_name or default_route_name()
        response.route_id = save_route(
            route,
            route_name=route_name,
            coordinator_id=payload.coordinator_id,
            storage=FileStorage(),
        )
        response.route_name = route_name
        response.coordinator_id = payload.coordinator_id
        response.status = DRAFT_STATUS
    return response


def get_saved_route(route_id: str, storage: FileStorage | None = None) -> OptimizedRouteResponse:
    """Read back a stored draft route. Raises ``FileNotFoundError`` for unknown ids."""

    storage = storage or FileStorage()
    return OptimizedRouteResponse.model_validate(storage.load_summary(route_id))


def list_saved_routes(storage: FileStorage | None = None) -> list[StoredRouteSummary]:
    storage = storage or FileStorage()
    return [
        StoredRouteSummary.model_validate(storage.load_summary(route_id))
        for route_id in storage.list_runs(prefix="route")
    ]
