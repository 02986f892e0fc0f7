"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io

from ..routing.models import OptimizedRoute, RouteStop


def route_stop_to_json(stop: RouteStop) -> dict:
    return {
        "stop_type": stop.kind.value,
        "reference_id": stop.reference_id,
        "address": stop.address,
        "location": stop.location.as_dict(),
        "sequence_position": stop.sequence_position,
        "cumulative_distance": stop.cumulative_distance_km,
        "arrival_offset_minutes": stop.arrival_offset_minutes,
        "priority": stop.candidate.priority_label,
        "metadata": dict(stop.metadata),
    }


def optimized_route_to_json(route: OptimizedRoute) -> dict:
    return {
        "total_stops": route.total_stops,
        "total_distance": route.total_distance_km,
        "estimated_duration": route.estimated_duration_minutes,
        "stops": [route_stop_to_json(stop) for stop in route.stops],
        "metadata": dict(route.metadata),
    }


def optimized_route_to_csv(route: OptimizedRoute) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence_position",
        "stop_type",
        "reference_id",
        "address",
        "lat",
        "lng",
        "priority",
        "cumulative_distance_km",
        "arrival_offset_minutes",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in route.stops:
        writer.writerow(
            {
                "sequence_position": stop.sequence_position,
                "stop_type": stop.kind.value,
                "reference_id": stop.reference_id,
                "address": stop.address,
                "lat": stop.location.lat,
                "lng": stop.location.lng,
                "priority": stop.candidate.priority_label,
                "cumulative_distance_km": stop.cumulative_distance_km,
                "arrival_offset_minutes": stop.arrival_offset_minutes,
            }
        )
    return buffer.getvalue()
