"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CoordinateModel(BaseModel):
    lat: float
    lng: float


class RouteOptimizationRequest(CamelModel):
    # Range checks live in the engine so every caller gets the same rejection.
    start_location: Optional[CoordinateModel] = Field(
        default=None,
        description="Depot the crew departs from. Defaults to the configured depot.",
    )
    fill_level_threshold: Optional[int] = Field(default=None, description="Minimum bin fill level (0-100).")
    max_stops: Optional[int] = Field(default=None, description="Upper bound on the number of stops.")
    include_requests: bool = Field(default=True, description="Include approved pickup requests as stops.")
    persist: bool = True
    route_name: Optional[str] = Field(default=None, description="Friendly name for the stored route.")
    coordinator_id: Optional[str] = Field(default=None, description="Coordinator requesting the route.")


class RouteStopModel(CamelModel):
    stop_type: str
    reference_id: str
    address: str
    location: CoordinateModel
    sequence_position: int
    cumulative_distance: float
    arrival_offset_minutes: float
    priority: str
    metadata: dict


class OptimizedRouteResponse(CamelModel):
    total_stops: int
    total_distance: float
    estimated_duration: float
    stops: List[RouteStopModel]
    metadata: dict
    route_id: Optional[str] = None
    route_name: Optional[str] = None
    coordinator_id: Optional[str] = None
    status: Optional[str] = None


class StoredRouteSummary(CamelModel):
    route_id: str
    route_name: Optional[str] = None
    coordinator_id: Optional[str] = None
    status: Optional[str] = None
    total_stops: int = 0
    total_distance: float = 0.0
