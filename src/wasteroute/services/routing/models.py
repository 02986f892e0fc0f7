"""Routing domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .errors import ConfigurationOutOfRangeError, InvalidCoordinateError, InvalidInputError

URGENT_FILL_LEVEL = 90


def is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees, validated on construction."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not is_finite_number(self.lat) or not is_finite_number(self.lng):
            raise InvalidCoordinateError(f"Coordinate values must be finite numbers, got ({self.lat!r}, {self.lng!r}).")
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidCoordinateError(f"Latitude {self.lat} is outside [-90, 90].")
        if not -180.0 <= self.lng <= 180.0:
            raise InvalidCoordinateError(f"Longitude {self.lng} is outside [-180, 180].")

    def as_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


class StopKind(str, Enum):
    BIN_COLLECTION = "bin-collection"
    REQUEST_PICKUP = "request-pickup"


@dataclass(frozen=True, slots=True)
class StopCandidate:
    """A bin or request reduced to the shape the sequencer works with."""

    kind: StopKind
    reference_id: str
    location: Coordinate
    address: str
    priority_hint: float
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not is_finite_number(self.priority_hint):
            raise InvalidInputError(f"priority_hint must be a finite number, got {self.priority_hint!r}.")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def priority_label(self) -> str:
        if self.kind is StopKind.REQUEST_PICKUP:
            return "normal"
        return "urgent" if self.priority_hint >= URGENT_FILL_LEVEL else "high"


@dataclass(frozen=True, slots=True)
class RouteStop:
    candidate: StopCandidate
    sequence_position: int
    cumulative_distance_km: float
    arrival_offset_minutes: float

    @property
    def kind(self) -> StopKind:
        return self.candidate.kind

    @property
    def reference_id(self) -> str:
        return self.candidate.reference_id

    @property
    def location(self) -> Coordinate:
        return self.candidate.location

    @property
    def address(self) -> str:
        return self.candidate.address

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self.candidate.metadata


@dataclass(frozen=True, slots=True)
class OptimizedRoute:
    stops: tuple[RouteStop, ...]
    total_distance_km: float
    estimated_duration_minutes: float
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def total_stops(self) -> int:
        return len(self.stops)

    @classmethod
    def empty(cls, metadata: Optional[Mapping[str, Any]] = None) -> "OptimizedRoute":
        return cls(stops=(), total_distance_km=0.0, estimated_duration_minutes=0.0, metadata=metadata or {})


@dataclass(frozen=True, slots=True)
class OptimizationOptions:
    """Knobs for a single optimization run.

    Out-of-range values are rejected rather than clamped.
    """

    start_location: Coordinate
    fill_level_threshold: int = 70
    max_stops: int = 50
    include_requests: bool = True
    average_speed_kmh: float = 30.0
    service_time_minutes: float = 5.0
    tie_epsilon_km: float = 0.05

    def __post_init__(self) -> None:
        if not isinstance(self.start_location, Coordinate):
            raise InvalidInputError("A valid start location is required.")
        if (
            not isinstance(self.fill_level_threshold, int)
            or isinstance(self.fill_level_threshold, bool)
            or not 0 <= self.fill_level_threshold <= 100
        ):
            raise ConfigurationOutOfRangeError(
                f"fill_level_threshold must be an integer between 0 and 100, got {self.fill_level_threshold!r}."
            )
        if not isinstance(self.max_stops, int) or isinstance(self.max_stops, bool) or self.max_stops < 0:
            raise ConfigurationOutOfRangeError(f"max_stops must be a non-negative integer, got {self.max_stops!r}.")
        if not is_finite_number(self.average_speed_kmh) or self.average_speed_kmh <= 0:
            raise ConfigurationOutOfRangeError(f"average_speed_kmh must be positive, got {self.average_speed_kmh!r}.")
        if not is_finite_number(self.service_time_minutes) or self.service_time_minutes < 0:
            raise ConfigurationOutOfRangeError(
                f"service_time_minutes must be non-negative, got {self.service_time_minutes!r}."
            )
        if not is_finite_number(self.tie_epsilon_km) or self.tie_epsilon_km < 0:
            raise ConfigurationOutOfRangeError(f"tie_epsilon_km must be non-negative, got {self.tie_epsilon_km!r}.")
