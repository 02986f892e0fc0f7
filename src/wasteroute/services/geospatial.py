"""Geospatial helper functions."""

from __future__ import annotations

import functools
import math
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .routing.models import Coordinate

EARTH_RADIUS_KM = 6371.0

DistanceFn = Callable[["Coordinate", "Coordinate"], float]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometers between two validated coordinates."""

    if a == b:
        return 0.0
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def cached_distance(maxsize: int | None = 4096, base: DistanceFn = distance) -> DistanceFn:
    """Wrap a distance function with an LRU cache.

    Coordinates are hashable value objects, so repeated legs between the same
    points (e.g. when re-optimizing after a small change) are computed once.
    The pair is normalised so ``(a, b)`` and ``(b, a)`` share a cache entry.
    """

    @functools.lru_cache(maxsize=maxsize)
    def _cached(a: Coordinate, b: Coordinate) -> float:
        return base(a, b)

    def _lookup(a: Coordinate, b: Coordinate) -> float:
        if (b.lat, b.lng) < (a.lat, a.lng):
            a, b = b, a
        return _cached(a, b)

    _lookup.cache_info = _cached.cache_info  # type: ignore[attr-defined]
    _lookup.cache_clear = _cached.cache_clear  # type: ignore[attr-defined]
    return _lookup
