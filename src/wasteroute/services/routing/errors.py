"""Exceptions raised by the route optimization engine.

All of them derive from ``ValueError`` so the API layer rejects them as bad
requests, the same way it treats any other invalid routing payload.
"""

from __future__ import annotations


class RouteOptimizationError(ValueError):
    """Base class for conditions the engine refuses to optimize."""


class InvalidInputError(RouteOptimizationError):
    """Raised for malformed input the engine cannot route from."""


class InvalidCoordinateError(InvalidInputError):
    """Raised when a latitude/longitude pair is missing or out of range."""


class ConfigurationOutOfRangeError(RouteOptimizationError):
    """Raised when an optimization option falls outside its accepted range."""
