"""Domain models for smart bin and pickup request records."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True)
class BinRecord:
    """Snapshot of a smart bin as returned by the bin repository."""

    bin_id: str
    address: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    fill_level: float
    capacity: Optional[float]
    bin_type: Optional[str]
    status: Optional[str]
    raw: dict = field(default_factory=dict)


@dataclass(slots=True)
class RequestRecord:
    """Snapshot of a citizen pickup request as returned by the request repository."""

    tracking_id: str
    waste_type: Optional[str]
    street: Optional[str]
    city: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    status: Optional[str]
    priority: Optional[float] = None
    raw: dict = field(default_factory=dict)
