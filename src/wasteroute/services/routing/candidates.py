"""Conversion of bin and request records into stop candidates."""

from __future__ import annotations

from typing import Optional, Sequence

from ...models.domain import BinRecord, RequestRecord
from .errors import InvalidCoordinateError
from .models import Coordinate, OptimizationOptions, StopCandidate, StopKind, is_finite_number

# Below any fill level a bin needs to pass a realistic threshold, so bins win
# ties against ad-hoc pickups.
REQUEST_BASELINE_PRIORITY = 0.0

ACTIVE_BIN_STATUS = "active"
APPROVED_REQUEST_STATUS = "approved"


def _try_coordinate(lat: object, lng: object) -> Optional[Coordinate]:
    try:
        return Coordinate(lat=lat, lng=lng)  # type: ignore[arg-type]
    except InvalidCoordinateError:
        return None


def _request_address(request: RequestRecord) -> str:
    parts = [part.strip() for part in (request.street, request.city) if part and part.strip()]
    return ", ".join(parts) if parts else "Unknown"


def _bin_candidate(record: BinRecord, location: Coordinate) -> StopCandidate:
    return StopCandidate(
        kind=StopKind.BIN_COLLECTION,
        reference_id=record.bin_id,
        location=location,
        address=(record.address or "").strip() or "Unknown",
        priority_hint=float(record.fill_level),
        metadata={
            "fill_level": record.fill_level,
            "bin_type": record.bin_type,
            "capacity": record.capacity,
        },
    )


def _request_candidate(record: RequestRecord, location: Coordinate) -> StopCandidate:
    priority = record.priority if is_finite_number(record.priority) else REQUEST_BASELINE_PRIORITY
    return StopCandidate(
        kind=StopKind.REQUEST_PICKUP,
        reference_id=record.tracking_id,
        location=location,
        address=_request_address(record),
        priority_hint=float(priority),
        metadata={
            "waste_type": record.waste_type,
            "tracking_id": record.tracking_id,
        },
    )


def is_collectable_bin(record: BinRecord, fill_level_threshold: float) -> bool:
    """Active bins with a numeric fill level at or above the threshold."""

    if record.status != ACTIVE_BIN_STATUS or not is_finite_number(record.fill_level):
        return False
    return record.fill_level >= fill_level_threshold


def partition_candidates(
    bins: Sequence[BinRecord],
    requests: Sequence[RequestRecord],
    options: OptimizationOptions,
) -> tuple[list[StopCandidate], list[str]]:
    """Build candidates and report eligible records dropped for unusable coordinates.

    Returns ``(candidates, rejected_reference_ids)``. Bins come first, then
    requests, each in input order; the sequencer relies on that order for its
    final tie-break.
    """

    candidates: list[StopCandidate] = []
    rejected: list[str] = []

    for record in bins:
        if not is_collectable_bin(record, options.fill_level_threshold):
            continue
        location = _try_coordinate(record.latitude, record.longitude)
        if location is None:
            rejected.append(record.bin_id)
            continue
        candidates.append(_bin_candidate(record, location))

    if options.include_requests:
        for request in requests:
            if request.status != APPROVED_REQUEST_STATUS:
                continue
            location = _try_coordinate(request.latitude, request.longitude)
            if location is None:
                rejected.append(request.tracking_id)
                continue
            candidates.append(_request_candidate(request, location))

    return candidates, rejected


def build_candidates(
    bins: Sequence[BinRecord],
    requests: Sequence[RequestRecord],
    options: OptimizationOptions,
) -> list[StopCandidate]:
    candidates, _ = partition_candidates(bins, requests, options)
    return candidates
