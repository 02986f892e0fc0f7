import pytest

from wasteroute.models.domain import BinRecord, RequestRecord
from wasteroute.services.routing.candidates import (
    REQUEST_BASELINE_PRIORITY,
    build_candidates,
    partition_candidates,
)
from wasteroute.services.routing.errors import (
    ConfigurationOutOfRangeError,
    InvalidCoordinateError,
    InvalidInputError,
)
from wasteroute.services.routing.models import Coordinate, OptimizationOptions, StopCandidate, StopKind

DEPOT = Coordinate(lat=6.9271, lng=79.8612)


def _bin(bin_id: str, lat, lng, fill_level: float = 80, status: str = "active") -> BinRecord:
    return BinRecord(
        bin_id=bin_id,
        address=f"{bin_id} street",
        latitude=lat,
        longitude=lng,
        fill_level=fill_level,
        capacity=240,
        bin_type="general",
        status=status,
    )


def _request(tracking_id: str, lat, lng, status: str = "approved", priority=None) -> RequestRecord:
    return RequestRecord(
        tracking_id=tracking_id,
        waste_type="bulky",
        street="12 Flower Road",
        city="Colombo 07",
        latitude=lat,
        longitude=lng,
        status=status,
        priority=priority,
    )


def test_threshold_is_inclusive():
    options = OptimizationOptions(start_location=DEPOT, fill_level_threshold=70)
    bins = [_bin("AT", 6.90, 79.86, fill_level=70), _bin("BELOW", 6.91, 79.86, fill_level=69)]

    candidates = build_candidates(bins, [], options)

    assert [c.reference_id for c in candidates] == ["AT"]


def test_inactive_bins_and_unapproved_requests_are_excluded():
    options = OptimizationOptions(start_location=DEPOT)
    bins = [_bin("ACTIVE", 6.90, 79.86), _bin("BROKEN", 6.91, 79.86, status="maintenance")]
    requests = [_request("R1", 6.92, 79.85), _request("R2", 6.93, 79.85, status="pending")]

    candidates = build_candidates(bins, requests, options)

    assert [(c.kind, c.reference_id) for c in candidates] == [
        (StopKind.BIN_COLLECTION, "ACTIVE"),
        (StopKind.REQUEST_PICKUP, "R1"),
    ]


def test_candidate_fields_and_priorities():
    options = OptimizationOptions(start_location=DEPOT)
    bins = [_bin("B1", 6.90, 79.86, fill_level=95)]
    requests = [_request("R1", 6.92, 79.85), _request("R2", 6.93, 79.85, priority=50)]

    bin_candidate, default_request, custom_request = build_candidates(bins, requests, options)

    assert bin_candidate.priority_hint == 95
    assert bin_candidate.priority_label == "urgent"
    assert bin_candidate.metadata == {"fill_level": 95, "bin_type": "general", "capacity": 240}
    assert bin_candidate.location == Coordinate(lat=6.90, lng=79.86)

    assert default_request.priority_hint == REQUEST_BASELINE_PRIORITY
    assert default_request.priority_label == "normal"
    assert default_request.address == "12 Flower Road, Colombo 07"
    assert default_request.metadata == {"waste_type": "bulky", "tracking_id": "R1"}
    assert custom_request.priority_hint == 50


def test_include_requests_false_skips_requests():
    options = OptimizationOptions(start_location=DEPOT, include_requests=False)

    candidates = build_candidates([], [_request("R1", 6.92, 79.85)], options)

    assert candidates == []


def test_malformed_coordinates_are_dropped_not_raised():
    options = OptimizationOptions(start_location=DEPOT)
    bins = [
        _bin("GOOD", 6.90, 79.86),
        _bin("LAT200", 200, 79.86, fill_level=100),
        _bin("MISSING", None, None),
        _bin("TEXT", "north", 79.86),
    ]
    requests = [_request("NO_COORDS", None, 79.85)]

    candidates, rejected = partition_candidates(bins, requests, options)

    assert [c.reference_id for c in candidates] == ["GOOD"]
    assert rejected == ["LAT200", "MISSING", "TEXT", "NO_COORDS"]


def test_empty_input_returns_empty_list():
    options = OptimizationOptions(start_location=DEPOT)
    assert build_candidates([], [], options) == []


def test_builder_does_not_mutate_records():
    options = OptimizationOptions(start_location=DEPOT)
    record = _bin("B1", 6.90, 79.86)
    before = (record.bin_id, record.latitude, record.longitude, record.fill_level, record.status)

    build_candidates([record], [], options)

    assert (record.bin_id, record.latitude, record.longitude, record.fill_level, record.status) == before


@pytest.mark.parametrize("lat, lng", [(90.5, 0.0), (-91, 0.0), (0.0, 181), (float("nan"), 0.0), (True, 0.0)])
def test_coordinate_rejects_invalid_values(lat, lng):
    with pytest.raises(InvalidCoordinateError):
        Coordinate(lat=lat, lng=lng)


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_stops": -1},
        {"fill_level_threshold": 101},
        {"fill_level_threshold": -1},
        {"fill_level_threshold": 70.5},
        {"fill_level_threshold": True},
        {"average_speed_kmh": 0},
        {"service_time_minutes": -5},
        {"tie_epsilon_km": -0.1},
    ],
)
def test_options_reject_out_of_range_configuration(overrides):
    with pytest.raises(ConfigurationOutOfRangeError):
        OptimizationOptions(start_location=DEPOT, **overrides)


def test_options_require_a_start_location():
    with pytest.raises(InvalidInputError):
        OptimizationOptions(start_location=None)


def test_bins_without_numeric_fill_level_are_skipped():
    options = OptimizationOptions(start_location=DEPOT, fill_level_threshold=0)
    bins = [
        _bin("UNKNOWN", 6.90, 79.86, fill_level=None),
        _bin("TEXT", 6.91, 79.86, fill_level="full"),
        _bin("NAN", 6.92, 79.86, fill_level=float("nan")),
        _bin("OK", 6.93, 79.86, fill_level=0),
    ]

    candidates, rejected = partition_candidates(bins, [], options)

    assert [c.reference_id for c in candidates] == ["OK"]
    assert rejected == []


@pytest.mark.parametrize("priority", ["high", float("nan"), float("inf"), True])
def test_non_numeric_request_priority_falls_back_to_baseline(priority):
    options = OptimizationOptions(start_location=DEPOT)

    (candidate,) = build_candidates([], [_request("R1", 6.92, 79.85, priority=priority)], options)

    assert candidate.priority_hint == REQUEST_BASELINE_PRIORITY


@pytest.mark.parametrize("priority_hint", [float("nan"), "urgent", None])
def test_stop_candidate_rejects_non_finite_priority(priority_hint):
    with pytest.raises(InvalidInputError):
        StopCandidate(
            kind=StopKind.REQUEST_PICKUP,
            reference_id="R1",
            location=DEPOT,
            address="Depot",
            priority_hint=priority_hint,
        )


def test_candidate_metadata_is_read_only():
    options = OptimizationOptions(start_location=DEPOT)
    source = {"fill_level": 80}
    candidate = StopCandidate(StopKind.BIN_COLLECTION, "B1", DEPOT, "Depot", 80.0, source)

    source["fill_level"] = 10
    (built,) = build_candidates([_bin("B1", 6.90, 79.86)], [], options)

    assert candidate.metadata["fill_level"] == 80
    with pytest.raises(TypeError):
        built.metadata["fill_level"] = 0
