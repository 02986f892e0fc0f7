import json
from pathlib import Path

import pytest

from wasteroute.data import bins_repository, requests_repository


@pytest.fixture(autouse=True)
def clear_repository_caches():
    bins_repository.load_bins.cache_clear()
    requests_repository.load_requests.cache_clear()
    yield
    bins_repository.load_bins.cache_clear()
    requests_repository.load_requests.cache_clear()


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_bins_parses_documents(tmp_path: Path):
    source = _write(
        tmp_path / "bins.json",
        [
            {
                "binId": "BIN-001",
                "location": {"address": " Galle Road ", "coordinates": {"lat": 6.91, "lng": "79.85"}},
                "fillLevel": 92,
                "capacity": 240,
                "binType": "general",
                "status": "active",
            },
            {"binId": "BIN-002", "location": {"address": "Nowhere"}, "fillLevel": 80, "status": "active"},
            "not a document",
        ],
    )

    bins = bins_repository.load_bins(source)

    assert len(bins) == 2
    first, second = bins
    assert first.bin_id == "BIN-001"
    assert first.address == "Galle Road"
    assert (first.latitude, first.longitude) == (6.91, 79.85)
    assert first.fill_level == 92.0
    assert first.bin_type == "general"
    assert second.latitude is None and second.longitude is None


def test_get_collectable_bins_filters_by_status_and_threshold(tmp_path: Path):
    source = _write(
        tmp_path / "bins.json",
        [
            {"binId": "FULL", "fillLevel": 90, "status": "active"},
            {"binId": "EDGE", "fillLevel": 70, "status": "active"},
            {"binId": "LOW", "fillLevel": 69, "status": "active"},
            {"binId": "OFF", "fillLevel": 99, "status": "inactive"},
        ],
    )

    collectable = bins_repository.get_collectable_bins(70, source)

    assert [record.bin_id for record in collectable] == ["FULL", "EDGE"]


def test_get_approved_requests(tmp_path: Path):
    source = _write(
        tmp_path / "requests.json",
        [
            {
                "trackingId": "WR-1",
                "wasteType": "bulky",
                "address": {"street": "12 Flower Road", "city": "Colombo", "coordinates": {"lat": 6.91, "lng": 79.85}},
                "status": "approved",
                "priority": "normal",
            },
            {"trackingId": "WR-2", "wasteType": "household", "address": {}, "status": "pending"},
            {"trackingId": "WR-3", "address": {"street": "Park Street"}, "status": "approved", "priority": 40},
        ],
    )

    approved = requests_repository.get_approved_requests(source)

    assert [request.tracking_id for request in approved] == ["WR-1", "WR-3"]
    assert approved[0].priority is None
    assert approved[0].street == "12 Flower Road"
    assert approved[1].priority == 40.0
    assert approved[1].latitude is None


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        bins_repository.load_bins(tmp_path / "missing.json")


def test_non_array_payload_raises(tmp_path: Path):
    source = _write(tmp_path / "requests.json", {"trackingId": "WR-1"})

    with pytest.raises(ValueError):
        requests_repository.load_requests(source)
