"""Data access helpers for loading citizen pickup requests."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

from ..config import settings
from ..models.domain import RequestRecord
from .bins_repository import coerce_float, read_documents


def request_from_document(document: dict) -> RequestRecord:
    address = document.get("address") or {}
    coordinates = address.get("coordinates") or {}
    return RequestRecord(
        tracking_id=str(document.get("trackingId") or document.get("_id") or "").strip(),
        waste_type=(document.get("wasteType") or "").strip() or None,
        street=(address.get("street") or "").strip() or None,
        city=(address.get("city") or "").strip() or None,
        latitude=coerce_float(coordinates.get("lat")),
        longitude=coerce_float(coordinates.get("lng")),
        status=(document.get("status") or "").strip() or None,
        priority=coerce_float(document.get("priority")),
        raw=document,
    )


@functools.lru_cache(maxsize=1)
def load_requests(source: Optional[Path] = None) -> tuple[RequestRecord, ...]:
    """Load pickup requests from the configured JSON snapshot."""

    json_path = source or settings.requests_file
    return tuple(request_from_document(row) for row in read_documents(json_path, "request"))


def get_approved_requests(source: Optional[Path] = None) -> list[RequestRecord]:
    return [request for request in load_requests(source) if request.status == "approved"]
