"""Data access helpers for loading smart bin snapshots."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import BinRecord
from ..services.routing.candidates import is_collectable_bin

logger = logging.getLogger(__name__)


def coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError:
        return None


def read_documents(path: Path, kind: str) -> list[dict]:
    """Read a JSON array of documents, keeping only object entries."""

    if not path.exists():
        raise FileNotFoundError(f"{kind.capitalize()} file not found: {path}")
    with path.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list):
        raise ValueError(f"{kind.capitalize()} file '{path}' must contain a JSON array.")

    documents = [row for row in payload if isinstance(row, dict)]
    skipped = len(payload) - len(documents)
    if skipped:
        logger.warning(f"Skipped {skipped} non-object {kind} entries in {path}")
    return documents


def bin_from_document(document: dict) -> BinRecord:
    location = document.get("location") or {}
    coordinates = location.get("coordinates") or {}
    return BinRecord(
        bin_id=str(document.get("binId") or document.get("_id") or "").strip(),
        address=(location.get("address") or "").strip() or None,
        latitude=coerce_float(coordinates.get("lat")),
        longitude=coerce_float(coordinates.get("lng")),
        fill_level=coerce_float(document.get("fillLevel")) or 0.0,
        capacity=coerce_float(document.get("capacity")),
        bin_type=(document.get("binType") or "").strip() or None,
        status=(document.get("status") or "").strip() or None,
        raw=document,
    )


@functools.lru_cache(maxsize=1)
def load_bins(source: Optional[Path] = None) -> tuple[BinRecord, ...]:
    """Load bins from the configured JSON snapshot."""

    json_path = source or settings.bins_file
    return tuple(bin_from_document(row) for row in read_documents(json_path, "bin"))


def get_collectable_bins(fill_level_threshold: float, source: Optional[Path] = None) -> list[BinRecord]:
    """Active bins filled to at least ``fill_level_threshold`` percent."""

    return [record for record in load_bins(source) if is_collectable_bin(record, fill_level_threshold)]
