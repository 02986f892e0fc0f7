"""Route run storage on the local filesystem.

Each stored route is a run directory under ``<data_root>/outputs`` holding a
``summary.json`` document and a ``stops.csv`` sheet.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

SUMMARY_FILENAME = "summary.json"
STOPS_FILENAME = "stops.csv"


class FileStorage:
    """Stores and reads back route runs below the data root."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"

    def make_run_directory(self, prefix: str = "route") -> Path:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.output_root / f"{prefix}_{timestamp}"
        path.mkdir(parents=True, exist_ok=False)
        return path

    def save_run(self, summary: dict[str, Any], stops_csv: str, *, prefix: str = "route") -> Path:
        """Create a run directory and write the summary and stop sheet into it.

        The directory name is stored in the summary as ``route_id``.
        """

        run_dir = self.make_run_directory(prefix=prefix)
        self.write_json(run_dir / SUMMARY_FILENAME, {**summary, "route_id": run_dir.name})
        self.write_csv(run_dir / STOPS_FILENAME, stops_csv)
        return run_dir

    def run_path(self, run_id: str) -> Path:
        path = self.output_root / run_id
        if run_id in {"", ".", ".."} or path.parent != self.output_root:
            raise FileNotFoundError(f"Unknown route run: {run_id!r}")
        return path

    def load_summary(self, run_id: str) -> dict[str, Any]:
        summary_path = self.run_path(run_id) / SUMMARY_FILENAME
        if not summary_path.is_file():
            raise FileNotFoundError(f"Route run '{run_id}' not found in {self.output_root}")
        with summary_path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def list_runs(self, prefix: str = "route") -> list[str]:
        """Run ids with a stored summary, newest first."""

        if not self.output_root.is_dir():
            return []
        runs = [
            path.name
            for path in self.output_root.iterdir()
            if path.name.startswith(f"{prefix}_") and (path / SUMMARY_FILENAME).is_file()
        ]
        return sorted(runs, reverse=True)

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
