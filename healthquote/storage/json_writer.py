"""JSON file storage for exported quotes.

Each export creates a timestamped directory so quotes can be shared with
the client or re-opened later.

Directory structure:
    results/
        2024-01-20_14-30-45_PME_2/
            quote.json
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from healthquote.quoting.comparison import summary_rows
from healthquote.quoting.engine import QuoteResult

logger = logging.getLogger(__name__)


class QuoteExportWriter:
    """Writes quote results as JSON.

    Directory naming: {timestamp}_{category}/ or {timestamp}_{custom_name}/,
    with a _2, _3, ... suffix when a directory of that name already exists.
    """

    def __init__(self, results_dir: Path | str = "results"):
        """Initialize the writer.

        Args:
            results_dir: Base directory for exports. Created if it doesn't exist.
        """
        self.results_dir = Path(results_dir)
        self.results_dir.mkdir(parents=True, exist_ok=True)

    def write_quote(
        self,
        result: QuoteResult,
        broker: Optional[dict[str, Any]] = None,
        custom_name: Optional[str] = None,
    ) -> Path:
        """Write a quote to ``quote.json`` in a new timestamped directory.

        Args:
            result: The quote to export.
            broker: Optional broker details (name, phone) printed on the export.
            custom_name: Optional directory name suffix instead of the category.

        Returns:
            Path to the written file.
        """
        now = datetime.now()
        timestamp = now.strftime("%Y-%m-%d_%H-%M-%S")
        suffix = custom_name or (result.category.value if result.category else "no-category")
        run_dir = self._new_run_dir(f"{timestamp}_{suffix}")

        payload = result.to_dict()
        payload["summary"] = [row.to_dict() for row in summary_rows(result.plan_groups)]
        payload["exported_at"] = now
        if broker:
            payload["broker"] = broker

        path = run_dir / "quote.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self._make_serializable(payload), f, indent=2, ensure_ascii=False)
        logger.info(f"Wrote quote export to {path}")
        return path

    def _new_run_dir(self, name: str) -> Path:
        """Create a fresh export directory, adding _2, _3, ... on name clashes."""
        candidate = self.results_dir / name
        attempt = 1
        while True:
            try:
                candidate.mkdir(parents=True)
                return candidate
            except FileExistsError:
                attempt += 1
                candidate = self.results_dir / f"{name}_{attempt}"

    def _make_serializable(self, obj: Any) -> Any:
        """Convert object to JSON-serializable format."""
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_serializable(v) for v in obj]
        elif isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, Path):
            return str(obj)
        elif hasattr(obj, "to_dict"):
            return self._make_serializable(obj.to_dict())
        else:
            return obj

    def list_exports(self) -> list[Path]:
        """All exported quote files, newest first."""
        return sorted(
            self.results_dir.glob("*/quote.json"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )

    def load_export(self, path: Path) -> dict:
        """Load an exported quote."""
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def load_latest(self) -> Optional[dict]:
        """Load the most recent export, or None if there are none."""
        exports = self.list_exports()
        if not exports:
            return None
        return self.load_export(exports[0])
