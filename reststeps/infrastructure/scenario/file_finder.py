"""Find scenario files by ID."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

PRIORITY = [".json", ".yaml", ".yml"]


class ScenarioFileFinder:
    """Search scenario files under the given base directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def find_by_id(self, scenario_id: str) -> Optional[Path]:
        """
        Find a scenario file by scenario ID, searching subdirectories too.
        With several candidates, .json wins over .yaml over .yml, then the
        shortest path.
        """
        if not self.base_dir.is_dir():
            return None

        candidates: List[Path] = []
        for ext in PRIORITY:
            candidates.extend(p for p in self.base_dir.rglob(f"{scenario_id}{ext}") if p.is_file())

        if not candidates:
            return None

        candidates.sort(key=lambda path: (PRIORITY.index(path.suffix), len(path.parts), str(path)))
        return candidates[0]
