# infrastructure/scenario/json_loader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from reststeps.infrastructure.scenario.base_loader import ScenarioLoadError, ScenarioLoaderBase


def _unique_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in pairs:
        if key in out:
            raise ScenarioLoadError(f"duplicate key {key!r}")
        out[key] = value
    return out


class JsonScenarioLoader(ScenarioLoaderBase):
    """JSON scenarios; a UTF-8 BOM is tolerated, duplicate keys are not."""

    def _load_file(self, path: Path) -> Any:
        text = path.read_text(encoding="utf-8-sig")
        try:
            return json.loads(text, object_pairs_hook=_unique_keys)
        except ScenarioLoadError as e:
            raise ScenarioLoadError(f"Scenario file is invalid: {path}: {e}") from e
