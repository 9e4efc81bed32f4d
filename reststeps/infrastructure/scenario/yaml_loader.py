# infrastructure/scenario/yaml_loader.py
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from reststeps.infrastructure.scenario.base_loader import ScenarioLoaderBase


class YamlScenarioLoader(ScenarioLoaderBase):
    def _load_file(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
