"""
Scenario domain model
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from reststeps.domain.steps.base import Step


@dataclass(frozen=True)
class ScenarioMeta:
    id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class ScenarioDefaults:
    endpoint: str = ""
    headers: Dict[str, Any] = field(default_factory=dict)
    vars: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Scenario:
    meta: ScenarioMeta
    steps: List[Step]
    defaults: ScenarioDefaults = field(default_factory=ScenarioDefaults)
