# domain/steps/store.py
from __future__ import annotations

from dataclasses import dataclass

from reststeps.domain.steps.base import Step


@dataclass(frozen=True)
class StoreStep(Step):
    source: str     # "body" | "header"
    target: str     # json path or header name
    variable: str
