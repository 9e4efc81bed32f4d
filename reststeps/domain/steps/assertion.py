# domain/steps/assertion.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from reststeps.domain.steps.base import Step

STATUS_OPS = {"status", "status_code"}
HEADER_OPS = {"header", "header_value"}
DOCUMENT_OPS = {"xpath", "has", "not_has"}
VALUE_OPS = {
    "equals",
    "contains",
    "not_equals",
    "less_than",
    "less_than_or_equals",
    "greater_than",
    "greater_than_or_equals",
    "equals_ignoring_case",
    "contains_ignoring_case",
    "matches",
}
CHECK_OPS = STATUS_OPS | HEADER_OPS | DOCUMENT_OPS | VALUE_OPS


@dataclass(frozen=True)
class CheckSpec:
    op: str
    path: Optional[str] = None
    header: Optional[str] = None
    expected: Any = None


@dataclass(frozen=True)
class AssertStep(Step):
    checks: List[CheckSpec] = field(default_factory=list)
