# application/outcome.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

FAILED = "failed"    # a check did not hold
ERRORED = "errored"  # the step could not be carried out


@dataclass(frozen=True)
class StepOutcome:
    ok: bool
    error_message: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def failed(cls, message: str) -> "StepOutcome":
        return cls(ok=False, error_message=message, error_kind=FAILED)

    @classmethod
    def errored(cls, message: str) -> "StepOutcome":
        return cls(ok=False, error_message=message, error_kind=ERRORED)
