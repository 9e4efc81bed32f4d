# domain/steps/base.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Step:
    """Common header of every scenario step. Disabled steps are skipped, not run."""
    id: str
    name: str
    enabled: bool = field(default=True, kw_only=True)

    @property
    def kind(self) -> str:
        # "FetchStep" -> "fetch"
        return type(self).__name__.removesuffix("Step").lower()
