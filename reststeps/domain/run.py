# domain/run.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LastResponse:
    status: int
    status_name: str
    url: str
    text: str
    headers: Dict[str, List[str]] = field(default_factory=dict)

    def header_values(self, name: str) -> Optional[List[str]]:
        """Header lookup, case-insensitive as HTTP field names are."""
        wanted = name.lower()
        for key, values in self.headers.items():
            if key.lower() == wanted:
                return list(values)
        return None

    def has_header(self, name: str) -> bool:
        return self.header_values(name) is not None


@dataclass
class RunContext:
    """
    State owned by one test execution. Parallel runs each get their own
    instance, nothing here is shared between runs.
    """
    run_id: str = ""

    vars: Dict[str, Any] = field(default_factory=dict)
    last: Optional[LastResponse] = None
    endpoint: str = ""

    def store(self, variable: str, value: Any) -> None:
        self.vars[variable] = value
