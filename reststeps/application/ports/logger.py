# application/ports/logger.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LoggerPort(ABC):
    """Structured event logger: an event name plus keyword fields."""

    @abstractmethod
    def debug(self, event: str, **fields: Any) -> None:
        ...

    @abstractmethod
    def info(self, event: str, **fields: Any) -> None:
        ...

    @abstractmethod
    def warning(self, event: str, **fields: Any) -> None:
        ...

    @abstractmethod
    def error(self, event: str, **fields: Any) -> None:
        ...

    @abstractmethod
    def bind(self, **fields: Any) -> "LoggerPort":
        """Logger attaching the given fields to every event (e.g. run_id, step_id)."""
        ...
