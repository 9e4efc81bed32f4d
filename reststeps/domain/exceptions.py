# domain/exceptions.py
from __future__ import annotations

from typing import Any


class StepError(Exception):
    """Base for conditions that make a step error out (as opposed to fail)."""


class ConfigurationError(StepError):
    pass


class RequestPopulateError(ConfigurationError):
    pass


class NoResponseError(ConfigurationError):
    pass


class TransportError(StepError, IOError):
    pass


class AttachmentError(TransportError):
    def __init__(self, field: str, path: str, reason: str):
        super().__init__(f"cannot attach {path!r} as {field!r}: {reason}")
        self.field = field
        self.path = path


class ResolutionError(StepError):
    pass


class PathNotFoundError(ResolutionError):
    def __init__(self, path: str):
        super().__init__(f"No results for path: {path}")
        self.path = path


class ValueConversionError(StepError, ValueError):
    pass


class AssertionFailure(AssertionError):
    def __init__(self, label: str, expected: Any, actual: Any, description: str = ""):
        self.label = label
        self.expected = expected
        self.actual = actual
        self.description = description
        super().__init__(self._format())

    def _format(self) -> str:
        expected = self.description or repr(self.expected)
        return f"{self.label}\nExpected: {expected}\n     but: was {self.actual!r}"
