# application/ports/document.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class JsonPathPort(ABC):
    @abstractmethod
    def read(self, document: str, path: str) -> Any:
        """
        Value selected by a rooted JSON path.
        Raises PathNotFoundError when nothing matches and ResolutionError for
        a malformed document or expression.
        """
        ...


class XPathPort(ABC):
    @abstractmethod
    def has_xpath(self, document: str, expression: str) -> bool:
        ...
