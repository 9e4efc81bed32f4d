# application/services/execution_deps.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Protocol

from reststeps.application.ports.document import JsonPathPort, XPathPort
from reststeps.application.ports.http_client import HttpClientPort
from reststeps.application.ports.logger import LoggerPort


class UrlResolverPort(Protocol):
    def resolve(self, base_url: Optional[str], end_point: Optional[str]) -> str:
        ...


@dataclass(frozen=True)
class ExecutionDeps:
    http_client: HttpClientPort
    json_path: JsonPathPort
    xpath: XPathPort
    url_resolver: UrlResolverPort
    logger: LoggerPort
    # used when neither the request nor the run context names an endpoint
    base_url: str = ""

    def with_logger(self, logger: LoggerPort) -> "ExecutionDeps":
        return replace(self, logger=logger)
