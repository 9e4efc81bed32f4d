# domain/steps/http.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from reststeps.domain.request import RequestDescription
from reststeps.domain.steps.base import Step


@dataclass(frozen=True)
class EndpointStep(Step):
    url: str


@dataclass(frozen=True)
class RequestStep(Step):
    request: RequestDescription


@dataclass(frozen=True)
class FetchStep(Step):
    resource: str
    params: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class PostStep(Step):
    content: str
    resource: str
    headers: Dict[str, str] = field(default_factory=dict)
