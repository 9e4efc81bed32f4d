# application/ports/http_client.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Dict, List, Optional, Sequence, Tuple


class BodyKind(str, Enum):
    NONE = "none"
    RAW = "raw"
    MULTIPART = "multipart"
    FORM = "form"


@dataclass(frozen=True)
class MultipartPart:
    name: str
    text: Optional[str] = None
    file_path: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.file_path is not None


@dataclass(frozen=True)
class RequestBody:
    kind: BodyKind
    raw: Optional[str] = None
    form: List[Tuple[str, str]] = field(default_factory=list)
    parts: List[MultipartPart] = field(default_factory=list)


@dataclass(frozen=True)
class OutboundRequest:
    method: str
    url: str
    params: List[Tuple[str, str]] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    accept: Optional[str] = None
    body: RequestBody = field(default_factory=lambda: RequestBody(kind=BodyKind.NONE))


@dataclass(frozen=True)
class Attachment:
    """An opened file part, in the same order as the file parts of the body."""
    field: str
    filename: str
    stream: BinaryIO
    content_type: str


@dataclass(frozen=True)
class HttpResponse:
    status: int
    reason: str
    url: str
    text: str
    headers: Dict[str, List[str]]
    elapsed_ms: int = 0


class HttpClientPort(ABC):
    @abstractmethod
    def send(self, request: OutboundRequest, attachments: Sequence[Attachment] = ()) -> HttpResponse:
        ...
