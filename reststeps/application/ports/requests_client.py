# application/ports/requests_client.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests
from requests.structures import CaseInsensitiveDict

from reststeps.application.ports.http_client import (
    Attachment,
    BodyKind,
    HttpClientPort,
    HttpResponse,
    MultipartPart,
    OutboundRequest,
)
from reststeps.domain.exceptions import TransportError


class RequestsHttpClient(HttpClientPort):
    def __init__(
        self,
        base_headers: Optional[Dict[str, str]] = None,
        timeout_sec: Optional[float] = 20,
        session: Optional[requests.Session] = None,
    ):
        self._session = session or requests.Session()
        self._base_headers = base_headers or {}
        self._timeout = timeout_sec

    def send(self, request: OutboundRequest, attachments: Sequence[Attachment] = ()) -> HttpResponse:
        headers: CaseInsensitiveDict = CaseInsensitiveDict(self._base_headers)
        headers.update(request.headers)

        kwargs: Dict[str, Any] = {
            "method": request.method,
            "url": request.url,
            "params": request.params or None,
            "timeout": self._timeout,
        }

        body = request.body
        if body.kind is BodyKind.RAW:
            kwargs["data"] = (body.raw or "").encode("utf-8")
        elif body.kind is BodyKind.MULTIPART:
            # requests writes multipart/form-data with its own boundary
            headers.pop("Content-Type", None)
            kwargs["files"] = _multipart_files(body.parts, attachments)
        elif body.kind is BodyKind.FORM:
            kwargs["data"] = list(body.form)

        kwargs["headers"] = dict(headers)

        try:
            resp = self._session.request(**kwargs)
        except requests.RequestException as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        if resp.encoding is None and resp.apparent_encoding:
            resp.encoding = resp.apparent_encoding

        return HttpResponse(
            status=resp.status_code,
            reason=resp.reason or "",
            url=str(resp.url),
            text=resp.text,
            headers=_header_lists(resp),
            elapsed_ms=int(resp.elapsed.total_seconds() * 1000),
        )


def _multipart_files(parts: List[MultipartPart], attachments: Sequence[Attachment]) -> List[Tuple[str, tuple]]:
    opened = iter(attachments)
    files: List[Tuple[str, tuple]] = []
    for part in parts:
        if not part.is_file:
            files.append((part.name, (None, part.text or "")))
            continue
        att = next(opened, None)
        if att is None:
            raise TransportError(f"no opened attachment for part {part.name!r}")
        files.append((att.field, (att.filename, att.stream, att.content_type)))
    return files


def _header_lists(resp: requests.Response) -> Dict[str, List[str]]:
    # the urllib3 header map keeps repeated headers apart, resp.headers joins them
    raw = getattr(getattr(resp, "raw", None), "headers", None)
    if raw is not None and hasattr(raw, "getlist"):
        return {name: list(raw.getlist(name)) for name in raw.keys()}
    return {name: [value] for name, value in resp.headers.items()}
