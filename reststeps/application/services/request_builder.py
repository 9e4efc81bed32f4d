# application/services/request_builder.py
from __future__ import annotations

import mimetypes
from contextlib import ExitStack
from dataclasses import replace
from http import HTTPStatus
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from reststeps.application.ports.http_client import (
    Attachment,
    BodyKind,
    HttpResponse,
    MultipartPart,
    OutboundRequest,
    RequestBody,
)
from reststeps.application.services.execution_deps import ExecutionDeps, UrlResolverPort
from reststeps.application.services.redactor import mask_dict, mask_pairs
from reststeps.domain.exceptions import AttachmentError
from reststeps.domain.paths import file_reference_path, is_file_reference, is_multipart, stringify
from reststeps.domain.request import RequestDescription
from reststeps.domain.run import LastResponse, RunContext


def _text(value: Any) -> str:
    return "" if value is None else stringify(value)


def _header_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(_text(v) for v in value)
    return _text(value)


def build_params(query_parameters: Mapping[str, Any]) -> List[Tuple[str, str]]:
    params: List[Tuple[str, str]] = []
    for name, value in (query_parameters or {}).items():
        if isinstance(value, (list, tuple)):
            params.extend((name, _text(v)) for v in value)
        else:
            params.append((name, _text(value)))
    return params


def build_headers(headers: Mapping[str, Any]) -> Tuple[Dict[str, str], Optional[str]]:
    """
    Header map to send, plus the declared acceptable media type.
    An "Accept" header does both: it is sent as is and also becomes the accept type.
    """
    out: Dict[str, str] = {}
    accept: Optional[str] = None
    for name, value in (headers or {}).items():
        text = _header_text(value)
        if name.lower() == "accept":
            accept = text
        out[name] = text
    return out, accept


def build_body(description: RequestDescription) -> RequestBody:
    """
    Entity selection, first match wins:
    raw body > multipart (any "file:" field) > url-encoded form > no entity.
    """
    form = description.form_parameters or {}

    if description.body is not None and description.body.strip():
        return RequestBody(kind=BodyKind.RAW, raw=description.body)

    if is_multipart(form):
        parts: List[MultipartPart] = []
        for name, value in form.items():
            if is_file_reference(value):
                parts.append(MultipartPart(name=name, file_path=file_reference_path(value)))
            else:
                parts.append(MultipartPart(name=name, text=_text(value)))
        return RequestBody(kind=BodyKind.MULTIPART, parts=parts)

    if form:
        return RequestBody(kind=BodyKind.FORM, form=[(name, _text(value)) for name, value in form.items()])

    return RequestBody(kind=BodyKind.NONE)


def status_name(status: int, reason: str = "") -> str:
    try:
        return HTTPStatus(status).name
    except ValueError:
        pass
    if reason:
        return "_".join(reason.upper().split())
    return str(status)


def open_attachments(body: RequestBody, stack: ExitStack) -> List[Attachment]:
    """Open every file part up front, so an unreadable file aborts before anything is sent."""
    if body.kind is not BodyKind.MULTIPART:
        return []

    attachments: List[Attachment] = []
    for part in body.parts:
        if not part.is_file:
            continue
        path = Path(part.file_path)
        try:
            stream = stack.enter_context(path.open("rb"))
        except OSError as e:
            raise AttachmentError(part.name, part.file_path, e.strerror or str(e)) from e
        attachments.append(
            Attachment(
                field=part.name,
                filename=path.name,
                stream=stream,
                content_type=mimetypes.guess_type(path.name)[0] or "application/octet-stream",
            )
        )
    return attachments


class RequestBuilder:
    """Turns a RequestDescription into exactly one HTTP call and keeps its response."""

    def plan(
        self,
        description: RequestDescription,
        url_resolver: UrlResolverPort,
        default_base_url: str = "",
    ) -> OutboundRequest:
        url = url_resolver.resolve(description.base_url or default_base_url, description.end_point)
        headers, accept = build_headers(description.headers)
        return OutboundRequest(
            method=(description.method or "GET").upper(),
            url=url,
            params=build_params(description.query_parameters),
            headers=headers,
            accept=accept,
            body=build_body(description),
        )

    def send(self, description: RequestDescription, ctx: RunContext, deps: ExecutionDeps) -> LastResponse:
        request = self.plan(description, deps.url_resolver, ctx.endpoint or deps.base_url)
        return self.dispatch(request, ctx, deps)

    def fetch(
        self,
        resource: str,
        ctx: RunContext,
        deps: ExecutionDeps,
        params: Optional[Mapping[str, Any]] = None,
    ) -> LastResponse:
        description = RequestDescription(
            base_url=ctx.endpoint or deps.base_url,
            end_point=resource,
            method="GET",
            query_parameters=dict(params or {}),
        )
        return self.send(description, ctx, deps)

    def post_content(
        self,
        content: str,
        resource: str,
        ctx: RunContext,
        deps: ExecutionDeps,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> LastResponse:
        description = RequestDescription(
            base_url=ctx.endpoint or deps.base_url,
            end_point=resource,
            method="POST",
            headers=dict(headers or {}),
            body=content,
        )
        request = self.plan(description, deps.url_resolver)
        if request.body.kind is not BodyKind.RAW:
            # blank content is still posted as is
            request = replace(request, body=RequestBody(kind=BodyKind.RAW, raw=content or ""))
        return self.dispatch(request, ctx, deps)

    def dispatch(self, request: OutboundRequest, ctx: RunContext, deps: ExecutionDeps) -> LastResponse:
        with ExitStack() as stack:
            attachments = open_attachments(request.body, stack)
            deps.logger.info(
                "http.request",
                method=request.method,
                url=request.url,
                params=mask_pairs(request.params),
                accept=request.accept,
                body_kind=request.body.kind.value,
                headers=mask_dict(request.headers),
                form=mask_pairs(request.body.form),
                parts=[p.name for p in request.body.parts],
            )
            resp = deps.http_client.send(request, attachments)

        last = _to_last_response(resp)
        ctx.last = last

        deps.logger.info(
            "http.response",
            status=last.status,
            status_name=last.status_name,
            url=last.url,
            elapsed_ms=resp.elapsed_ms,
            text_head=last.text[:200],
        )
        return last


def _to_last_response(resp: HttpResponse) -> LastResponse:
    return LastResponse(
        status=resp.status,
        status_name=status_name(resp.status, resp.reason),
        url=resp.url,
        text=resp.text,
        headers={k: list(v) for k, v in (resp.headers or {}).items()},
    )
