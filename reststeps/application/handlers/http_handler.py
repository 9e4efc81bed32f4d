# application/handlers/http_handler.py
from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Optional

from reststeps.application.handlers.base import StepHandler
from reststeps.application.outcome import StepOutcome
from reststeps.application.services.execution_deps import ExecutionDeps
from reststeps.application.services.request_builder import RequestBuilder
from reststeps.application.services.template_renderer import RenderSources, TemplateRenderer
from reststeps.application.ws_steps import WsSteps
from reststeps.domain.request import RequestDescription
from reststeps.domain.run import RunContext
from reststeps.domain.steps.base import Step
from reststeps.domain.steps.http import EndpointStep, FetchStep, PostStep, RequestStep


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class HttpStepHandler(StepHandler):
    """Endpoint, request, fetch and post steps: everything that talks to the service."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None, builder: Optional[RequestBuilder] = None):
        self._renderer = renderer or TemplateRenderer()
        self._builder = builder or RequestBuilder()

    def supports(self, step: Step) -> bool:
        return isinstance(step, (EndpointStep, RequestStep, FetchStep, PostStep))

    def handle(self, step: Step, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        steps = WsSteps(ctx, deps, builder=self._builder)
        return self._guarded(step, deps, lambda: self._run(step, steps, RenderSources.of(ctx.vars, ctx.last)))

    def _run(self, step: Step, steps: WsSteps, src: RenderSources) -> None:
        r = self._renderer

        if isinstance(step, EndpointStep):
            steps.service_endpoint_is(str(r.render(step.url, src)))
        elif isinstance(step, RequestStep):
            steps.request(self._render_description(step.request, src))
        elif isinstance(step, FetchStep):
            steps.request_for_resource(str(r.render(step.resource, src)), r.render(step.params, src))
        elif isinstance(step, PostStep):
            steps.post_content(
                _as_text(r.render(step.content, src)) or "",
                str(r.render(step.resource, src)),
                r.render(step.headers, src),
            )

    def _render_description(self, desc: RequestDescription, src: RenderSources) -> RequestDescription:
        r = self._renderer
        return replace(
            desc,
            base_url=_as_text(r.render(desc.base_url, src)),
            end_point=_as_text(r.render(desc.end_point, src)),
            headers=r.render(desc.headers, src),
            query_parameters=r.render(desc.query_parameters, src),
            form_parameters=r.render(desc.form_parameters, src),
            body=_as_text(r.render(desc.body, src)),
        )
