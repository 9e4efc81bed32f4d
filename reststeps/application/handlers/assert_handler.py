# application/handlers/assert_handler.py
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from reststeps.application.handlers.base import StepHandler
from reststeps.application.outcome import StepOutcome
from reststeps.application.services.execution_deps import ExecutionDeps
from reststeps.application.services.response_assertions import ResponseAssertions
from reststeps.application.services.template_renderer import RenderSources, TemplateRenderer
from reststeps.domain.run import RunContext
from reststeps.domain.steps.assertion import AssertStep


class AssertStepHandler(StepHandler):
    """Runs the checks of a step in order and stops at the first one that does not hold."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None):
        self._renderer = renderer or TemplateRenderer()

    def supports(self, step) -> bool:
        return isinstance(step, AssertStep)

    def handle(self, step: AssertStep, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        engine = ResponseAssertions(deps.json_path, deps.xpath, deps.logger.bind(step_id=step.id))

        def run_checks() -> None:
            for check in step.checks:
                src = RenderSources.of(ctx.vars, ctx.last)
                rendered = replace(
                    check,
                    path=self._renderer.render(check.path, src),
                    header=self._renderer.render(check.header, src),
                    expected=self._renderer.render(check.expected, src),
                )
                engine.check(ctx, rendered)

        return self._guarded(step, deps, run_checks)
