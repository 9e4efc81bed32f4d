# application/handlers/store_handler.py
from __future__ import annotations

from reststeps.application.handlers.base import StepHandler
from reststeps.application.outcome import StepOutcome
from reststeps.application.services.execution_deps import ExecutionDeps
from reststeps.application.ws_steps import WsSteps
from reststeps.domain.exceptions import ConfigurationError
from reststeps.domain.run import RunContext
from reststeps.domain.steps.store import StoreStep


class StoreStepHandler(StepHandler):
    def supports(self, step) -> bool:
        return isinstance(step, StoreStep)

    def handle(self, step: StoreStep, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        steps = WsSteps(ctx, deps)

        def store() -> None:
            if step.source == "body":
                steps.store_response_body_to(step.target, step.variable)
            elif step.source == "header":
                steps.store_response_header_to(step.target, step.variable)
            else:
                raise ConfigurationError(f"unknown store source: {step.source!r}")

        return self._guarded(step, deps, store)
