# application/executor/step_executor.py
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import List, Optional

from reststeps.application.executor.handler_registry import HandlerRegistry
from reststeps.application.outcome import StepOutcome
from reststeps.application.services.execution_deps import ExecutionDeps
from reststeps.domain.run import RunContext
from reststeps.domain.steps.base import Step


@dataclass(frozen=True)
class ExecutionResult:
    ok: bool
    failed_step_id: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None
    executed: int = 0


class StepExecutor:
    """Runs steps in order against one RunContext and stops at the first step that is not ok."""

    def __init__(self, registry: HandlerRegistry):
        self._registry = registry

    def execute(self, steps: List[Step], ctx: RunContext, deps: ExecutionDeps) -> ExecutionResult:
        if not ctx.run_id:
            ctx.run_id = uuid.uuid4().hex

        deps = deps.with_logger(deps.logger.bind(run_id=ctx.run_id))

        executed = 0
        for step in steps:
            if step.enabled is False:
                deps.logger.debug("step.skipped", step_id=step.id)
                continue

            outcome = self._execute_step(step, ctx, deps.with_logger(deps.logger.bind(step_id=step.id)))
            executed += 1

            if not outcome.ok:
                return ExecutionResult(
                    ok=False,
                    failed_step_id=step.id,
                    error_message=outcome.error_message,
                    error_kind=outcome.error_kind,
                    executed=executed,
                )

        return ExecutionResult(ok=True, executed=executed)

    def _execute_step(self, step: Step, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        handler = self._registry.get_handler(step)

        deps.logger.info("step.start", step_type=step.kind, name=step.name)
        t0 = time.perf_counter()

        outcome = handler.handle(step, ctx, deps)

        if outcome is None:
            raise RuntimeError(
                f"Handler returned None: handler={type(handler).__name__}, step={step.id} ({type(step).__name__})"
            )

        deps.logger.info(
            "step.end",
            ok=outcome.ok,
            error_kind=outcome.error_kind,
            elapsed_ms=int((time.perf_counter() - t0) * 1000),
        )
        return outcome
