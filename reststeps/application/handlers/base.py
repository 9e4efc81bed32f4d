# application/handlers/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from reststeps.application.outcome import StepOutcome
from reststeps.domain.exceptions import AssertionFailure, StepError
from reststeps.domain.steps.base import Step

if TYPE_CHECKING:
    from reststeps.domain.run import RunContext
    from reststeps.application.services.execution_deps import ExecutionDeps


class StepHandler(ABC):
    @abstractmethod
    def supports(self, step: Step) -> bool: ...

    @abstractmethod
    def handle(self, step: Step, ctx: "RunContext", deps: "ExecutionDeps") -> StepOutcome: ...

    def _guarded(self, step: Step, deps: "ExecutionDeps", action: Callable[[], None]) -> StepOutcome:
        try:
            action()
        except AssertionFailure as e:
            deps.logger.error("step.failed", step_id=step.id, error=str(e))
            return StepOutcome.failed(str(e))
        except StepError as e:
            deps.logger.error("step.errored", step_id=step.id, error_type=type(e).__name__, error=str(e))
            return StepOutcome.errored(f"{type(e).__name__}: {e}")
        return StepOutcome(ok=True)
