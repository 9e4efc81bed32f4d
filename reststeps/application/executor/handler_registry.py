# application/executor/handler_registry.py
from __future__ import annotations

from typing import List

from reststeps.application.handlers.base import StepHandler
from reststeps.domain.exceptions import ConfigurationError
from reststeps.domain.steps.base import Step


class HandlerRegistry:
    def __init__(self, handlers: List[StepHandler]):
        self._handlers = handlers

    def get_handler(self, step: Step) -> StepHandler:
        for h in self._handlers:
            if h.supports(step):
                return h
        raise ConfigurationError(f"No handler found for step: {type(step).__name__} ({step.id})")

    @classmethod
    def default(cls) -> "HandlerRegistry":
        from reststeps.application.handlers.assert_handler import AssertStepHandler
        from reststeps.application.handlers.http_handler import HttpStepHandler
        from reststeps.application.handlers.store_handler import StoreStepHandler

        return cls([HttpStepHandler(), AssertStepHandler(), StoreStepHandler()])
