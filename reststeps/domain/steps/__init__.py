from reststeps.domain.steps.base import Step
from reststeps.domain.steps.http import EndpointStep, FetchStep, PostStep, RequestStep
from reststeps.domain.steps.assertion import AssertStep, CheckSpec
from reststeps.domain.steps.store import StoreStep

__all__ = [
    "Step",
    "EndpointStep",
    "RequestStep",
    "FetchStep",
    "PostStep",
    "AssertStep",
    "CheckSpec",
    "StoreStep",
]
