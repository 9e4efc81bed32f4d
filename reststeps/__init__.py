from reststeps.application.ws_steps import WsSteps
from reststeps.domain.request import RequestDescription
from reststeps.domain.run import LastResponse, RunContext

__all__ = ["WsSteps", "RequestDescription", "RunContext", "LastResponse"]

__version__ = "0.1.0"
