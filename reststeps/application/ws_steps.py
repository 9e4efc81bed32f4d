# application/ws_steps.py
"""
Web service steps, one method per step phrase.

    steps = WsSteps(RunContext(), deps)
    steps.service_endpoint_is("https://api.example.com")
    steps.user_requests({"endPoint": "/login", "method": "POST",
                         "formParameters": {"user": "admin", "pass": "x"}})
    steps.response_should_have_status_code(200)
    steps.response_should_have_value_at("admin", "user.username")
    steps.store_response_body_to("token", "token")

Every instance works on its own RunContext, so parallel runs do not share
the last response or stored variables.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from reststeps.application.services.execution_deps import ExecutionDeps
from reststeps.application.services.request_builder import RequestBuilder
from reststeps.application.services.response_assertions import ResponseAssertions
from reststeps.domain.request import RequestDescription
from reststeps.domain.run import LastResponse, RunContext


class WsSteps:
    def __init__(
        self,
        ctx: RunContext,
        deps: ExecutionDeps,
        builder: Optional[RequestBuilder] = None,
        assertions: Optional[ResponseAssertions] = None,
    ):
        self.ctx = ctx
        self.deps = deps
        self._builder = builder or RequestBuilder()
        self._assert = assertions or ResponseAssertions(deps.json_path, deps.xpath, deps.logger)

    # -- requests ------------------------------------------------------------

    def service_endpoint_is(self, endpoint: str) -> None:
        """service endpoint is {endpoint}"""
        self.ctx.endpoint = endpoint
        self.deps.logger.info("endpoint.set", endpoint=endpoint)

    def request_for_resource(self, resource: str, params: Optional[Mapping[str, str]] = None) -> LastResponse:
        """user request for resource {resource} [with {params}]"""
        return self._builder.fetch(resource, self.ctx, self.deps, params)

    def post_content(self, content: str, resource: str, headers: Optional[Mapping[str, Any]] = None) -> LastResponse:
        """user post {content} for resource {resource}"""
        return self._builder.post_content(content, resource, self.ctx, self.deps, headers)

    def user_requests(self, request: Mapping[str, Any]) -> LastResponse:
        """user requests {request}"""
        return self.request(RequestDescription.from_mapping(request))

    def request(self, description: RequestDescription) -> LastResponse:
        return self._builder.send(description, self.ctx, self.deps)

    # -- status / headers / xml ----------------------------------------------

    def response_should_have_status(self, status: str) -> None:
        """response should have status {status}, e.g. OK, CREATED"""
        self._assert.status(self.ctx, status)

    def response_should_have_status_code(self, status_code: int) -> None:
        self._assert.status_code(self.ctx, status_code)

    def response_should_have_xpath(self, xpath: str) -> None:
        self._assert.has_xpath(self.ctx, xpath)

    def response_should_have_header(self, header: str) -> None:
        self._assert.has_header(self.ctx, header)

    def response_should_have_header_with_value(self, header: str, value: str) -> None:
        self._assert.has_header_value(self.ctx, header, value)

    # -- json path -----------------------------------------------------------

    def response_should_have(self, jsonpath: str) -> None:
        """response should have {jsonpath}"""
        self._assert.has(self.ctx, jsonpath)

    def response_should_not_have(self, jsonpath: str) -> None:
        """response should not have {jsonpath}"""
        self._assert.not_has(self.ctx, jsonpath)

    def response_should_have_value_at(self, expected: Any, jsonpath: str) -> None:
        """response should have {expectedvalue} at {jsonpath}"""
        self._assert.value_equals(self.ctx, expected, jsonpath)

    def response_should_have_value_contains_at(self, expected: str, jsonpath: str) -> None:
        self._assert.value_contains(self.ctx, expected, jsonpath)

    def response_should_not_have_value_at(self, expected: Any, jsonpath: str) -> None:
        self._assert.value_not_equals(self.ctx, expected, jsonpath)

    def response_should_be_less_than_at(self, expected: float, jsonpath: str) -> None:
        self._assert.less_than(self.ctx, expected, jsonpath)

    def response_should_be_less_than_or_equals_to_at(self, expected: float, jsonpath: str) -> None:
        self._assert.less_than_or_equals(self.ctx, expected, jsonpath)

    def response_should_be_greater_than_at(self, expected: float, jsonpath: str) -> None:
        self._assert.greater_than(self.ctx, expected, jsonpath)

    def response_should_be_greater_than_or_equals_to_at(self, expected: float, jsonpath: str) -> None:
        self._assert.greater_than_or_equals(self.ctx, expected, jsonpath)

    def response_should_have_value_ignoring_case_at(self, expected: str, jsonpath: str) -> None:
        self._assert.equals_ignoring_case(self.ctx, expected, jsonpath)

    def response_should_have_value_contains_ignoring_case_at(self, expected: str, jsonpath: str) -> None:
        self._assert.contains_ignoring_case(self.ctx, expected, jsonpath)

    def response_should_have_value_matches_with_at(self, regex: str, jsonpath: str) -> None:
        """response should have value matches with {regEx} at {jsonpath}"""
        self._assert.matches(self.ctx, regex, jsonpath)

    # -- extraction ----------------------------------------------------------

    def store_response_body_to(self, jsonpath: str, variable: str) -> Any:
        """store response body {jsonpath} into {variable}"""
        return self._assert.store_body(self.ctx, jsonpath, variable)

    def store_response_header_to(self, header: str, variable: str) -> List[str]:
        """store response header {header} into {variable}"""
        return self._assert.store_header(self.ctx, header, variable)

    @property
    def variables(self) -> Dict[str, Any]:
        return self.ctx.vars
