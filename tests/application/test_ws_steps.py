from __future__ import annotations

import pytest

from mock_http_client import MockHttpClient, json_response, make_deps, text_response
from reststeps import WsSteps
from reststeps.application.ports.http_client import BodyKind
from reststeps.domain.exceptions import AssertionFailure
from reststeps.domain.run import RunContext


def test_login_then_profile_flow() -> None:
    # Arrange
    client = MockHttpClient(
        json_response({"token": "abc"}, headers={"Content-Type": ["application/json"], "X-Auth-Token": ["abc"]}),
        json_response({"user": {"username": "admin", "logins": 450}}),
    )
    steps = WsSteps(RunContext(), make_deps(client))

    # Act
    steps.service_endpoint_is("https://api.example.com")
    steps.user_requests({"endPoint": "/login", "method": "POST", "formParameters": {"user": "admin", "pass": "x"}})
    steps.response_should_have_status_code(200)
    steps.response_should_have_header("Content-Type")
    steps.store_response_body_to("token", "token")
    steps.store_response_header_to("X-Auth-Token", "auth")
    steps.request_for_resource("/users/me", {"token": steps.variables["token"]})

    # Assert
    steps.response_should_have_status("OK")
    steps.response_should_have_value_at("admin", "user.username")
    steps.response_should_not_have_value_at("root", "user.username")
    steps.response_should_be_less_than_at(500, "user.logins")
    steps.response_should_be_greater_than_or_equals_to_at(450, "user.logins")
    steps.response_should_have("user.logins")
    steps.response_should_not_have("user.password")
    assert steps.variables == {"token": "abc", "auth": ["abc"]}
    assert client.last_request.url == "https://api.example.com/users/me"
    assert client.last_request.params == [("token", "abc")]
    with pytest.raises(AssertionFailure):
        steps.response_should_be_greater_than_at(500, "user.logins")


def test_post_content_sends_raw_text() -> None:
    client = MockHttpClient(text_response("<ok/>", status=201))
    steps = WsSteps(RunContext(endpoint="https://api.example.com"), make_deps(client))

    steps.post_content('{"name": "bob"}', "/users")

    assert client.last_request.body.kind is BodyKind.RAW
    assert client.last_request.body.raw == '{"name": "bob"}'
    steps.response_should_have_status("created")
    steps.response_should_have_xpath("/ok")


def test_string_checks_at_path() -> None:
    client = MockHttpClient(json_response({"email": "Admin@Example.com"}))
    steps = WsSteps(RunContext(endpoint="https://api.example.com"), make_deps(client))

    steps.request_for_resource("/me")

    steps.response_should_have_value_contains_at("@Example", "email")
    steps.response_should_have_value_ignoring_case_at("admin@example.com", "email")
    steps.response_should_have_value_contains_ignoring_case_at("admin", "email")
    steps.response_should_have_value_matches_with_at(r"\w+@\w+\.com", "email")
    steps.response_should_have_header_with_value("content-type", "application/json")


def test_each_steps_instance_owns_its_context() -> None:
    client = MockHttpClient()
    deps = make_deps(client)
    first = WsSteps(RunContext(endpoint="https://a.example.com"), deps)
    second = WsSteps(RunContext(endpoint="https://b.example.com"), deps)

    first.request_for_resource("/x")

    assert first.ctx.last is not None
    assert second.ctx.last is None
    assert second.ctx.endpoint == "https://b.example.com"
