from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from mock_http_client import RecordingLogger
from reststeps.application.services.response_assertions import ResponseAssertions, values_equal
from reststeps.domain.exceptions import (
    AssertionFailure,
    ConfigurationError,
    NoResponseError,
    PathNotFoundError,
    ResolutionError,
    ValueConversionError,
)
from reststeps.domain.run import LastResponse, RunContext
from reststeps.domain.steps.assertion import CheckSpec
from reststeps.infrastructure.document import JsonPathNgEvaluator, LxmlXPathEvaluator

USER = {"user": {"username": "admin", "active": True, "logins": 450, "email": "Admin@Example.com"}, "items": []}


def ctx_with(body: Any, status: int = 200, status_name: str = "OK", headers: Optional[Dict[str, List[str]]] = None) -> RunContext:
    text = body if isinstance(body, str) else json.dumps(body)
    last = LastResponse(
        status=status,
        status_name=status_name,
        url="https://api.example.com/users/1",
        text=text,
        headers=headers if headers is not None else {"Content-Type": ["application/json"]},
    )
    return RunContext(last=last)


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def engine(logger: RecordingLogger) -> ResponseAssertions:
    return ResponseAssertions(JsonPathNgEvaluator(), LxmlXPathEvaluator(), logger)


def test_value_equals_passes_and_fails(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.value_equals(ctx, "admin", "user.username")

    with pytest.raises(AssertionFailure) as exc:
        engine.value_equals(ctx, "root", "user.username")
    assert exc.value.label == "Response Body value at $.user.username"
    assert exc.value.expected == "root"
    assert exc.value.actual == "admin"


def test_greater_than_reports_failure(engine: ResponseAssertions, logger: RecordingLogger) -> None:
    ctx = ctx_with(USER)

    with pytest.raises(AssertionFailure):
        engine.greater_than(ctx, 500, "user.logins")

    assert logger.records[-1][0] == "WARNING"
    assert logger.records[-1][1] == "assert.failed"


def test_numeric_comparisons(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.less_than(ctx, "451", "user.logins")
    engine.less_than_or_equals(ctx, 450, "user.logins")
    engine.greater_than(ctx, 449.5, "user.logins")
    engine.greater_than_or_equals(ctx, "450", "user.logins")


def test_non_numeric_value_is_an_error_not_a_failure(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    with pytest.raises(ValueConversionError):
        engine.less_than(ctx, 10, "user.username")
    with pytest.raises(ValueConversionError):
        engine.less_than(ctx, "ten", "user.logins")


def test_boolean_never_equals_number(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.value_equals(ctx, True, "user.active")
    with pytest.raises(AssertionFailure):
        engine.value_equals(ctx, 1, "user.active")
    assert values_equal(1, 1.0) is True


def test_not_equals_and_contains(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.value_not_equals(ctx, "root", "user.username")
    engine.value_contains(ctx, "dmi", "user.username")
    with pytest.raises(AssertionFailure):
        engine.value_contains(ctx, "root", "user.username")


def test_ignoring_case_checks(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.equals_ignoring_case(ctx, "admin@example.com", "user.email")
    engine.contains_ignoring_case(ctx, "EXAMPLE", "user.email")
    with pytest.raises(AssertionFailure):
        engine.equals_ignoring_case(ctx, "admin", "user.email")


def test_matches_requires_full_match(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.matches(ctx, r"[a-z]+", "user.username")
    with pytest.raises(AssertionFailure):
        engine.matches(ctx, r"adm", "user.username")
    with pytest.raises(ResolutionError):
        engine.matches(ctx, r"(", "user.username")


def test_has_and_not_has_are_complementary(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.has(ctx, "user.username")
    engine.not_has(ctx, "user.password")

    with pytest.raises(AssertionFailure) as exc:
        engine.has(ctx, "user.password")
    assert exc.value.label == "Response Body has $.user.password"

    with pytest.raises(AssertionFailure) as exc:
        engine.not_has(ctx, "$.user.username")
    assert exc.value.label == "Response Body has not $.user.username"


def test_indefinite_path_is_present_even_when_empty(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    assert engine.json_path_exists(ctx, "$.items[*]") is True
    assert engine.read(ctx, "$.items[*]") == []


def test_value_at_missing_path_is_an_error(engine: ResponseAssertions) -> None:
    with pytest.raises(PathNotFoundError):
        engine.value_equals(ctx_with(USER), "x", "user.missing")


def test_status_and_status_code(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER, status=201, status_name="CREATED")

    engine.status(ctx, "created")
    engine.status_code(ctx, 201)
    engine.status_code(ctx, "201")
    with pytest.raises(AssertionFailure):
        engine.status_code(ctx, 200)
    with pytest.raises(ValueConversionError):
        engine.status_code(ctx, "two hundred")


def test_status_code_requires_an_exact_integer(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER, status=200)

    engine.status_code(ctx, 200.0)
    with pytest.raises(ValueConversionError):
        engine.status_code(ctx, 200.7)
    with pytest.raises(ValueConversionError):
        engine.status_code(ctx, True)


def test_header_checks(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER, headers={"Content-Type": ["application/json"], "Vary": ["Accept", "Origin"]})

    engine.has_header(ctx, "content-type")
    engine.has_header_value(ctx, "Vary", "Origin")
    with pytest.raises(AssertionFailure):
        engine.has_header(ctx, "X-Request-Id")
    with pytest.raises(AssertionFailure):
        engine.has_header_value(ctx, "Vary", "Cookie")


def test_xpath_check(engine: ResponseAssertions) -> None:
    ctx = ctx_with("<user><name>admin</name></user>")

    engine.has_xpath(ctx, "/user/name")
    with pytest.raises(AssertionFailure):
        engine.has_xpath(ctx, "/user/email")


def test_store_body_and_header(engine: ResponseAssertions, logger: RecordingLogger) -> None:
    ctx = ctx_with({"token": "abc"}, headers={"X-Auth-Token": ["t1"]})

    assert engine.store_body(ctx, "token", "token") == "abc"
    assert engine.store_header(ctx, "x-auth-token", "auth") == ["t1"]

    assert ctx.vars == {"token": "abc", "auth": ["t1"]}
    assert logger.events().count("store.variable") == 2
    with pytest.raises(ResolutionError):
        engine.store_header(ctx, "X-Missing", "missing")


def test_checks_without_response_raise(engine: ResponseAssertions) -> None:
    with pytest.raises(NoResponseError):
        engine.status_code(RunContext(), 200)


def test_check_dispatch(engine: ResponseAssertions) -> None:
    ctx = ctx_with(USER)

    engine.check(ctx, CheckSpec(op="status_code", expected=200))
    engine.check(ctx, CheckSpec(op="equals", path="user.username", expected="admin"))
    engine.check(ctx, CheckSpec(op="header_value", header="Content-Type", expected="application/json"))

    with pytest.raises(ConfigurationError):
        engine.check(ctx, CheckSpec(op="equals", expected="admin"))
    with pytest.raises(ConfigurationError):
        engine.check(ctx, CheckSpec(op="sounds_like", path="user.username"))
