from __future__ import annotations

from pathlib import Path

from mock_http_client import MockHttpClient, RecordingLogger, make_deps
from reststeps.application.handlers.http_handler import HttpStepHandler
from reststeps.application.outcome import ERRORED
from reststeps.application.ports.http_client import BodyKind
from reststeps.domain.request import RequestDescription
from reststeps.domain.run import RunContext
from reststeps.domain.steps import AssertStep, EndpointStep, FetchStep, PostStep, RequestStep


def test_request_step_renders_templates_before_sending() -> None:
    # Arrange
    client = MockHttpClient()
    handler = HttpStepHandler()
    ctx = RunContext(vars={"user": "admin", "id": 7}, endpoint="https://api.example.com")
    step = RequestStep(
        id="login",
        name="login",
        request=RequestDescription(
            end_point="/users/${vars.id}",
            method="POST",
            form_parameters={"user": "${vars.user}"},
        ),
    )

    # Act
    outcome = handler.handle(step, ctx, make_deps(client))

    # Assert
    assert outcome.ok is True
    assert client.last_request.url == "https://api.example.com/users/7"
    assert client.last_request.body.form == [("user", "admin")]
    assert ctx.last is not None


def test_endpoint_then_fetch() -> None:
    client = MockHttpClient()
    handler = HttpStepHandler()
    ctx = RunContext(vars={"host": "https://api.example.com"})
    deps = make_deps(client)

    assert handler.handle(EndpointStep(id="e", name="e", url="${vars.host}"), ctx, deps).ok
    assert handler.handle(FetchStep(id="f", name="f", resource="/items", params={"page": "1"}), ctx, deps).ok

    assert ctx.endpoint == "https://api.example.com"
    assert client.last_request.url == "https://api.example.com/items"
    assert client.last_request.params == [("page", "1")]


def test_post_step_serializes_structured_content() -> None:
    client = MockHttpClient()
    ctx = RunContext(vars={"name": "bob"}, endpoint="https://api.example.com")
    step = PostStep(id="p", name="p", content={"name": "${vars.name}"}, resource="/users")  # type: ignore[arg-type]

    outcome = HttpStepHandler().handle(step, ctx, make_deps(client))

    assert outcome.ok is True
    assert client.last_request.body.kind is BodyKind.RAW
    assert client.last_request.body.raw == '{"name": "bob"}'


def test_missing_attachment_is_reported_as_errored(tmp_path: Path) -> None:
    client = MockHttpClient()
    logger = RecordingLogger()
    ctx = RunContext(endpoint="https://api.example.com")
    step = RequestStep(
        id="upload",
        name="upload",
        request=RequestDescription(end_point="/upload", method="POST", form_parameters={"f": f"file:{tmp_path / 'nope'}"}),
    )

    outcome = HttpStepHandler().handle(step, ctx, make_deps(client, logger))

    assert outcome.ok is False
    assert outcome.error_kind == ERRORED
    assert outcome.error_message.startswith("AttachmentError:")
    assert client.requests == []
    assert "step.errored" in logger.events()


def test_supports_only_http_steps() -> None:
    handler = HttpStepHandler()

    assert handler.supports(FetchStep(id="f", name="f", resource="/x")) is True
    assert handler.supports(AssertStep(id="a", name="a", checks=[])) is False
