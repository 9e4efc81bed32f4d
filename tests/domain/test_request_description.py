from __future__ import annotations

import pytest

from reststeps.domain.exceptions import ConfigurationError, RequestPopulateError
from reststeps.domain.request import RequestDescription


def test_from_mapping_accepts_camel_case_keys() -> None:
    desc = RequestDescription.from_mapping(
        {
            "baseUrl": "https://api.example.com",
            "endPoint": "/login",
            "method": "post",
            "headers": {"Accept": "application/json"},
            "queryParameters": {"q": "1"},
            "formParameters": {"user": "admin"},
        }
    )

    assert desc.base_url == "https://api.example.com"
    assert desc.end_point == "/login"
    assert desc.method == "POST"
    assert desc.headers == {"Accept": "application/json"}
    assert desc.query_parameters == {"q": "1"}
    assert desc.form_parameters == {"user": "admin"}
    assert desc.body is None


def test_from_mapping_accepts_snake_case_and_ignores_unknown_keys() -> None:
    desc = RequestDescription.from_mapping({"end_point": "/x", "form_parameters": {"a": 1}, "comment": "ignored"})

    assert desc.end_point == "/x"
    assert desc.form_parameters == {"a": 1}
    assert desc.method == "GET"


def test_from_mapping_serializes_structured_body() -> None:
    desc = RequestDescription.from_mapping({"endPoint": "/users", "body": {"name": "bob"}})

    assert desc.body == '{"name": "bob"}'


def test_from_mapping_rejects_non_mapping() -> None:
    with pytest.raises(RequestPopulateError):
        RequestDescription.from_mapping(["not", "a", "map"])  # type: ignore[arg-type]


def test_from_mapping_rejects_wrong_types() -> None:
    with pytest.raises(RequestPopulateError) as exc:
        RequestDescription.from_mapping({"headers": "Accept: x"})

    assert isinstance(exc.value, ConfigurationError)
    assert "Unable to populate request" in str(exc.value)
