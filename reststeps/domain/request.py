# domain/request.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from reststeps.domain.exceptions import RequestPopulateError


@dataclass(frozen=True)
class RequestDescription:
    base_url: Optional[str] = None
    end_point: Optional[str] = None
    method: str = "GET"
    headers: Dict[str, Any] = field(default_factory=dict)
    query_parameters: Dict[str, Any] = field(default_factory=dict)
    form_parameters: Dict[str, Any] = field(default_factory=dict)
    body: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RequestDescription":
        """
        Build a description from a loosely typed map, e.g. a step argument:
        {"endPoint": "/login", "method": "post", "formParameters": {...}}
        """
        if not isinstance(data, Mapping):
            raise RequestPopulateError(f"Unable to populate request from {type(data).__name__}")
        try:
            model = _RequestModel.model_validate(dict(data))
        except ValidationError as e:
            raise RequestPopulateError(f"Unable to populate request: {e}") from e

        return cls(
            base_url=model.base_url,
            end_point=model.end_point,
            method=model.method,
            headers=model.headers or {},
            query_parameters=model.query_parameters or {},
            form_parameters=model.form_parameters or {},
            body=model.body,
        )


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("baseUrl", "base_url"))
    end_point: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("endPoint", "end_point", "endpoint"),
    )
    method: str = "GET"
    headers: Optional[Dict[str, Any]] = None
    query_parameters: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("queryParameters", "query_parameters", "query-parameters"),
    )
    form_parameters: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("formParameters", "form_parameters", "form-parameters"),
    )
    body: Optional[str] = None

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, v: Any) -> Any:
        if v is None:
            return "GET"
        if isinstance(v, str):
            return v.strip().upper() or "GET"
        return v

    @field_validator("body", mode="before")
    @classmethod
    def _serialize_structured_body(cls, v: Any) -> Any:
        # YAML/JSON scenarios may carry the body as a structure
        if isinstance(v, (dict, list)):
            return json.dumps(v, ensure_ascii=False)
        return v
