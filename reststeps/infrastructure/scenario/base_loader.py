# infrastructure/scenario/base_loader.py
"""
Builds Scenario objects from plain data (already parsed YAML or JSON).

    meta: {id: login, name: Login}
    defaults:
      endpoint: https://api.example.com
      headers: {Accept: application/json}
      vars: {user: admin}
    steps:
      - type: request
        request: {method: POST, endPoint: /login, formParameters: {user: "${vars.user}"}}
      - type: assert
        checks:
          - {op: status_code, expected: 200}
          - {op: equals, path: user.username, expected: admin}
      - type: store
        body: token
        into: token
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from reststeps.domain.exceptions import ConfigurationError, RequestPopulateError
from reststeps.domain.request import RequestDescription
from reststeps.domain.scenario import Scenario, ScenarioDefaults, ScenarioMeta
from reststeps.domain.steps import (
    AssertStep,
    CheckSpec,
    EndpointStep,
    FetchStep,
    PostStep,
    RequestStep,
    Step,
    StoreStep,
)
from reststeps.domain.steps.assertion import CHECK_OPS


class ScenarioLoadError(ConfigurationError):
    pass


def _mapping(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ScenarioLoadError(f"{what} must be a mapping")
    return dict(value)


class ScenarioLoaderBase(ABC):
    def load_from_file(self, path: Union[str, Path]) -> Scenario:
        p = Path(path)
        if not p.exists():
            raise ScenarioLoadError(f"Scenario file not found: {path}")

        try:
            data = self._load_file(p)
        except ScenarioLoadError:
            raise
        except Exception as e:
            raise ScenarioLoadError(f"Scenario file cannot be parsed: {path}: {e}") from e

        if data is None:
            raise ScenarioLoadError(f"Scenario file is empty: {path}")
        if not isinstance(data, dict):
            raise ScenarioLoadError(f"Scenario file is invalid: {path}")

        return self.load_from_dict(data, default_id=p.stem)

    @abstractmethod
    def _load_file(self, path: Path) -> Any:
        ...

    def load_from_dict(self, data: Dict[str, Any], default_id: str = "") -> Scenario:
        return Scenario(
            meta=self._load_meta(_mapping(data.get("meta"), "meta"), default_id),
            defaults=self._load_defaults(_mapping(data.get("defaults"), "defaults")),
            steps=self._load_steps(data.get("steps") or []),
        )

    def _load_meta(self, data: Dict[str, Any], default_id: str) -> ScenarioMeta:
        scenario_id = str(data.get("id") or default_id)
        return ScenarioMeta(
            id=scenario_id,
            name=str(data.get("name") or scenario_id),
            description=data.get("description", ""),
        )

    def _load_defaults(self, data: Dict[str, Any]) -> ScenarioDefaults:
        return ScenarioDefaults(
            endpoint=data.get("endpoint", ""),
            headers=_mapping(data.get("headers"), "defaults.headers"),
            vars=_mapping(data.get("vars"), "defaults.vars"),
        )

    def _load_steps(self, steps_data: List[Dict[str, Any]]) -> List[Step]:
        if not isinstance(steps_data, list):
            raise ScenarioLoadError("steps must be a list")
        return [self._load_step(d, i) for i, d in enumerate(steps_data)]

    def _load_step(self, data: Dict[str, Any], index: int) -> Step:
        if not isinstance(data, dict):
            raise ScenarioLoadError(f"step #{index + 1} must be a mapping")

        step_type = str(data.get("type", "")).lower()
        step_id = str(data.get("id") or f"{step_type or 'step'}-{index + 1}")
        common = {
            "id": step_id,
            "name": str(data.get("name") or step_id),
            "enabled": bool(data.get("enabled", True)),
        }

        loaders: Dict[str, Callable[[Dict[str, Any], Dict[str, Any]], Step]] = {
            "endpoint": self._load_endpoint_step,
            "request": self._load_request_step,
            "fetch": self._load_fetch_step,
            "post": self._load_post_step,
            "assert": self._load_assert_step,
            "store": self._load_store_step,
        }
        loader = loaders.get(step_type)
        if loader is None:
            raise ScenarioLoadError(f"Unknown step type {step_type!r} in step {step_id}")
        return loader(data, common)

    def _load_endpoint_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> EndpointStep:
        return EndpointStep(url=self._required(data, "url", common), **common)

    def _load_request_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> RequestStep:
        try:
            request = RequestDescription.from_mapping(data.get("request") or {})
        except RequestPopulateError as e:
            raise ScenarioLoadError(f"step {common['id']}: {e}") from e
        return RequestStep(request=request, **common)

    def _load_fetch_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> FetchStep:
        return FetchStep(
            resource=self._required(data, "resource", common),
            params=_mapping(data.get("params"), f"step {common['id']}: params") or None,
            **common,
        )

    def _load_post_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> PostStep:
        return PostStep(
            content=data.get("content", ""),
            resource=self._required(data, "resource", common),
            headers=_mapping(data.get("headers"), f"step {common['id']}: headers"),
            **common,
        )

    def _load_assert_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> AssertStep:
        checks: List[CheckSpec] = []
        raw_checks = data.get("checks") or []
        if not isinstance(raw_checks, list):
            raise ScenarioLoadError(f"step {common['id']}: checks must be a list")
        for i, check in enumerate(raw_checks):
            if not isinstance(check, dict):
                raise ScenarioLoadError(f"step {common['id']}: check #{i + 1} must be a mapping")
            op = str(check.get("op", ""))
            if op not in CHECK_OPS:
                raise ScenarioLoadError(f"step {common['id']}: unknown check {op!r}")
            checks.append(
                CheckSpec(
                    op=op,
                    path=check.get("path"),
                    header=check.get("header"),
                    expected=check.get("expected"),
                )
            )
        return AssertStep(checks=checks, **common)

    def _load_store_step(self, data: Dict[str, Any], common: Dict[str, Any]) -> StoreStep:
        variable = data.get("into") or data.get("to")
        if not variable:
            raise ScenarioLoadError(f"step {common['id']}: 'into' is required")
        if data.get("body"):
            return StoreStep(source="body", target=str(data["body"]), variable=str(variable), **common)
        if data.get("header"):
            return StoreStep(source="header", target=str(data["header"]), variable=str(variable), **common)
        raise ScenarioLoadError(f"step {common['id']}: 'body' or 'header' is required")

    @staticmethod
    def _required(data: Dict[str, Any], key: str, common: Dict[str, Any]) -> Any:
        value = data.get(key)
        if value in (None, ""):
            raise ScenarioLoadError(f"step {common['id']}: {key!r} is required")
        return value
