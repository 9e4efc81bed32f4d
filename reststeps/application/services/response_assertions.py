# application/services/response_assertions.py
from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Optional

from reststeps.application.ports.document import JsonPathPort, XPathPort
from reststeps.application.ports.logger import LoggerPort
from reststeps.domain.exceptions import (
    AssertionFailure,
    ConfigurationError,
    NoResponseError,
    PathNotFoundError,
    ResolutionError,
    ValueConversionError,
)
from reststeps.domain.paths import normalize_json_path, stringify
from reststeps.domain.run import LastResponse, RunContext
from reststeps.domain.steps.assertion import CheckSpec


def values_equal(actual: Any, expected: Any) -> bool:
    # True == 1 in Python, but a JSON boolean is never a number
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    return actual == expected


def to_number(value: Any, what: str) -> float:
    try:
        return float(stringify(value))
    except ValueError as e:
        raise ValueConversionError(f"{what} is not a number: {stringify(value)!r}") from e


def to_status_code(value: Any) -> int:
    # 200.0 is accepted, 200.7 and True are not
    if isinstance(value, bool):
        raise ValueConversionError(f"status code is not an integer: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueConversionError(f"status code is not an integer: {value!r}")
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise ValueConversionError(f"status code is not an integer: {value!r}") from e


class ResponseAssertions:
    """
    Checks against the Response Handle of a run (RunContext.last).

    A mismatch raises AssertionFailure. Anything that keeps a check from being
    evaluated (no response, malformed body or path, non-numeric value) raises
    a StepError instead, so reports can tell a failed test from a broken one.
    """

    def __init__(self, json_path: JsonPathPort, xpath: XPathPort, logger: LoggerPort):
        self._json = json_path
        self._xpath = xpath
        self._logger = logger

    # -- status / headers / xml ---------------------------------------------

    def status(self, ctx: RunContext, status: str) -> None:
        actual = self._last(ctx).status_name
        self._verify(
            actual.lower() == str(status).lower(),
            "Response Status",
            status,
            actual,
            f"equalToIgnoringCase({str(status)!r})",
        )

    def status_code(self, ctx: RunContext, status_code: Any) -> None:
        expected = to_status_code(status_code)
        actual = self._last(ctx).status
        self._verify(actual == expected, "Response Status", expected, actual)

    def has_xpath(self, ctx: RunContext, xpath: str) -> None:
        last = self._last(ctx)
        self._verify(
            self._xpath.has_xpath(last.text, xpath),
            f"Response Body has xpath {xpath}",
            xpath,
            last.text[:200],
            f"hasXPath({xpath!r})",
        )

    def has_header(self, ctx: RunContext, header: str) -> None:
        last = self._last(ctx)
        self._verify(
            last.has_header(header),
            "Response Headers",
            header,
            sorted(last.headers),
            f"map containing key {header!r}",
        )

    def has_header_value(self, ctx: RunContext, header: str, value: str) -> None:
        last = self._last(ctx)
        values = last.header_values(header)
        self._verify(
            values is not None and value in values,
            f"Response Header {header}",
            value,
            values,
            f"map containing [{header!r} -> a collection containing {value!r}]",
        )

    # -- json path presence --------------------------------------------------

    def json_path_exists(self, ctx: RunContext, path: str) -> bool:
        try:
            self._json.read(self._last(ctx).text, normalize_json_path(path))
        except PathNotFoundError:
            return False
        return True

    def has(self, ctx: RunContext, path: str) -> None:
        path = normalize_json_path(path)
        self._verify(self.json_path_exists(ctx, path), f"Response Body has {path}", True, False)

    def not_has(self, ctx: RunContext, path: str) -> None:
        path = normalize_json_path(path)
        self._verify(not self.json_path_exists(ctx, path), f"Response Body has not {path}", False, True)

    # -- value at json path --------------------------------------------------

    def read(self, ctx: RunContext, path: str) -> Any:
        return self._json.read(self._last(ctx).text, normalize_json_path(path))

    def value_equals(self, ctx: RunContext, expected: Any, path: str) -> None:
        actual = self.read(ctx, path)
        self._verify(values_equal(actual, expected), self._at(path), expected, actual)

    def value_not_equals(self, ctx: RunContext, expected: Any, path: str) -> None:
        actual = self.read(ctx, path)
        self._verify(
            not values_equal(actual, expected),
            self._at(path),
            expected,
            actual,
            f"not {expected!r}",
        )

    def value_contains(self, ctx: RunContext, expected: Any, path: str) -> None:
        actual = stringify(self.read(ctx, path))
        self._verify(
            str(expected) in actual,
            self._at(path),
            expected,
            actual,
            f"a string containing {str(expected)!r}",
        )

    def equals_ignoring_case(self, ctx: RunContext, expected: Any, path: str) -> None:
        actual = stringify(self.read(ctx, path))
        self._verify(
            actual.casefold() == str(expected).casefold(),
            self._at(path),
            expected,
            actual,
            f"equalToIgnoringCase({str(expected)!r})",
        )

    def contains_ignoring_case(self, ctx: RunContext, expected: Any, path: str) -> None:
        actual = stringify(self.read(ctx, path)).upper()
        needle = str(expected).upper()
        self._verify(needle in actual, self._at(path), needle, actual, f"a string containing {needle!r}")

    def matches(self, ctx: RunContext, pattern: str, path: str) -> None:
        actual = stringify(self.read(ctx, path))
        try:
            matched = re.fullmatch(pattern, actual) is not None
        except re.error as e:
            raise ResolutionError(f"invalid regular expression {pattern!r}: {e}") from e
        self._verify(matched, self._at(path), pattern, actual, f"a string matching {pattern!r}")

    def less_than(self, ctx: RunContext, expected: Any, path: str) -> None:
        self._compare(ctx, expected, path, "less than", lambda a, e: a < e)

    def less_than_or_equals(self, ctx: RunContext, expected: Any, path: str) -> None:
        self._compare(ctx, expected, path, "less than or equal to", lambda a, e: a <= e)

    def greater_than(self, ctx: RunContext, expected: Any, path: str) -> None:
        self._compare(ctx, expected, path, "greater than", lambda a, e: a > e)

    def greater_than_or_equals(self, ctx: RunContext, expected: Any, path: str) -> None:
        self._compare(ctx, expected, path, "greater than or equal to", lambda a, e: a >= e)

    # -- extraction ----------------------------------------------------------

    def store_body(self, ctx: RunContext, path: str, variable: str) -> Any:
        value = self.read(ctx, path)
        ctx.store(variable, value)
        self._logger.info("store.variable", variable=variable, source="body", path=normalize_json_path(path))
        return value

    def store_header(self, ctx: RunContext, header: str, variable: str) -> List[str]:
        values = self._last(ctx).header_values(header)
        if values is None:
            raise ResolutionError(f"Response has no header {header!r}")
        ctx.store(variable, values)
        self._logger.info("store.variable", variable=variable, source="header", header=header)
        return values

    # -- declarative checks --------------------------------------------------

    def check(self, ctx: RunContext, spec: CheckSpec) -> None:
        ops: Dict[str, Callable[[], None]] = {
            "status": lambda: self.status(ctx, spec.expected),
            "status_code": lambda: self.status_code(ctx, spec.expected),
            "xpath": lambda: self.has_xpath(ctx, self._required(spec, "path")),
            "header": lambda: self.has_header(ctx, self._required(spec, "header")),
            "header_value": lambda: self.has_header_value(ctx, self._required(spec, "header"), spec.expected),
            "has": lambda: self.has(ctx, self._required(spec, "path")),
            "not_has": lambda: self.not_has(ctx, self._required(spec, "path")),
        }
        value_ops: Dict[str, Callable[[RunContext, Any, str], None]] = {
            "equals": self.value_equals,
            "not_equals": self.value_not_equals,
            "contains": self.value_contains,
            "equals_ignoring_case": self.equals_ignoring_case,
            "contains_ignoring_case": self.contains_ignoring_case,
            "matches": self.matches,
            "less_than": self.less_than,
            "less_than_or_equals": self.less_than_or_equals,
            "greater_than": self.greater_than,
            "greater_than_or_equals": self.greater_than_or_equals,
        }

        if spec.op in ops:
            ops[spec.op]()
        elif spec.op in value_ops:
            value_ops[spec.op](ctx, spec.expected, self._required(spec, "path"))
        else:
            raise ConfigurationError(f"Unknown check: {spec.op}")

    # -- internals -----------------------------------------------------------

    def _compare(
        self,
        ctx: RunContext,
        expected: Any,
        path: str,
        relation: str,
        test: Callable[[float, float], bool],
    ) -> None:
        actual = to_number(self.read(ctx, path), f"value at {normalize_json_path(path)}")
        bound = to_number(expected, "expected value")
        self._verify(test(actual, bound), self._at(path), bound, actual, f"a value {relation} <{bound}>")

    def _last(self, ctx: RunContext) -> LastResponse:
        if ctx.last is None:
            raise NoResponseError("No response available: send a request first")
        return ctx.last

    def _verify(self, passed: bool, label: str, expected: Any, actual: Any, description: str = "") -> None:
        if passed:
            self._logger.debug("assert.passed", label=label, expected=expected)
            return
        self._logger.warning("assert.failed", label=label, expected=expected, actual=actual)
        raise AssertionFailure(label, expected, actual, description)

    @staticmethod
    def _at(path: str) -> str:
        return f"Response Body value at {normalize_json_path(path)}"

    @staticmethod
    def _required(spec: CheckSpec, attr: str) -> str:
        value: Optional[str] = getattr(spec, attr)
        if not value:
            raise ConfigurationError(f"check {spec.op!r} needs {attr!r}")
        return value
