from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from reststeps.domain.exceptions import ConfigurationError
from reststeps.domain.run import LastResponse


class TemplateRenderError(ConfigurationError):
    pass


@dataclass(frozen=True)
class RenderSources:
    vars: Dict[str, Any]
    last: Dict[str, Any]

    @classmethod
    def of(cls, vars: Dict[str, Any], last: "LastResponse | None") -> "RenderSources":
        if last is None:
            return cls(vars=vars, last={})
        return cls(
            vars=vars,
            last={
                "status": last.status,
                "status_name": last.status_name,
                "url": last.url,
                "text": last.text,
                "headers": last.headers,
            },
        )


class TemplateRenderer:
    """
    Expands ${vars.xxx} and ${last.xxx} inside step arguments.
    - dotted access: ${vars.user.id}, list index: ${vars.items.0}
    - a value that is exactly one template keeps the referenced type
      ("${vars.count}" -> 3), otherwise the result is a string
    - lists are joined with "," inside a string
    """

    def render(self, value: Any, src: RenderSources) -> Any:
        if isinstance(value, str):
            return self._render_value(value, src)
        if isinstance(value, dict):
            return {self._render_str_scalar(str(k), src): self.render(v, src) for k, v in value.items()}
        if isinstance(value, list):
            return [self.render(v, src) for v in value]
        return value

    def _render_value(self, s: str, src: RenderSources) -> Any:
        if "${" not in s:
            return s
        if s.startswith("${") and s.endswith("}") and s.count("${") == 1:
            return self._eval(s[2:-1].strip(), src)
        return self._render_str_scalar(s, src)

    def _render_str_scalar(self, s: str, src: RenderSources) -> str:
        if "${" not in s:
            return s

        result = ""
        i = 0
        while i < len(s):
            start = s.find("${", i)
            if start < 0:
                result += s[i:]
                break
            result += s[i:start]
            end = s.find("}", start + 2)
            if end < 0:
                raise TemplateRenderError(f"unclosed template: {s}")
            value = self._eval(s[start + 2 : end].strip(), src)

            if isinstance(value, list):
                value = ",".join("" if x is None else str(x) for x in value)

            result += "" if value is None else str(value)
            i = end + 1

        return result

    def _eval(self, expr: str, src: RenderSources) -> Any:
        root_name, rest = self._split_root(expr)

        root = {"vars": src.vars, "last": src.last}.get(root_name)
        if root is None:
            raise TemplateRenderError(f"unknown root: {root_name}")

        if rest == "":
            return root
        return self._resolve_path(root, rest, expr)

    def _split_root(self, expr: str) -> Tuple[str, str]:
        if "." in expr:
            a, b = expr.split(".", 1)
            return a, b
        return expr, ""

    def _resolve_path(self, obj: Any, path: str, expr: str) -> Any:
        cur = obj
        for part in path.split("."):
            if isinstance(cur, list) and part.isdigit():
                idx = int(part)
                if idx >= len(cur):
                    raise TemplateRenderError(f"index out of range in ${{{expr}}}")
                cur = cur[idx]
            elif isinstance(cur, dict) and part in cur:
                cur = cur[part]
            else:
                raise TemplateRenderError(f"undefined: ${{{expr}}}")
        return cur
