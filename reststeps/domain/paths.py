# domain/paths.py
from __future__ import annotations

import json
from typing import Any, Mapping

JSON_ROOT = "$"
FILE_MARKER = "file:"


def normalize_json_path(path: str) -> str:
    # prefix rule only, the expression itself is not parsed here
    if not path.startswith(JSON_ROOT):
        return f"{JSON_ROOT}.{path}"
    return path


def is_file_reference(value: Any) -> bool:
    return str(value).strip().startswith(FILE_MARKER)


def file_reference_path(value: Any) -> str:
    # only the first colon separates the marker, paths may contain colons
    return str(value).strip().split(":", 1)[1]


def is_multipart(form_parameters: Mapping[str, Any]) -> bool:
    return any(is_file_reference(v) for v in (form_parameters or {}).values())


def stringify(value: Any) -> str:
    """
    Text form of a resolved value for the string based checks
    (contains / ignoring case / regex).
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)
