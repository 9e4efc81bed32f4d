# application/services/redactor.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

MASK = "********"

SENSITIVE_KEYS = {
    "password",
    "passwd",
    "pass",
    "secret",
    "token",
    "api-key",
    "x-api-key",
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-auth-token",
}


def is_sensitive(key: str) -> bool:
    return key.lower() in SENSITIVE_KEYS


def mask_value(key: str, value: Any) -> Any:
    if value is None or not is_sensitive(key):
        return value
    if isinstance(value, (list, tuple)):
        return [MASK for _ in value]
    return MASK


def mask_pairs(pairs: List[Tuple[str, Any]]) -> List[Tuple[str, Any]]:
    return [(k, mask_value(k, v)) for k, v in pairs]


def mask_dict(d: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: mask_value(k, v) for k, v in (d or {}).items()}
