# infrastructure/url/base_url_resolver.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from reststeps.domain.exceptions import ConfigurationError


def _is_absolute(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


@dataclass(frozen=True)
class EndpointResolver:
    """Joins a service base URL and a resource path with exactly one slash."""

    def resolve(self, base_url: Optional[str], end_point: Optional[str]) -> str:
        base = (base_url or "").strip()
        path = (end_point or "").strip()

        if path and _is_absolute(path):
            return path
        if not base:
            raise ConfigurationError(
                f"No service endpoint configured for resource {path!r}" if path else "No service endpoint configured"
            )
        if not _is_absolute(base):
            raise ConfigurationError(f"Service endpoint is not an absolute http(s) URL: {base!r}")
        if not path:
            return base
        return base.rstrip("/") + "/" + path.lstrip("/")
