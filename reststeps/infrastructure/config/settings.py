# infrastructure/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

from reststeps.domain.exceptions import ConfigurationError

ENV_PREFIX = "RESTSTEPS_"


@dataclass(frozen=True)
class Settings:
    # default service endpoint, what "service endpoint is ..." would set
    endpoint: str = ""
    # last resort when no endpoint is configured at all
    base_url: str = ""
    timeout_sec: Optional[float] = 20.0
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Values from the .env file win, the process environment fills the gaps.
        Without an explicit env_file, ./.env is used when it exists.
        """
        values: Dict[str, Optional[str]] = {}
        path = Path(env_file) if env_file else Path.cwd() / ".env"
        if env_file and not path.exists():
            raise ConfigurationError(f"env file not found: {path}")
        if path.exists():
            values.update(dotenv_values(path))

        for key, value in (os.environ if environ is None else environ).items():
            values.setdefault(key, value)

        def get(name: str, default: str = "") -> str:
            value = values.get(ENV_PREFIX + name)
            return default if value is None else value.strip()

        return cls(
            endpoint=get("ENDPOINT"),
            base_url=get("BASE_URL"),
            timeout_sec=_parse_timeout(get("TIMEOUT_SEC", "20")),
            log_level=get("LOG_LEVEL", "INFO").upper() or "INFO",
        )


def _parse_timeout(raw: str) -> Optional[float]:
    if raw.lower() in ("", "none", "0"):
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}TIMEOUT_SEC must be a number: {raw!r}") from e
