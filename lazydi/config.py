"""Configuration for lazydi.

Settings are read from ``LAZYDI_*`` environment variables, optionally
seeded from a ``KEY=VALUE`` env file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "LAZYDI_"
_TRUE = ("1", "true", "yes", "on")


def _load_env_file(path: Path) -> dict[str, str]:
    """Parse a shell-style env file into a dict."""
    if not path.exists():
        return {}

    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[7:]
        if "=" in line:
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip().strip('"').strip("'")

    return values


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUE


@dataclass
class Settings:
    """Runtime settings for a resolution context."""

    log_level: str = "WARNING"
    log_json: bool = False
    detect_cycles: bool = True

    @classmethod
    def from_env(
        cls,
        env_file: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> Settings:
        """Load settings from an env file and the process environment.

        Args:
            env_file: Optional env file read before the environment
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Settings instance
        """
        values: dict[str, str] = {}
        if env_file is not None:
            values.update(_load_env_file(env_file))
        env = os.environ if environ is None else environ
        values.update({k: v for k, v in env.items() if k.startswith(ENV_PREFIX)})

        return cls(
            log_level=values.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper(),
            log_json=_as_bool(values.get(f"{ENV_PREFIX}LOG_JSON"), False),
            detect_cycles=_as_bool(values.get(f"{ENV_PREFIX}DETECT_CYCLES"), True),
        )
