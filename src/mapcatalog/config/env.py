"""Environment variable loaders for configuration."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def require_env_var(name: str) -> str:
    """Return a required environment variable by name."""

    return require_env_vars([name])[name]


def optional_env_var(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_list(name: str, *, separator: str = ",") -> tuple[str, ...]:
    """Split a separated environment variable into its non-blank entries."""

    value = optional_env_var(name)
    if value is None:
        return ()
    return tuple(part.strip() for part in value.split(separator) if part.strip())


def env_json_list(name: str) -> tuple[str, ...] | None:
    """Parse a JSON array of strings from the environment."""

    value = optional_env_var(name)
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{name} must be a JSON array of strings") from exc
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ConfigurationError(f"{name} must be a JSON array of strings")
    return tuple(parsed)
