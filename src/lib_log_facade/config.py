"""Environment-driven configuration for the logging façade.

Purpose
-------
Translate ``LOG_*`` environment variables (optionally loaded from a ``.env``
file) into the settings consumed by :func:`lib_log_facade.create_logger`.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle deciding whether the CLI loads ``.env``.
* :func:`enable_dotenv` / :func:`should_use_dotenv` - ``.env`` handling.
* :class:`LoggerSettings` / :func:`load_settings` - resolved configuration.

System Role
-----------
Configuration edge of the package. Environment values win over call
arguments so operators can retune verbosity and throttling without code
changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

DOTENV_ENV_VAR = "LOG_USE_DOTENV"
LEVEL_ENV_VAR = "LOG_LEVEL"
THROTTLE_ENV_VAR = "LOG_THROTTLE"
THROTTLE_MIN_ENV_VAR = "LOG_THROTTLE_MIN"
TAG_ENV_VAR = "LOG_TAG"
NO_COLOR_ENV_VAR = "LOG_NO_COLOR"
FORCE_COLOR_ENV_VAR = "LOG_FORCE_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_ATTEMPTED = False
_DOTENV_PATH: Path | None = None


def env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL')
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` should be loaded; an explicit CLI flag wins over the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="1")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _FALSY:
        return False
    return normalized in _TRUTHY


def _find_dotenv(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` (searching upwards) once per process.

    Existing environment variables keep precedence over file entries. Returns
    the loaded file, or ``None`` when no ``.env`` was found.
    """

    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    if _DOTENV_ATTEMPTED:
        return _DOTENV_PATH
    _DOTENV_ATTEMPTED = True
    start = (search_from or Path.cwd()).resolve()
    candidate = _find_dotenv(start)
    if candidate is not None:
        load_dotenv(candidate, override=False)
        _DOTENV_PATH = candidate
    return _DOTENV_PATH


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    _DOTENV_ATTEMPTED = False
    _DOTENV_PATH = None


@dataclass(frozen=True)
class LoggerSettings:
    """Configuration resolved from call arguments and environment overrides."""

    level: Any
    throttle: Any
    throttle_min: Any
    tag: str | None
    force_color: bool
    no_color: bool


def _parse_level(raw: str) -> int | float | str:
    """Parse ``LOG_LEVEL`` into a number or a type name.

    Examples
    --------
    >>> _parse_level("4")
    4
    >>> _parse_level(" Debug ")
    'debug'
    """
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text.lower()


def _parse_throttle(raw: str) -> float:
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ValueError(f"{THROTTLE_ENV_VAR} must be a number of seconds, got {raw!r}") from exc
    if seconds <= 0:
        raise ValueError(f"{THROTTLE_ENV_VAR} must be positive, got {raw!r}")
    return seconds


def _parse_throttle_min(raw: str) -> int:
    try:
        count = int(raw)
    except ValueError as exc:
        raise ValueError(f"{THROTTLE_MIN_ENV_VAR} must be an integer, got {raw!r}") from exc
    if count < 0:
        raise ValueError(f"{THROTTLE_MIN_ENV_VAR} must be non-negative, got {raw!r}")
    return count


def load_settings(
    *,
    level: Any = None,
    throttle: Any = None,
    throttle_min: Any = None,
    tag: str | None = None,
    force_color: bool = False,
    no_color: bool = False,
) -> LoggerSettings:
    """Merge call arguments with ``LOG_*`` environment overrides.

    Raises
    ------
    ValueError
        When ``LOG_THROTTLE`` or ``LOG_THROTTLE_MIN`` hold invalid values.
    """

    raw_level = os.getenv(LEVEL_ENV_VAR)
    if raw_level is not None and raw_level.strip():
        level = _parse_level(raw_level)

    raw_throttle = os.getenv(THROTTLE_ENV_VAR)
    if raw_throttle is not None and raw_throttle.strip():
        throttle = _parse_throttle(raw_throttle)

    raw_throttle_min = os.getenv(THROTTLE_MIN_ENV_VAR)
    if raw_throttle_min is not None and raw_throttle_min.strip():
        throttle_min = _parse_throttle_min(raw_throttle_min)

    return LoggerSettings(
        level=level,
        throttle=throttle,
        throttle_min=throttle_min,
        tag=os.getenv(TAG_ENV_VAR, tag) or None,
        force_color=env_bool(FORCE_COLOR_ENV_VAR, force_color),
        no_color=env_bool(NO_COLOR_ENV_VAR, no_color),
    )


__all__ = [
    "DOTENV_ENV_VAR",
    "FORCE_COLOR_ENV_VAR",
    "LEVEL_ENV_VAR",
    "LoggerSettings",
    "NO_COLOR_ENV_VAR",
    "TAG_ENV_VAR",
    "THROTTLE_ENV_VAR",
    "THROTTLE_MIN_ENV_VAR",
    "enable_dotenv",
    "env_bool",
    "load_settings",
    "should_use_dotenv",
]
