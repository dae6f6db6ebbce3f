"""Log levels, log type definitions, and level resolution.

Purpose
-------
Describe the severities known to the façade and translate level inputs (numbers
or type names) into the numeric scale used for filtering.

Contents
--------
* :data:`LOG_LEVELS` - named numeric severities.
* :class:`LogTypeDefinition` - immutable per-type defaults.
* :data:`LOG_TYPES` - default type table.
* :func:`resolve_level` - total level resolution with a fallback.

System Role
-----------
Leaf of the domain layer; the record builder and the logger façade both depend
on it to agree on what a level means. Higher numbers are more verbose: a call
is emitted only when its level is less than or equal to the logger level.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

DEFAULT_LEVEL = 3
"""Level used when neither a number nor a known type name was supplied."""


LOG_LEVELS: Mapping[str, float] = MappingProxyType(
    {
        "silent": -math.inf,
        "fatal": 0,
        "error": 0,
        "warn": 1,
        "log": 2,
        "info": 3,
        "success": 3,
        "fail": 3,
        "ready": 3,
        "start": 3,
        "box": 3,
        "debug": 4,
        "trace": 5,
        "verbose": math.inf,
    }
)


@dataclass(slots=True, frozen=True)
class LogTypeDefinition:
    """Severity and default fields attached to one log type.

    Attributes
    ----------
    level:
        Numeric severity of calls made through this type.
    defaults:
        Extra fields (``tag``, ``badge``, ...) merged into every record of the
        type. They take precedence over logger-wide defaults.
    """

    level: float
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    def to_defaults(self) -> dict[str, Any]:
        """Return the fields this type contributes to a call's defaults.

        Examples
        --------
        >>> LogTypeDefinition(level=1, defaults={"badge": True}).to_defaults()
        {'badge': True, 'level': 1}
        """

        return {**self.defaults, "level": self.level}

    @classmethod
    def coerce(cls, value: "LogTypeDefinition | Mapping[str, Any]") -> "LogTypeDefinition":
        """Accept either a definition or a plain ``{"level": ..., **fields}`` mapping."""

        if isinstance(value, LogTypeDefinition):
            return value
        payload = dict(value)
        level = payload.pop("level", DEFAULT_LEVEL)
        return cls(level=level, defaults=payload)


LOG_TYPES: Mapping[str, LogTypeDefinition] = MappingProxyType(
    {
        "silent": LogTypeDefinition(level=-1),
        **{name: LogTypeDefinition(level=level) for name, level in LOG_LEVELS.items() if name != "silent"},
    }
)


def coerce_types(types: Mapping[str, Any] | None) -> Mapping[str, LogTypeDefinition]:
    """Return an immutable type table built from ``types`` (default table when ``None``)."""

    if types is None:
        return LOG_TYPES
    return MappingProxyType({name: LogTypeDefinition.coerce(value) for name, value in types.items()})


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def resolve_level(
    value: object,
    types: Mapping[str, LogTypeDefinition] | None = None,
    fallback: float = DEFAULT_LEVEL,
) -> float:
    """Translate ``value`` into a numeric level.

    Numbers pass through unchanged, type names resolve through ``types`` and
    everything else yields ``fallback``. The function never raises.

    Examples
    --------
    >>> resolve_level(4)
    4
    >>> resolve_level("warn", LOG_TYPES)
    1
    >>> resolve_level("nope", LOG_TYPES)
    3
    >>> resolve_level(None, LOG_TYPES, fallback=0)
    0
    """

    if _is_number(value):
        return value  # type: ignore[return-value]
    if isinstance(value, str) and types:
        definition = types.get(value)
        if definition is not None and definition.level is not None:
            return definition.level
    return fallback


__all__ = [
    "DEFAULT_LEVEL",
    "LOG_LEVELS",
    "LOG_TYPES",
    "LogTypeDefinition",
    "coerce_types",
    "resolve_level",
]
