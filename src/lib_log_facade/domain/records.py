"""Canonical log record travelling from the façade to the reporters.

Purpose
-------
Provide the immutable, normalized representation of one log event that the
throttle engine compares and the reporters render.

Contents
--------
* :class:`LogRecord` dataclass with serialisation helpers.
* :func:`is_log_object` - detection of the structured single-argument call form.

System Role
-----------
Sits in the domain layer so builders, throttling and adapters share a single
record shape with no adapter-specific fields.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

DEFAULT_TYPE = "log"
"""Type assigned to records whose type is missing or not a string."""

RECORD_FIELDS = frozenset({"date", "type", "tag", "level", "args"})


def _ensure_aware(ts: datetime) -> datetime:
    """Return ``ts`` as a timezone-aware UTC timestamp."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("date must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Immutable log record handed to reporters.

    Attributes
    ----------
    date:
        Time of normalization in timezone-aware UTC.
    type:
        Lowercase log type (``info``, ``warn``, ...).
    tag:
        Lowercase scope label; empty when the logger carries no tag.
    level:
        Resolved numeric severity.
    args:
        Values to present, in call order. Always a tuple.
    extra:
        Any further structured fields supplied by defaults or by a structured
        call (``badge``, ``icon``, ...).
    """

    date: datetime
    type: str = DEFAULT_TYPE
    tag: str = ""
    level: float = 3
    args: tuple[Any, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _ensure_aware(self.date))
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "extra", dict(self.extra))

    def signature(self) -> str:
        """Return the comparable text used to detect duplicate records.

        Raises ``ValueError``/``TypeError``/``RecursionError`` when ``args``
        cannot be serialised (for example self-referencing containers).

        Examples
        --------
        >>> record = LogRecord(datetime(2025, 1, 1, tzinfo=timezone.utc), "info", "", 3, ("hi", 1))
        >>> record.signature()
        '["info", "", ["hi", 1]]'
        """

        return json.dumps([self.type, self.tag, list(self.args)], default=repr)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the record into a plain dictionary with an ISO8601 date."""

        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "date": self.date.isoformat(),
                "type": self.type,
                "tag": self.tag,
                "level": self.level,
                "args": list(self.args),
            }
        )
        return data

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)


def is_log_object(value: object) -> bool:
    """Return ``True`` when ``value`` is a structured log call payload.

    A structured payload is a mapping carrying a truthy ``message`` or ``args``
    field. Mappings with a ``stack`` field describe errors and are logged as
    plain arguments.

    Examples
    --------
    >>> is_log_object({"message": "hi"})
    True
    >>> is_log_object({"foo": "bar"})
    False
    >>> is_log_object(["message"])
    False
    """

    if not isinstance(value, Mapping):
        return False
    if not value.get("message") and not value.get("args"):
        return False
    if "stack" in value:
        return False
    return True


__all__ = ["DEFAULT_TYPE", "LogRecord", "RECORD_FIELDS", "is_log_object"]
