"""Use case turning a raw log call into a canonical :class:`LogRecord`.

Purpose
-------
Assemble a record from a call's defaults and variadic arguments: unwrap the
structured single-mapping form, resolve ``message``/``additional`` aliases, and
normalize ``type``/``tag`` so the throttle engine compares like with like.

System Role
-----------
First stage of the per-call pipeline, invoked by the logger façade after the
level check and the pause gate.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from lib_log_facade.application.ports.time import ClockPort
from lib_log_facade.domain.levels import LogTypeDefinition, resolve_level
from lib_log_facade.domain.records import DEFAULT_TYPE, RECORD_FIELDS, LogRecord, is_log_object


class RecordBuilder:
    """Build normalized records against one logger's type table and clock.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_facade.domain.levels import LOG_TYPES
    >>> class FixedClock:
    ...     def now(self):
    ...         return datetime(2025, 1, 1, tzinfo=timezone.utc)
    >>> builder = RecordBuilder(types=LOG_TYPES, clock=FixedClock())
    >>> record = builder.build({"type": "INFO", "level": 3}, ({"message": "hi", "additional": "x\\ny"},))
    >>> record.type, record.args
    ('info', ('hi', '\\nx\\ny'))
    """

    def __init__(self, *, types: Mapping[str, LogTypeDefinition], clock: ClockPort) -> None:
        self._types = types
        self._clock = clock

    def build(self, defaults: Mapping[str, Any], args: Sequence[Any], raw: bool = False) -> LogRecord:
        """Return the record for one call.

        Parameters
        ----------
        defaults:
            Merged type and instance defaults (``type``, ``level``, ``tag``...).
        args:
            Positional arguments of the call, in order.
        raw:
            When ``True`` a single mapping argument is logged literally instead
            of being merged as a structured call.
        """

        now = self._clock.now()
        fields: dict[str, Any] = {"date": now, "args": []}
        fields.update(defaults)
        level = resolve_level(defaults.get("level"), self._types)
        fields["level"] = level

        if not raw and len(args) == 1 and is_log_object(args[0]):
            fields.update(args[0])
            if "level" in args[0]:
                fields["level"] = resolve_level(args[0]["level"], self._types, level)
            fields["args"] = _as_args(fields.get("args"))
        else:
            fields["args"] = list(args)

        _apply_aliases(fields)
        fields["type"] = fields["type"].lower() if isinstance(fields.get("type"), str) else DEFAULT_TYPE
        fields["tag"] = fields["tag"].lower() if isinstance(fields.get("tag"), str) else ""
        return _to_record(fields, now)


def _as_args(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _apply_aliases(fields: dict[str, Any]) -> None:
    """Fold ``message`` and ``additional`` into ``args`` and drop both fields."""

    message = fields.pop("message", None)
    if message:
        fields["args"].insert(0, message)
    additional = fields.pop("additional", None)
    if additional:
        lines = additional.split("\n") if isinstance(additional, str) else _as_lines(additional)
        fields["args"].append("\n" + "\n".join(lines))


def _as_lines(value: Any) -> list[str]:
    if isinstance(value, Iterable):
        return [str(line) for line in value]
    return str(value).split("\n")


def _coerce_date(value: Any, fallback: datetime) -> datetime:
    if not isinstance(value, datetime):
        return fallback
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(fields: dict[str, Any], now: datetime) -> LogRecord:
    extra = {key: value for key, value in fields.items() if key not in RECORD_FIELDS}
    return LogRecord(
        date=_coerce_date(fields.get("date"), now),
        type=fields["type"],
        tag=fields["tag"],
        level=fields["level"],
        args=tuple(fields["args"]),
        extra=extra,
    )


__all__ = ["RecordBuilder"]
