"""Logger façade composing level filtering, record building, throttling, and dispatch.

Purpose
-------
Expose one callable per log type (``logger.info(...)``, ``logger.warn(...)``)
plus the configuration surface (level, reporters, derived loggers, pausing)
while keeping every policy decision in the application layer.

Contents
--------
* :class:`LogFunction` - callable bound to one log type, with a ``raw`` variant.
* :class:`Logger` - per-instance configuration and pipeline wiring.

System Role
-----------
Outer shell of the package. Callers never touch the record builder, throttle
engine or dispatcher directly; they configure a :class:`Logger` and call its
log functions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from lib_log_facade.adapters.clock import SystemClock
from lib_log_facade.application.ports.reporter import ReporterContext, ReporterPort
from lib_log_facade.application.use_cases.build_record import RecordBuilder
from lib_log_facade.application.use_cases.dispatch import Dispatcher
from lib_log_facade.application.use_cases.throttle import ThrottleEngine
from lib_log_facade.domain.levels import coerce_types, resolve_level
from lib_log_facade.domain.throttle import ThrottlePhase
from lib_log_facade.errors import ConfigurationError

from ._options import (
    LoggerOptions,
    MockFn,
    check_option_names,
    coerce_throttle,
    coerce_throttle_min,
)
from ._pause import DEFAULT_PAUSE_CONTROLLER

CallResult = dict[str, Any]


class LogFunction:
    """Callable emitting records of one log type through its logger.

    ``raw`` is the variant that logs a single mapping argument literally
    instead of unwrapping it as a structured call.
    """

    __slots__ = ("type_name", "_logger", "_defaults", "_is_raw", "raw")

    def __init__(self, logger: "Logger", type_name: str, defaults: Mapping[str, Any], *, raw: bool = False) -> None:
        self.type_name = type_name
        self._logger = logger
        self._defaults = defaults
        self._is_raw = raw
        self.raw: Callable[..., Any] = self if raw else LogFunction(logger, type_name, defaults, raw=True)

    def __call__(self, *args: Any) -> CallResult:
        return self._logger._submit(self._defaults, args, self._is_raw)

    def __repr__(self) -> str:
        suffix = ".raw" if self._is_raw else ""
        return f"<LogFunction {self.type_name}{suffix}>"


class _MockedLogFunction:
    """Replacement installed by :meth:`Logger.mock_types`; ``raw`` is itself."""

    __slots__ = ("type_name", "_target", "raw")

    def __init__(self, type_name: str, target: Callable[..., Any]) -> None:
        self.type_name = type_name
        self._target = target
        self.raw = self

    def __call__(self, *args: Any) -> Any:
        return self._target(*args)


class Logger:
    """Structured logging façade.

    Parameters
    ----------
    options:
        Complete :class:`LoggerOptions`; keyword ``overrides`` are applied on
        top. Reporter list and defaults are copied, so the caller's containers
        are never mutated.

    Examples
    --------
    >>> from lib_log_facade.adapters.memory import MemoryReporter
    >>> reporter = MemoryReporter()
    >>> logger = Logger(reporters=[reporter], level="info")
    >>> _ = logger.info("Hello", "world")
    >>> _ = logger.debug("hidden")
    >>> reporter.args()
    [('Hello', 'world')]
    >>> logger.with_tag("db").with_tag("pool").options.defaults["tag"]
    'db:pool'
    """

    def __init__(self, options: LoggerOptions | None = None, /, **overrides: Any) -> None:
        check_option_names(overrides)
        base = options if options is not None else LoggerOptions()
        base = replace(base, **overrides) if overrides else base
        types = coerce_types(base.types)
        self.options = replace(
            base,
            types=types,
            level=resolve_level(base.level, types),
            reporters=list(base.reporters),
            defaults=dict(base.defaults),
            throttle=coerce_throttle(base.throttle),
            throttle_min=coerce_throttle_min(base.throttle_min),
            format_options=MappingProxyType(dict(base.format_options)),
            clock=base.clock if base.clock is not None else SystemClock(),
            pause_controller=base.pause_controller if base.pause_controller is not None else DEFAULT_PAUSE_CONTROLLER,
        )

        self._builder = RecordBuilder(types=types, clock=self.options.clock)
        self._dispatcher = Dispatcher(
            reporters=lambda: self.options.reporters,
            context=lambda: ReporterContext(options=self.options),
            diagnostic=self.options.diagnostic,
        )
        self._throttle = ThrottleEngine(
            clock=self.options.clock,
            emit=self._dispatcher.dispatch,
            throttle=self.options.throttle,
            throttle_min=self.options.throttle_min,
        )

        self._log_functions: dict[str, Callable[..., Any]] = {}
        for type_name, definition in types.items():
            defaults = {"type": type_name, **self.options.defaults, **definition.to_defaults()}
            self._log_functions[type_name] = LogFunction(self, type_name, MappingProxyType(defaults))

        if self.options.mock_fn is not None:
            self.mock_types()

    # log function lookup -------------------------------------------------

    def log_function(self, type_name: str) -> Callable[..., Any]:
        """Return the callable logging records of ``type_name``."""

        try:
            return self._log_functions[type_name]
        except KeyError as exc:
            raise KeyError(f"Unknown log type: {type_name!r}") from exc

    def __getitem__(self, type_name: str) -> Callable[..., Any]:
        return self.log_function(type_name)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        functions = self.__dict__.get("_log_functions")
        if functions is not None and name in functions:
            return functions[name]
        raise AttributeError(f"{type(self).__name__!s} has no attribute or log type {name!r}")

    @property
    def types(self) -> Mapping[str, Any]:
        return self.options.types

    # level ---------------------------------------------------------------

    @property
    def level(self) -> float:
        return self.options.level

    @level.setter
    def level(self, value: Any) -> None:
        self.options.level = resolve_level(value, self.options.types, self.options.level)

    def set_level(self, value: Any) -> "Logger":
        self.level = value
        return self

    def get_level(self) -> float:
        return self.level

    # reporters -----------------------------------------------------------

    def add_reporter(self, reporter: ReporterPort) -> "Logger":
        self.options.reporters.append(reporter)
        return self

    def remove_reporter(self, reporter: ReporterPort | None = None) -> "Logger":
        """Remove ``reporter``; without an argument every reporter is removed."""

        if reporter is None:
            self.options.reporters.clear()
        elif reporter in self.options.reporters:
            self.options.reporters.remove(reporter)
        return self

    def set_reporters(self, reporters: ReporterPort | Iterable[ReporterPort]) -> "Logger":
        if isinstance(reporters, ReporterPort):
            self.options.reporters = [reporters]
        else:
            self.options.reporters = list(reporters)  # type: ignore[arg-type]
        return self

    # derived loggers -----------------------------------------------------

    def create(self, **overrides: Any) -> "Logger":
        """Return an independent logger built from this one's options plus ``overrides``."""

        return type(self)(self.options, **overrides)

    def with_defaults(self, defaults: Mapping[str, Any] | None = None, /, **fields: Any) -> "Logger":
        merged = {**self.options.defaults, **(defaults or {}), **fields}
        return self.create(defaults=merged)

    def with_tag(self, tag: str) -> "Logger":
        parent = self.options.defaults.get("tag")
        return self.with_defaults(tag=f"{parent}:{tag}" if parent else tag)

    # pausing -------------------------------------------------------------

    def pause_logs(self) -> None:
        self.options.pause_controller.pause()

    def resume_logs(self) -> None:
        self.options.pause_controller.resume()

    # extras --------------------------------------------------------------

    def mock_types(self, mock_fn: MockFn | None = None) -> None:
        """Replace each log function with ``mock_fn(type_name, defaults)`` when it returns a callable."""

        factory = mock_fn or self.options.mock_fn
        if not callable(factory):
            return
        for type_name, definition in self.options.types.items():
            replacement = factory(type_name, {"type": type_name, **self.options.defaults, **definition.to_defaults()})
            if callable(replacement):
                self._log_functions[type_name] = _MockedLogFunction(type_name, replacement)

    def prompt(self, message: str, **options: Any) -> Any:
        if self.options.prompt is None:
            raise ConfigurationError("prompt is not supported!")
        return self.options.prompt(message, **options)

    def flush(self) -> None:
        """Release a pending repeat summary immediately instead of waiting for the timer."""

        self._throttle.flush()

    @property
    def throttle_phase(self) -> ThrottlePhase:
        return self._throttle.phase

    # pipeline ------------------------------------------------------------

    def _submit(self, defaults: Mapping[str, Any], args: tuple[Any, ...], raw: bool) -> CallResult:
        if self.options.pause_controller.submit(self, defaults, args, raw):
            return {"ok": True, "queued": True}
        return self.process_call(defaults, args, raw)

    def process_call(self, defaults: Mapping[str, Any], args: tuple[Any, ...], raw: bool = False) -> CallResult:
        """Run one call through the pipeline without consulting the pause gate."""

        if resolve_level(defaults.get("level"), self.options.types, 0) > self.options.level:
            return {"ok": False, "reason": "below_level"}
        record = self._builder.build(defaults, args, raw)
        decision = self._throttle.submit(record)
        return {"ok": True, "decision": decision.value}

    # legacy names
    add = add_reporter
    remove = remove_reporter
    clear = remove_reporter
    with_scope = with_tag
    mock = mock_types
    pause = pause_logs
    resume = resume_logs


__all__ = ["CallResult", "LogFunction", "Logger"]
