from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

import pytest

from lib_log_facade import ConfigurationError, LOG_TYPES, Logger, LoggerOptions
from lib_log_facade.adapters.memory import MemoryReporter
from lib_log_facade.domain.throttle import ThrottlePhase


def test_plain_call_reaches_reporter(make_logger, reporter: MemoryReporter, clock) -> None:
    logger = make_logger()

    result = logger.info("Hello", "world", 3)

    assert result == {"ok": True, "decision": "emitted"}
    [record] = reporter.records
    assert record.type == "info"
    assert record.level == 3
    assert record.args == ("Hello", "world", 3)
    assert record.date == clock.now()


def test_structured_call_merges_fields(make_logger, reporter: MemoryReporter) -> None:
    logger = make_logger()

    logger.warn({"message": "disk", "additional": ["93%", "used"], "tag": "Storage", "badge": True})

    [record] = reporter.records
    assert record.type == "warn"
    assert record.tag == "storage"
    assert record.args == ("disk", "\n93%\nused")
    assert record.extra == {"badge": True}


def test_raw_variant_logs_mapping_literally(make_logger, reporter: MemoryReporter) -> None:
    payload = {"message": "literal"}
    logger = make_logger()

    logger.info.raw(payload)

    assert reporter.args() == [(payload,)]


def test_structured_date_is_kept(make_logger, reporter: MemoryReporter) -> None:
    stamp = datetime(2020, 1, 1, 8, 0, tzinfo=timezone.utc)
    make_logger().info({"message": "late", "date": stamp})

    assert reporter.records[0].date == stamp


def test_calls_above_level_are_dropped_without_side_effects(make_logger, reporter: MemoryReporter, clock) -> None:
    logger = make_logger(level="info")

    result = logger.debug("hidden")

    assert result == {"ok": False, "reason": "below_level"}
    assert reporter.records == []
    assert logger.throttle_phase is ThrottlePhase.IDLE
    assert clock.pending == 0


@pytest.mark.parametrize(
    "level, emitted",
    [
        (0, ["fatal", "error"]),
        (1, ["fatal", "error", "warn"]),
        (3, ["fatal", "error", "warn", "log", "info", "success"]),
        (math.inf, ["fatal", "error", "warn", "log", "info", "success", "debug", "trace", "verbose"]),
    ],
)
def test_level_gates_types(make_logger, reporter: MemoryReporter, level: float, emitted: list[str]) -> None:
    logger = make_logger(level=level)
    for type_name in ("fatal", "error", "warn", "log", "info", "success", "debug", "trace", "verbose"):
        logger[type_name](type_name)

    assert [record.type for record in reporter.records] == emitted


def test_negative_infinite_level_drops_everything(make_logger, reporter: MemoryReporter) -> None:
    logger = make_logger(level=-math.inf)
    logger.fatal("x")
    logger.silent("y")

    assert reporter.records == []


def test_silent_type_name_resolves_through_type_table(make_logger, reporter: MemoryReporter) -> None:
    logger = make_logger(level="silent")
    logger.fatal("x")
    logger.silent("y")

    assert logger.level == -1
    assert reporter.args() == [("y",)]


def test_level_property_resolves_names_and_keeps_level_on_unknown(make_logger) -> None:
    logger = make_logger()

    logger.level = "debug"
    assert logger.level == 4
    logger.level = "no-such-type"
    assert logger.level == 4
    assert logger.set_level(1).get_level() == 1


def test_burst_through_logger_is_throttled(make_logger, reporter: MemoryReporter, clock) -> None:
    logger = make_logger()
    decisions = [logger.info("same")["decision"] for _ in range(5)]

    assert decisions == ["emitted"] * 3 + ["suppressed"] * 2
    assert logger.throttle_phase is ThrottlePhase.FLUSH_SCHEDULED

    clock.advance(seconds=1)

    assert reporter.args() == [("same",)] * 3 + [("same", "(repeated 2 times)")]


def test_flush_releases_summary_immediately(make_logger, reporter: MemoryReporter, clock) -> None:
    logger = make_logger()
    for _ in range(6):
        logger.info("same")

    logger.flush()

    assert reporter.args()[-1] == ("same", "(repeated 3 times)")
    assert clock.pending == 0


def test_with_tag_nests_tags(make_logger, reporter: MemoryReporter) -> None:
    parent = make_logger(defaults={"tag": "a"})
    child = parent.with_tag("b")

    child.info("x")
    parent.info("y")

    assert [record.tag for record in reporter.records] == ["a:b", "a"]
    assert parent.options.defaults == {"tag": "a"}
    assert parent.with_scope("c").options.defaults["tag"] == "a:c"


def test_with_defaults_adds_fields_to_records(make_logger, reporter: MemoryReporter) -> None:
    make_logger().with_defaults({"icon": "*"}, tag="svc").success("done")

    [record] = reporter.records
    assert record.tag == "svc"
    assert record.extra == {"icon": "*"}


def test_derived_loggers_throttle_independently(make_logger) -> None:
    parent = make_logger()
    child = parent.create()
    for _ in range(3):
        parent.info("same")

    assert child.info("same")["decision"] == "emitted"
    assert parent.info("same")["decision"] == "suppressed"


def test_derived_logger_reporter_list_is_a_copy(make_logger, reporter: MemoryReporter) -> None:
    parent = make_logger()
    child = parent.create()
    extra = MemoryReporter()

    child.add_reporter(extra)
    parent.info("x")

    assert len(reporter) == 1
    assert len(extra) == 0


def test_caller_options_are_not_mutated(clock, pause_controller) -> None:
    reporters: list[Any] = []
    defaults = {"tag": "svc"}
    logger = Logger(reporters=reporters, defaults=defaults, clock=clock, pause_controller=pause_controller)

    logger.add_reporter(MemoryReporter())
    logger.with_tag("x")

    assert reporters == []
    assert defaults == {"tag": "svc"}


def test_reporter_management(make_logger, reporter: MemoryReporter) -> None:
    logger = make_logger()
    second = MemoryReporter()

    logger.add_reporter(second).info("both")
    logger.remove_reporter(reporter).info("second only")
    logger.set_reporters(reporter).info("first only")
    logger.clear().info("nobody")

    assert reporter.args() == [("both",), ("first only",)]
    assert second.args() == [("both",), ("second only",)]
    assert logger.options.reporters == []


def test_removing_unknown_reporter_is_ignored(make_logger) -> None:
    logger = make_logger()
    logger.remove(MemoryReporter())

    assert len(logger.options.reporters) == 1


def test_failing_reporter_is_isolated(make_logger, reporter: MemoryReporter) -> None:
    events: list[tuple[str, dict[str, Any]]] = []

    class Broken:
        def log(self, record, context) -> None:
            raise RuntimeError("nope")

    logger = make_logger(reporters=[Broken(), reporter], diagnostic=lambda name, payload: events.append((name, payload)))
    result = logger.error("still delivered")

    assert result["ok"] is True
    assert reporter.args() == [("still delivered",)]
    assert [name for name, _ in events] == ["reporter_error"]


def test_reporters_see_logger_options(make_logger) -> None:
    seen: list[Any] = []

    class Spy:
        def log(self, record, context) -> None:
            seen.append(context.options.format_options["date"])

    make_logger(reporters=[Spy()], format_options={"date": False}).info("x")

    assert seen == [False]


def test_custom_types_create_log_functions(make_logger, reporter: MemoryReporter) -> None:
    types = {**LOG_TYPES, "notice": {"level": 2, "badge": True}}
    logger = make_logger(types=types)

    logger.notice("heads up")

    [record] = reporter.records
    assert record.type == "notice"
    assert record.level == 2
    assert record.extra == {"badge": True}


def test_log_function_lookup(make_logger) -> None:
    logger = make_logger()

    assert logger["info"] is logger.info
    assert logger.log_function("warn") is logger.warn
    with pytest.raises(KeyError, match="Unknown log type"):
        logger["nope"]
    with pytest.raises(AttributeError):
        logger.nope  # noqa: B018


def test_mock_types_replaces_log_functions(make_logger, reporter: MemoryReporter) -> None:
    seen: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def mock_fn(type_name: str, defaults: dict[str, Any]):
        if type_name != "info":
            return None
        return lambda *args: seen.append((type_name, args, defaults))

    logger = make_logger(mock_fn=mock_fn)
    logger.info("mocked")
    logger.warn("real")

    assert seen == [("info", ("mocked",), {"type": "info", "level": 3})]
    assert reporter.args() == [("real",)]
    assert logger.info.raw is logger.info


def test_mock_alias_installs_mock_after_construction(make_logger, reporter: MemoryReporter) -> None:
    seen: list[tuple[Any, ...]] = []
    logger = make_logger()

    logger.mock(lambda type_name, defaults: lambda *args: seen.append(args))
    logger.info("a")
    logger.warn("b")

    assert seen == [("a",), ("b",)]
    assert reporter.records == []


def test_prompt_requires_configuration(make_logger) -> None:
    with pytest.raises(ConfigurationError, match="prompt is not supported"):
        make_logger().prompt("continue?")


def test_prompt_delegates_to_configured_capability(make_logger) -> None:
    logger = make_logger(prompt=lambda message, **options: f"{message}={options['default']}")

    assert logger.prompt("continue?", default="yes") == "continue?=yes"


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown logger option"):
        Logger(colour=True)


@pytest.mark.parametrize("throttle", [0, -1, "fast"])
def test_invalid_throttle_is_rejected(throttle: Any) -> None:
    with pytest.raises(ConfigurationError, match="throttle"):
        Logger(throttle=throttle)


@pytest.mark.parametrize("throttle_min", [-1, 1.5, True])
def test_invalid_throttle_min_is_rejected(throttle_min: Any) -> None:
    with pytest.raises(ConfigurationError, match="throttle_min"):
        Logger(throttle_min=throttle_min)


def test_options_snapshot_is_independent(make_logger) -> None:
    logger = make_logger(level=1)
    derived = logger.create(level="debug")

    assert logger.level == 1
    assert derived.level == 4


def test_default_options_use_builtin_type_table() -> None:
    first = LoggerOptions()
    second = LoggerOptions()

    assert first.types is LOG_TYPES
    assert first.reporters is not second.reporters
    assert Logger(first, pause_controller=None).types["info"].level == 3
