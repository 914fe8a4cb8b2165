"""Tests for the ktool logging configuration."""

import logging

from ktool.logging_config import BundleContextFilter, ConsoleFormatter, get_logging_config, set_bundle_name


def test_output_goes_to_stderr():
    config = get_logging_config()

    assert config["handlers"]["default"]["stream"] == "ext://sys.stderr"
    assert config["loggers"]["ktool"]["level"] == "INFO"


def test_debug_level_uses_detailed_format():
    config = get_logging_config("debug")

    assert config["loggers"]["ktool"]["level"] == "DEBUG"
    assert config["handlers"]["default"]["formatter"] == "debug"


def test_bundle_filter_tags_records():
    record = logging.LogRecord("ktool.bundle", logging.INFO, __file__, 1, "msg", None, None)
    log_filter = BundleContextFilter()

    set_bundle_name("konnector-support-bundle-panw-ktool-v1.0.0-20261019-103000")
    try:
        assert log_filter.filter(record) is True
        assert record.bundle == "konnector-support-bundle-panw-ktool-v1.0.0-20261019-103000"
    finally:
        set_bundle_name(None)

    log_filter.filter(record)
    assert record.bundle == "-"


def make_record(level, msg):
    return logging.LogRecord("ktool.executor", level, __file__, 1, msg, None, None)


def test_console_formatter_prefixes_warnings_only():
    formatter = ConsoleFormatter(fmt="%(message)s")

    assert formatter.format(make_record(logging.INFO, "[1/6] Collecting Cluster Information...")) == (
        "[1/6] Collecting Cluster Information..."
    )
    assert formatter.format(make_record(logging.WARNING, "Collection for 'x' failed.")) == (
        "Warning: Collection for 'x' failed."
    )
    assert formatter.format(make_record(logging.ERROR, "Failed to write x")) == "ERROR: Failed to write x"


def test_debug_format_does_not_repeat_level():
    config = get_logging_config("DEBUG")
    formatter = logging.Formatter(config["formatters"]["debug"]["format"])
    record = make_record(logging.WARNING, "Collection for 'x' failed.")
    record.bundle = "-"

    output = formatter.format(record)

    assert " - WARNING - [-] Collection for 'x' failed." in output
    assert "WARN:" not in output


def test_default_formatter_is_console_formatter():
    config = get_logging_config()

    assert config["formatters"]["default"]["()"] is ConsoleFormatter
