"""Tests for the structured logger wrapper and logging setup."""

import logging

import pytest

from preview_fit.core.logging_config import coerce_level, configure_logging
from preview_fit.core.logging_utils import StructuredLogger, ensure_structured_logger, get_module_logger


def test_module_logger_lives_in_package_namespace():
    log = get_module_logger("preview_fit.geometry.size_selector")

    assert log.name == "preview_fit.geometry.size_selector"
    assert log.component == "size_selector"
    assert get_module_logger("Planner").name == "preview_fit.Planner"
    assert get_module_logger().component == "Core"


def test_messages_carry_component_prefix(caplog):
    log = get_module_logger("preview_fit.camera.planner")

    with caplog.at_level(logging.INFO, logger="preview_fit"):
        log.info("picked %s", "0")

    assert caplog.records[-1].getMessage() == "[planner] picked 0"


def test_bad_format_args_are_kept(caplog):
    log = get_module_logger("Check")

    with caplog.at_level(logging.WARNING, logger="preview_fit"):
        log.warning("%d sizes", "many")

    assert caplog.records[-1].getMessage() == "[Check] %d sizes | args=many"


def test_ensure_structured_logger_wraps_plain_loggers():
    plain = logging.getLogger("host.app")
    wrapped = ensure_structured_logger(plain, component="Host")

    assert isinstance(wrapped, StructuredLogger)
    assert wrapped.logger is plain
    assert wrapped.component == "Host"
    assert ensure_structured_logger(wrapped) is wrapped
    assert ensure_structured_logger(None, fallback_name="Fallback").name == "preview_fit.Fallback"


def test_child_logger_extends_component():
    child = get_module_logger("Planner").getChild("select")

    assert child.name == "preview_fit.Planner.select"
    assert child.component == "Planner.select"


def test_coerce_level():
    assert coerce_level("debug") == logging.DEBUG
    assert coerce_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        coerce_level("chatty")


def test_configure_logging_writes_rotating_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "preview_fit.log"

    try:
        configure_logging("warning", log_file, quiet_loggers=("noisy.lib",))
        logging.getLogger("noisy.lib").warning("hidden")
        get_module_logger("FileCheck").warning("written")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.WARNING
        assert "[FileCheck] written" in log_file.read_text(encoding="utf-8")
        assert "hidden" not in log_file.read_text(encoding="utf-8")
        assert [type(handler).__name__ for handler in root.handlers] == ["StreamHandler", "RotatingFileHandler"]
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
