"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def fixed_log_root(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20250301"),
    )
    return tmp_path


def _file_handlers(built: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in built.handlers if isinstance(h, logging.FileHandler)]


def test_builder_writes_under_subdir_with_stamped_name(fixed_log_root):
    """Built loggers should log to logs/<subdir>/<stamp>_<prefix>.log."""
    built = (
        logger_module.LoggerBuilder()
        .name("budget_import.test_builder")
        .subdir("imports")
        .prefix("import_runs")
        .level(logging.DEBUG)
        .build()
    )

    handlers = _file_handlers(built)
    expected = fixed_log_root / "logs" / "imports" / "20250301_import_runs.log"
    assert built.level == logging.DEBUG
    assert built.propagate is False
    assert [h.baseFilename for h in handlers] == [str(expected)]
    assert expected.parent.is_dir()


def test_builder_reuses_configured_logger(fixed_log_root):
    """A second build for the same name should not stack handlers."""
    builder = logger_module.LoggerBuilder().name("budget_import.reuse")

    first = builder.build()
    second = builder.build()

    assert first is second
    assert len(first.handlers) == 1


def test_builder_adds_console_handler_when_enabled(fixed_log_root):
    """Console output should be opt-in through the builder."""
    console = MagicMock(spec=logging.Handler)
    built = (
        logger_module.LoggerBuilder()
        .name("budget_import.console")
        .console(True)
        .console_handler(lambda fmt: console)
        .build()
    )

    assert console in built.handlers


def test_logger_wrapper_forwards_messages(monkeypatch):
    """Wrapper methods should pass messages and arguments through."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    wrapper = logger_module.Logger("budget_import.wrapper")
    wrapper.info("Imported %s rows", 3)
    wrapper.warning("Skipped row")
    wrapper.error("Write failed")
    wrapper.debug("Decoded grid")
    wrapper.critical("Stopped")

    fake_logger.info.assert_called_with("Imported %s rows", 3)
    fake_logger.warning.assert_called_with("Skipped row")
    fake_logger.error.assert_called_with("Write failed")
    fake_logger.debug.assert_called_with("Decoded grid")
    fake_logger.critical.assert_called_with("Stopped")
    assert logger_module.Logger("other") is wrapper


def test_app_and_usage_loggers_are_separate_singletons(monkeypatch):
    """App and usage loggers should each be built once with own settings."""
    built_with = []

    def _fake_build(self):
        built_with.append((self._name, self._subdir, self._console))
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built_with == [
        ("budget_import", "app", True),
        ("budget_import.usage", "usage", False),
    ]
