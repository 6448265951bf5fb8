"""Tests for the application and audit loggers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def log_root(tmp_path, monkeypatch):
    """Send log files to ``tmp_path`` with a fixed date stamp."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240601"),
    )
    created: list[str] = []
    yield tmp_path, created
    for name in created:
        built = logging.getLogger(name)
        for handler in list(built.handlers):
            handler.close()
            built.removeHandler(handler)


@pytest.fixture
def fresh_singletons():
    logger_module.AppLogger._instance = None
    logger_module.AuditLogger._instance = None
    yield
    logger_module.AppLogger._instance = None
    logger_module.AuditLogger._instance = None


def test_app_logger_writes_to_app_dir_and_console(
    log_root,
    fresh_singletons,
) -> None:
    """Diagnostics go to logs/app and are echoed on the console."""
    root, created = log_root
    created.append("ledger.app.wiring")

    app = logger_module.AppLogger("ledger.app.wiring")

    handlers = app.logger.handlers
    file_handlers = [h for h in handlers if isinstance(h, logging.FileHandler)]
    console_handlers = [
        h for h in handlers if not isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    assert len(console_handlers) == 1
    assert file_handlers[0].baseFilename == str(
        root / "logs" / "app" / "20240601_app.log"
    )
    assert app.logger.propagate is False


def test_audit_logger_is_file_only_under_audit_dir(
    log_root,
    fresh_singletons,
) -> None:
    """Automation audit entries never reach the console."""
    root, created = log_root
    created.append("ledger.audit.wiring")

    audit = logger_module.AuditLogger("ledger.audit.wiring")
    audit.info("SUCCESS | Executed: Rent | Debited Bank $3,000")

    handlers = audit.logger.handlers
    assert [type(h) for h in handlers] == [logging.FileHandler]
    log_file = root / "logs" / "audit" / "20240601_audit.log"
    handlers[0].flush()
    assert "Executed: Rent" in log_file.read_text(encoding="utf-8")


def test_builder_passes_path_and_formatter_to_factories(log_root) -> None:
    """Custom factories receive the resolved log path and formatter."""
    root, created = log_root
    created.append("ledger.builder.factories")
    formatter = logging.Formatter("%(message)s")
    received = {}

    def file_factory(path, fmt):
        received["path"] = path
        received["fmt"] = fmt
        return logging.NullHandler()

    built = (
        logger_module.LoggerBuilder()
        .name("ledger.builder.factories")
        .subdir("quotes")
        .prefix("refresh")
        .level(logging.DEBUG)
        .formatter(lambda: formatter)
        .file_handler(file_factory)
        .build()
    )

    assert received["path"] == root / "logs" / "quotes" / "20240601_refresh.log"
    assert received["fmt"] is formatter
    assert (root / "logs" / "quotes").is_dir()
    assert built.level == logging.DEBUG
    assert [type(h) for h in built.handlers] == [logging.NullHandler]


def test_builder_leaves_configured_logger_untouched(log_root) -> None:
    """Building an already configured name adds no duplicate handlers."""
    _, created = log_root
    created.append("ledger.builder.reuse")
    builder = logger_module.LoggerBuilder().name("ledger.builder.reuse")

    first = builder.build()
    second = builder.console(True).build()

    assert second is first
    assert len(second.handlers) == 1


def test_default_file_handler_is_utf8_at_info_level(tmp_path) -> None:
    """Category labels such as 自動化 are written without mangling."""
    handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        logger_module.LoggerBuilder._default_formatter(),
    )

    assert handler.level == logging.INFO
    assert handler.encoding == "utf-8"
    assert handler.formatter._fmt == logger_module.DEFAULT_FORMAT
    handler.close()


def test_accessors_return_distinct_singletons(
    monkeypatch,
    fresh_singletons,
) -> None:
    """App and audit loggers are each built once and kept apart."""
    built = []

    def _fake_build(self):
        wrapped = MagicMock(name=self._subdir)
        built.append((self._name, self._subdir, self._console))
        return wrapped

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)

    app = logger_module.get_app_logger()
    audit = logger_module.get_audit_logger()

    assert logger_module.get_app_logger() is app
    assert logger_module.get_audit_logger() is audit
    assert app is not audit
    assert built == [
        ("finance.app", "app", True),
        ("finance.audit", "audit", False),
    ]


def test_logger_forwards_messages_with_arguments(
    monkeypatch,
    fresh_singletons,
) -> None:
    wrapped = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: wrapped,
    )

    app = logger_module.get_app_logger()
    app.warning("No quote for %s", "2330")
    app.error("Failed: %s", "ETF")

    wrapped.warning.assert_called_once_with("No quote for %s", "2330")
    wrapped.error.assert_called_once_with("Failed: %s", "ETF")
