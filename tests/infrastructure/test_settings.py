"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

from src.domain.models import Authenticated
from src.infrastructure import container
from src.infrastructure import settings as settings_module
from src.infrastructure.settings import AppSettings

ENV_VARS = (
    "BASE_CURRENCY",
    "SUPPORTED_CURRENCIES",
    "DISPLAY_CURRENCY",
    "QUOTE_TIMEOUT_SECONDS",
    "QUOTE_PROXY_PREFIX",
    "FINANCE_USER_ID",
)


def _clear_env(monkeypatch) -> MagicMock:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        settings_module.dotenv,
        "load_dotenv",
        lambda *args, **kwargs: False,
    )
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    return logger


def test_from_env_defaults(monkeypatch) -> None:
    """Without configuration the ledger runs in TWD as a guest."""
    _clear_env(monkeypatch)

    settings = AppSettings.from_env()

    assert settings.base_currency == "TWD"
    assert settings.supported_currencies == ("TWD", "USD", "JPY")
    assert settings.display_currency == "TWD"
    assert settings.quote_timeout_seconds == 10.0
    assert settings.quote_proxy_prefix is None
    assert settings.user_id is None


def test_from_env_reads_overrides(monkeypatch) -> None:
    """Values are normalized and the base joins the supported set."""
    _clear_env(monkeypatch)
    monkeypatch.setenv("BASE_CURRENCY", "twd")
    monkeypatch.setenv("SUPPORTED_CURRENCIES", "usd, jpy,usd")
    monkeypatch.setenv("DISPLAY_CURRENCY", "jpy")
    monkeypatch.setenv("QUOTE_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("QUOTE_PROXY_PREFIX", "https://proxy/?")
    monkeypatch.setenv("FINANCE_USER_ID", " u1 ")

    settings = AppSettings.from_env()

    assert settings.supported_currencies == ("TWD", "USD", "JPY")
    assert settings.display_currency == "JPY"
    assert settings.quote_timeout_seconds == 2.5
    assert settings.quote_proxy_prefix == "https://proxy/?"
    assert settings.user_id == "u1"


def test_from_env_falls_back_on_invalid_values(monkeypatch) -> None:
    """Unsupported display currencies and bad timeouts are warned about."""
    logger = _clear_env(monkeypatch)
    monkeypatch.setenv("DISPLAY_CURRENCY", "EUR")
    monkeypatch.setenv("QUOTE_TIMEOUT_SECONDS", "soon")

    settings = AppSettings.from_env()

    assert settings.display_currency == "TWD"
    assert settings.quote_timeout_seconds == 10.0
    assert logger.warning.call_count == 2


def test_from_env_reads_dotenv_file_in_working_directory(
    tmp_path,
    monkeypatch,
) -> None:
    """Values from ``.env`` reach the settings and the identity."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "get_app_logger", MagicMock)
    (tmp_path / ".env").write_text(
        "FINANCE_USER_ID=alice\nDISPLAY_CURRENCY=USD\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    settings = AppSettings.from_env()

    assert settings.user_id == "alice"
    assert settings.display_currency == "USD"
    assert container.build_identity(settings) == Authenticated(user_id="alice")


def test_process_environment_wins_over_dotenv(tmp_path, monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "get_app_logger", MagicMock)
    (tmp_path / ".env").write_text("FINANCE_USER_ID=alice\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FINANCE_USER_ID", "bob")

    assert AppSettings.from_env().user_id == "bob"
