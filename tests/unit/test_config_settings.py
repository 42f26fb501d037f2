"""Unit tests for console settings and logging configuration."""

import logging
from pathlib import Path

import pytest

from admin_console.config import Settings
from admin_console.infrastructure.logging.colored_logger import CrudStage, OrchestrationLogger
from admin_console.infrastructure.logging.log_config import setup_logging


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project's .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("API_BASE_URL", raising=False)
    monkeypatch.delenv("API_TIMEOUT_SECONDS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "http://localhost:8080/api"
    assert settings.api_timeout_seconds == 10.0
    assert settings.log_level_http == "WARNING"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("API_BASE_URL", "https://admin.example.com/api")
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "2.5")

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "https://admin.example.com/api"
    assert settings.api_timeout_seconds == 2.5


def test_setup_logging_applies_category_levels():
    settings = Settings(
        _env_file=None,
        log_level="INFO",
        log_level_http="ERROR",
        log_level_gateway="DEBUG",
        log_level_orchestrator="warning",
    )

    setup_logging(settings)

    assert logging.getLogger("httpx").level == logging.ERROR
    assert logging.getLogger("admin_console.infrastructure.api").level == logging.DEBUG
    assert logging.getLogger("admin_console.orchestrator").level == logging.WARNING


def test_unknown_level_name_falls_back_to_info():
    setup_logging(Settings(_env_file=None, log_level_gateway="chatty"))

    assert logging.getLogger("admin_console.infrastructure.api").level == logging.INFO


def test_timed_step_logs_failure_and_reraises(caplog: pytest.LogCaptureFixture):
    log = OrchestrationLogger("admin_console.orchestrator.test")

    with caplog.at_level(logging.INFO, logger="admin_console.orchestrator.test"):
        with pytest.raises(RuntimeError):
            with log.timed_step(CrudStage.DELETE, "Deleting user", id=3):
                raise RuntimeError("boom")

    messages = [record.getMessage() for record in caplog.records]
    assert any("[DELETE]" in m and "id=3" in m for m in messages)
    assert caplog.records[-1].levelno == logging.ERROR
    assert "RuntimeError: boom" in messages[-1]
