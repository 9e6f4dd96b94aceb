"""
Unit tests for application wiring: mail sender selection, startup
configuration checks and the console entry point.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.api.main import app, build_email_sender, run
from src.config.settings import Settings, get_settings


class TestBuildEmailSender:
    def test_console_sender_without_host(self) -> None:
        sender = build_email_sender(Settings(_env_file=None))

        assert isinstance(sender, ConsoleEmailSender)

    def test_smtp_sender_with_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EMAIL_SERVICE_HOST", "smtp.example.com")
        monkeypatch.setenv("EMAIL_SERVICE_PORT", "465")
        monkeypatch.setenv("EMAIL_SERVICE_USER", "mailer")
        monkeypatch.setenv("EMAIL_SERVICE_PASS", "pw")
        monkeypatch.setenv("EMAIL_FROM_ADDRESS", "compras@example.com")

        sender = build_email_sender(Settings(_env_file=None))

        assert isinstance(sender, SmtpEmailSender)
        assert sender.hostname == "smtp.example.com"
        assert sender.implicit_tls is True
        assert sender.username == "mailer"
        assert sender.from_address == "compras@example.com"

    def test_smtp_sender_on_submission_port_uses_starttls(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EMAIL_SERVICE_HOST", "smtp.example.com")
        monkeypatch.setenv("EMAIL_FROM_ADDRESS", "compras@example.com")

        sender = build_email_sender(Settings(_env_file=None))

        assert sender.port == 587
        assert sender.implicit_tls is False


class TestStartupConfiguration:
    def test_lifespan_aborts_without_database_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Startup fails before touching the database when settings are missing."""
        monkeypatch.delenv("DATABASE_URL")
        get_settings.cache_clear()

        with patch("src.api.main.AsyncConnectionPool") as pool_cls:
            with pytest.raises(ValidationError):
                with TestClient(app):
                    pass

        pool_cls.assert_not_called()

    def test_run_exits_without_service_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_SERVICE_KEY")
        get_settings.cache_clear()

        with patch("src.api.main.uvicorn.run") as uvicorn_run:
            with pytest.raises(SystemExit) as excinfo:
                run()

        assert excinfo.value.code == 1
        uvicorn_run.assert_not_called()

    def test_run_serves_app(self) -> None:
        with patch("src.api.main.uvicorn.run") as uvicorn_run:
            run()

        uvicorn_run.assert_called_once_with(app, host="0.0.0.0", port=8000)
