# =============================================================================
# tests/test_mailer.py - Outgoing Email Tests
# =============================================================================
# Tests for lib/mailer.py with smtplib.SMTP mocked out.
#
# Run with: pytest tests/test_mailer.py -v
# =============================================================================

import asyncio
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from app.config import settings
from lib.mailer import MailerError, build_message, send_email


class TestBuildMessage:
    """Tests for build_message()."""

    def test_headers_and_body(self, monkeypatch):
        monkeypatch.setattr(settings, "FROM_NAME", "DevCamper")
        monkeypatch.setattr(settings, "FROM_EMAIL", "noreply@devcamper.io")

        msg = build_message("john@gmail.com", "Password reset token", "Reset here")

        assert msg["To"] == "john@gmail.com"
        assert msg["From"] == "DevCamper <noreply@devcamper.io>"
        assert msg["Subject"] == "Password reset token"
        assert msg["Message-ID"]
        assert msg.get_content().strip() == "Reset here"


class TestSendEmail:
    """Tests for send_email()."""

    def test_send_with_login(self, monkeypatch):
        """Test STARTTLS and login are used when credentials are configured."""
        monkeypatch.setattr(settings, "SMTP_EMAIL", "smtp-user")
        monkeypatch.setattr(settings, "SMTP_PASSWORD", "smtp-pass")

        with patch("lib.mailer.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            message_id = asyncio.run(send_email("john@gmail.com", "Hi", "Hello"))

        smtp_cls.assert_called_once_with(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10)
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("smtp-user", "smtp-pass")
        sent = smtp.send_message.call_args.args[0]
        assert sent["To"] == "john@gmail.com"
        assert message_id == sent["Message-ID"]

    def test_send_without_login(self, monkeypatch):
        """Test an unauthenticated relay skips STARTTLS and login."""
        monkeypatch.setattr(settings, "SMTP_EMAIL", "")

        with patch("lib.mailer.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            asyncio.run(send_email("john@gmail.com", "Hi", "Hello"))

        smtp.starttls.assert_not_called()
        smtp.login.assert_not_called()
        smtp.send_message.assert_called_once()

    @pytest.mark.parametrize("error", [
        smtplib.SMTPAuthenticationError(535, b"bad credentials"),
        ConnectionRefusedError("connection refused"),
    ])
    def test_failure_raises_mailer_error(self, error):
        """Test SMTP and socket errors become MailerError."""
        smtp_cls = MagicMock(side_effect=error)

        with patch("lib.mailer.smtplib.SMTP", smtp_cls):
            with pytest.raises(MailerError) as exc_info:
                asyncio.run(send_email("john@gmail.com", "Hi", "Hello"))

        assert exc_info.value.code == "MAILER_ERROR"
