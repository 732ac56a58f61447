# =============================================================================
# lib/mailer.py - Outgoing Email
# =============================================================================
# Sends plain-text emails over SMTP with the credentials from settings.
# smtplib is blocking, so the send runs in a worker thread.
#
# Usage:
#   from lib.mailer import send_email
#   await send_email(email="user@example.com", subject="Hi", message="...")
# =============================================================================

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

SMTP_TIMEOUT = 10


class MailerError(ApplicationError):
    """Raised when the SMTP server rejects or can't be reached."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to send email: {error}",
            code="MAILER_ERROR",
            status_code=500,
            suggestion="Check SMTP_HOST, SMTP_PORT and the SMTP credentials",
            details={"error": error},
        )


def build_message(email: str, subject: str, message: str) -> EmailMessage:
    """Build the plain-text message from the configured sender."""
    msg = EmailMessage()
    msg["From"] = formataddr((settings.FROM_NAME, settings.FROM_EMAIL))
    msg["To"] = email
    msg["Subject"] = subject
    msg["Message-ID"] = make_msgid()
    msg.set_content(message)
    return msg


def _deliver(msg: EmailMessage) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=SMTP_TIMEOUT) as smtp:
        if settings.SMTP_EMAIL:
            smtp.starttls()
            smtp.login(settings.SMTP_EMAIL, settings.SMTP_PASSWORD)
        smtp.send_message(msg)


async def send_email(email: str, subject: str, message: str) -> str:
    """
    Send an email.

    Args:
        email: Recipient address
        subject: Subject line
        message: Plain-text body

    Returns:
        The Message-ID of the sent email

    Raises:
        MailerError: If the SMTP conversation fails
    """
    msg = build_message(email, subject, message)

    try:
        await asyncio.to_thread(_deliver, msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {email}: {e}")
        raise MailerError(str(e))

    logger.info(f"Message sent: {msg['Message-ID']}")
    return msg["Message-ID"]
