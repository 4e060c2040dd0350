"""
Outbound email: SMTP transport plus the rendered verification message.
"""
from __future__ import annotations

import logging
import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import settings

logger = logging.getLogger(__name__)

templates = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html"]),
)


class Mailer:
    """Sends HTML mail through the configured SMTP server."""

    def __init__(self, user: str | None = None, password: str | None = None,
                 sender: str | None = None, server: str | None = None, port: int | None = None):
        self.user = user if user is not None else settings.EMAIL_USER
        self.password = password if password is not None else settings.EMAIL_PASSWORD
        self.sender = sender or settings.EMAIL_FROM
        self.server = server or settings.SMTP_SERVER
        self.port = port or settings.SMTP_PORT

    def _from_address(self) -> str:
        # Gmail rewrites the envelope sender to the authenticated account anyway
        if "gmail" in (self.server or "").lower() and self.user:
            return self.user
        return self.sender or self.user or "noreply@hirefusion.dev"

    def send(self, to: str, subject: str, html: str, sender_name: str | None = None) -> None:
        if not (self.user and self.password):
            raise RuntimeError("Email credentials not configured. Set EMAIL_USER and EMAIL_PASSWORD.")

        from_address = self._from_address()
        msg = MIMEText(html, "html", "utf-8")
        msg["Subject"] = subject
        msg["From"] = formataddr((sender_name or settings.EMAIL_SENDER_NAME, from_address))
        msg["To"] = to

        with smtplib.SMTP(self.server, self.port) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.sendmail(from_address, [to], msg.as_string())
        logger.info("Sent '%s' to %s", subject, to)


def get_mailer() -> Mailer:
    return Mailer()


def render_verification_email(username: str, code: str) -> str:
    return templates.get_template("emails/verification_email.html").render(
        username=username,
        otp=code,
        expire_minutes=settings.VERIFY_CODE_EXPIRE_MINUTES,
    )


def send_verification_email(mailer: Mailer, email: str, username: str, code: str) -> tuple[bool, str]:
    """Send the signup code. Never raises; failures come back as (False, message)."""
    try:
        mailer.send(email, "Verification Code", render_verification_email(username, code))
    except Exception:
        logger.exception("Error sending verification email to %s", email)
        return False, "Error sending verification email"
    return True, "Verification email sent successfully!"
