"""
Email service: delivers OTP codes via SMTP.

In development (no SMTP configured), emails are logged to the console
so you can see what *would* be sent without configuring a mail server.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

import aiosmtplib

from otp_gate import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryContext:
    """What the recipient sees around the code."""

    name: str
    template: str = "user-activation-email"
    subject: str = "Verify Your Email!"


class NotificationDispatcher(Protocol):
    async def send(self, identity: str, code: str, context: DeliveryContext) -> bool:
        """Deliver *code* to *identity*; return False if delivery failed."""
        ...


# ── Message bodies ─────────────────────────────────────────────────────────

_INTROS = {
    "user-activation-email": "Use the code below to activate your account.",
    "reset-password-email": "Use the code below to reset your password.",
}


def _intro(template: str) -> str:
    return _INTROS.get(template, "Use the code below to continue.")


def _build_plain_body(code: str, context: DeliveryContext) -> str:
    return (
        f"Hi {context.name},\n\n"
        f"{_intro(context.template)}\n\n"
        f"    {code}\n\n"
        "The code expires in 5 minutes. If you did not request it, ignore this email.\n"
    )


def _build_html_body(code: str, context: DeliveryContext) -> str:
    return f"""
    <html>
    <body style="font-family:sans-serif;color:#333">
      <p>Hi {html.escape(context.name)},</p>
      <p>{_intro(context.template)}</p>
      <p style="font-size:2em;letter-spacing:0.3em;font-weight:bold">{code}</p>
      <p style="margin-top:1em;font-size:0.9em;color:#888">
        The code expires in 5 minutes. If you did not request it, ignore this email.
      </p>
    </body>
    </html>
    """


# ── Dispatcher ─────────────────────────────────────────────────────────────


class EmailDispatcher:
    """``NotificationDispatcher`` that sends the code by email."""

    async def send(self, identity: str, code: str, context: DeliveryContext) -> bool:
        # ── Console fallback (dev mode) ───────────────────────────────
        if not config.smtp_enabled():
            logger.info(
                "📧 [DEV] Would send email to %s:\n"
                "  Subject: %s\n"
                "  Template: %s\n"
                "  Code: %s",
                identity,
                context.subject,
                context.template,
                code,
            )
            return True

        # ── Real SMTP send ────────────────────────────────────────────
        msg = MIMEMultipart("alternative")
        msg["Subject"] = context.subject
        msg["From"] = config.SMTP_FROM_EMAIL
        msg["To"] = identity
        msg.attach(MIMEText(_build_plain_body(code, context), "plain"))
        msg.attach(MIMEText(_build_html_body(code, context), "html"))

        try:
            await aiosmtplib.send(
                msg,
                hostname=config.SMTP_HOST,
                port=config.SMTP_PORT,
                username=config.SMTP_USERNAME,
                password=config.SMTP_PASSWORD,
                start_tls=config.SMTP_USE_TLS,
            )
        except (aiosmtplib.SMTPException, OSError):
            logger.exception("Failed to send OTP email to %s", identity)
            return False

        logger.info("OTP email sent to %s (%s)", identity, context.template)
        return True
