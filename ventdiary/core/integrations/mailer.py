"""Outbound email handle.

Built once by the app factory from config and fetched by handlers with
``get_mailer()``. Delivery errors surface as ``MailDeliveryError`` so callers
decide how to recover.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Mapping, Optional

from flask import current_app

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """Raised when the SMTP server rejects or cannot receive a message."""


class Mailer:
    def __init__(
        self,
        server: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        suppress_send: bool = False,
        timeout: int = 10,
    ) -> None:
        self.server = server
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.suppress_send = suppress_send
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Mapping) -> "Mailer":
        return cls(
            server=config.get("MAIL_SERVER", "localhost"),
            port=int(config.get("MAIL_PORT", 587)),
            sender=config.get("MAIL_DEFAULT_SENDER", "no-reply@localhost"),
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            use_tls=bool(config.get("MAIL_USE_TLS", True)),
            suppress_send=bool(config.get("MAIL_SUPPRESS_SEND", False)),
        )

    def send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        if self.suppress_send:
            logger.info("Mail delivery suppressed: to=%s subject=%s", to, subject)
            return

        try:
            with smtplib.SMTP(self.server, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Mail delivery to %s failed: %s", to, exc)
            raise MailDeliveryError(str(exc)) from exc


def get_mailer() -> Mailer:
    return current_app.extensions["mailer"]
