"""
Adapter: SMTP email channel.

Implements the NotificationChannel port with the standard library
smtplib client. Each send opens a short-lived connection bounded by
``timeout`` so a dead mail relay cannot stall the pipeline forever.
"""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from errorhub.domain.reporting.ports import NotificationChannel

logger = logging.getLogger(__name__)


class SmtpEmailChannel(NotificationChannel):
    """Delivers plain-text notification mails over SMTP."""

    def __init__(
        self,
        host: str,
        port: int = 25,
        from_address: str = "noreply@example.com",
        from_name: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = False,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._from = formataddr((from_name, from_address)) if from_name else from_address
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def build_message(self, destination: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._from
        message["To"] = destination
        message["Subject"] = subject
        message.set_content(body)
        return message

    def send(self, destination: str, subject: str, body: str) -> None:
        message = self.build_message(destination, subject, body)
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password or "")
            smtp.send_message(message)
        logger.info("Notification mail sent to %s: %s", destination, subject)
