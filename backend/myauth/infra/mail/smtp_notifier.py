"""SMTP delivery for outbound notifications."""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from myauth.services._shared.errors import NotificationFailedError
from myauth.services._shared.ports import Notifier

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SMTPNotifier(Notifier):
    """
    Send HTML mail through an SMTP relay.

    One connection per message; STARTTLS and login are optional. Any
    transport failure is raised as :class:`NotificationFailedError`.

    :param host: SMTP server host.
    :param port: SMTP server port.
    :param sender: ``From`` header, e.g. ``"MyAuth System <no-reply@example.org>"``.
    :param username: Optional login user.
    :param password: Optional login password.
    :param use_tls: Issue ``STARTTLS`` before login.
    :param timeout: Socket timeout in seconds.
    """

    host: str
    port: int
    sender: str
    username: str | None = None
    password: str | None = None
    use_tls: bool = True
    timeout: float = 10.0

    def _build(self, to_address: str, subject: str, html_body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to_address
        msg["Subject"] = subject
        msg.set_content("Please open this message in an HTML-capable mail client.")
        msg.add_alternative(html_body, subtype="html")
        return msg

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        msg = self._build(to_address, subject, html_body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationFailedError(f"SMTP delivery to {self.host}:{self.port} failed") from exc
        log.info("Mail sent", extra={"kind": "smtp"})
