from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    """A message handed to a notifier."""

    to_address: str
    subject: str
    html_body: str


class Notifier(Protocol):
    """
    Deliver a message to an email address.

    Implementations raise
    :class:`~myauth.services._shared.errors.NotificationFailedError` when
    delivery fails; callers decide whether that is fatal.
    """

    def send(self, to_address: str, subject: str, html_body: str) -> None: ...


class InMemoryNotifier(Notifier):
    """Keep messages in an outbox instead of sending them.

    Used in development (links can be read from the logs/outbox) and tests.
    """

    def __init__(self) -> None:
        self.outbox: list[OutboundMessage] = []
        self._lock = threading.Lock()

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        with self._lock:
            self.outbox.append(OutboundMessage(to_address, subject, html_body))

    def messages_to(self, address: str) -> list[OutboundMessage]:
        with self._lock:
            return [m for m in self.outbox if m.to_address == address]
