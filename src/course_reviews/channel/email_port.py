"""Outbound email port used for moderation notices.

Adapters report delivery problems in the returned ``SendResult`` rather
than raising; callers still guard against adapters that raise anyway.
"""

from abc import ABC, abstractmethod
from typing import TypedDict


class SendResult(TypedDict, total=False):
    message_id: str | None
    status: str  # "sent" or "failed"
    error: str


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> SendResult:
        """Hand one plain-text message to the provider."""
