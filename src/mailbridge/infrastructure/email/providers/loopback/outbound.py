"""Loopback adapter: records outbound calls instead of sending them."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from mailbridge.application.attachments import MAX_ATTACHMENT_BYTES
from mailbridge.application.ports.email_adapter import CallOutcome, DispatchMode, EmailAdapter
from mailbridge.domain.entities.email import OutboundEmail


class LoopbackConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    send_in_batch: bool = False
    max_messages_per_request: int = Field(default=1000, gt=0)
    max_attachment_bytes: int = Field(default=MAX_ATTACHMENT_BYTES, gt=0)
    # Only the most recent calls are kept
    outbox_size: int = Field(default=1000, gt=0)
    # Recipients the loopback should reject, and the error they get
    fail_recipients: frozenset[str] = frozenset()
    error: str = "Rejected by loopback"


@dataclass(frozen=True)
class SentCall:
    recipients: tuple[str, ...]
    subject: str
    attachment_names: tuple[str, ...]
    delivered: bool


class LoopbackAdapter(EmailAdapter):
    NAME = "Loopback"

    def __init__(self, config: LoopbackConfig | None = None) -> None:
        self.config = config or LoopbackConfig()
        super().__init__(
            dispatch_mode=DispatchMode.from_flag(self.config.send_in_batch),
            max_attachment_bytes=self.config.max_attachment_bytes,
        )
        self.outbox: deque[SentCall] = deque(maxlen=self.config.outbox_size)
        self._calls = 0

    @property
    def max_messages_per_request(self) -> int:
        return self.config.max_messages_per_request

    def deliver(self, message: OutboundEmail, recipients: Sequence[str], attachments: Any) -> CallOutcome:
        delivered = not any(r in self.config.fail_recipients for r in recipients)
        self._calls += 1
        self.outbox.append(
            SentCall(
                recipients=tuple(recipients),
                subject=message.subject,
                attachment_names=tuple(a.name for a in attachments),
                delivered=delivered,
            )
        )
        logger.debug(f"Loopback call #{self._calls}: {len(recipients)} recipient(s), delivered={delivered}")

        if delivered:
            return CallOutcome(delivered=True)
        return CallOutcome(delivered=False, error=self.config.error)
