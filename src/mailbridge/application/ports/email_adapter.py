"""Transport adapter contract shared by every email backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Sequence

from loguru import logger

from mailbridge.application.attachments import MAX_ATTACHMENT_BYTES, check_attachment_size
from mailbridge.application.errors import DeliveryFaultError, TransportError
from mailbridge.domain.entities.delivery import UNKNOWN_ERROR, DeliveryResult
from mailbridge.domain.entities.email import Attachment, OutboundEmail


class DispatchMode(str, Enum):
    """How a chunk of recipients maps onto outbound calls."""

    BATCH = "batch"  # one call for the whole chunk
    INDIVIDUAL = "individual"  # one call per recipient

    @classmethod
    def from_flag(cls, send_in_batch: bool) -> DispatchMode:
        return cls.BATCH if send_in_batch else cls.INDIVIDUAL


@dataclass(frozen=True)
class CallOutcome:
    """Result of one outbound call, applied to every recipient it covered."""

    delivered: bool
    error: str = ""


def chunk_recipients(recipients: Sequence[str], size: int) -> list[tuple[str, ...]]:
    """Split recipients into order-preserving chunks of at most ``size``."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [tuple(recipients[i : i + size]) for i in range(0, len(recipients), size)]


class EmailAdapter(ABC):
    """Delivers one logical message through a single backend.

    Subclasses provide ``NAME`` and implement ``deliver`` for one outbound
    call. This class owns chunking, the batch/individual dispatch strategy,
    the attachment guard and folding call outcomes into a DeliveryResult.

    Flow:
    1. ``send`` splits ``message.to`` into chunks of ``max_messages_per_request``
    2. ``process`` runs once per chunk: attachment guard, then dispatch
    3. Partial results are merged in recipient order

    Transport faults are caught per call, recorded on the result, and
    re-raised as DeliveryFaultError once every chunk has been processed.
    """

    NAME: ClassVar[str]
    CHANNEL: ClassVar[str] = "email"
    MAX_MESSAGES_PER_REQUEST: ClassVar[int] = 1000

    def __init__(
        self,
        dispatch_mode: DispatchMode = DispatchMode.INDIVIDUAL,
        max_attachment_bytes: int = MAX_ATTACHMENT_BYTES,
    ) -> None:
        self._dispatch_mode = dispatch_mode
        self._max_attachment_bytes = max_attachment_bytes

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def max_messages_per_request(self) -> int:
        return self.MAX_MESSAGES_PER_REQUEST

    @property
    def dispatch_mode(self) -> DispatchMode:
        return self._dispatch_mode

    def chunk(self, recipients: Sequence[str]) -> list[tuple[str, ...]]:
        return chunk_recipients(recipients, self.max_messages_per_request)

    def send(self, message: OutboundEmail) -> DeliveryResult:
        """Send ``message`` to all of its recipients.

        Raises:
            ValidationError: the message was rejected before any network call.
            DeliveryFaultError: at least one call hit a transport fault. The
                error carries the complete report for the other recipients.
        """
        result = DeliveryResult(channel=self.CHANNEL)
        chunks = self.chunk(message.to)
        logger.info(
            f"{self.name}: sending '{message.subject[:50]}' to {len(message.to)} recipient(s) "
            f"in {len(chunks)} chunk(s), mode={self._dispatch_mode.value}"
        )

        for chunk in chunks:
            result.merge(self.process(message.with_recipients(chunk)))

        if result.faults:
            logger.error(f"{self.name}: {len(result.faults)} transport fault(s), {result.delivered_to}/{result.total} delivered")
            raise DeliveryFaultError(result)

        logger.info(f"{self.name}: delivered {result.delivered_to}/{result.total}")
        return result

    def process(self, message: OutboundEmail) -> DeliveryResult:
        """Deliver one chunk; ``message.to`` holds only that chunk's recipients."""
        check_attachment_size(message.attachments, self._max_attachment_bytes)
        attachments = self.prepare_attachments(message)

        result = DeliveryResult(channel=self.CHANNEL)
        if self._dispatch_mode is DispatchMode.BATCH:
            outcome = self._call(message, message.to, attachments, result)
            if not outcome.delivered:
                logger.warning(f"{self.name}: batch of {len(message.to)} failed: {outcome.error}")
            for recipient in message.to:
                self._fold(result, recipient, outcome)
        else:
            for recipient in message.to:
                outcome = self._call(message, (recipient,), attachments, result)
                if not outcome.delivered:
                    logger.warning(f"{self.name}: delivery to {recipient} failed: {outcome.error}")
                self._fold(result, recipient, outcome)
        return result

    def prepare_attachments(self, message: OutboundEmail) -> Any:
        """Load attachment bytes once per chunk. Subclasses may encode further."""
        return [Attachment(name=a.name, mime_type=a.mime_type, content=a.read_bytes()) for a in message.attachments]

    @abstractmethod
    def deliver(self, message: OutboundEmail, recipients: Sequence[str], attachments: Any) -> CallOutcome:
        """Make one outbound call covering ``recipients``."""

    def _call(
        self,
        message: OutboundEmail,
        recipients: Sequence[str],
        attachments: Any,
        result: DeliveryResult,
    ) -> CallOutcome:
        try:
            return self.deliver(message, recipients, attachments)
        except TransportError as e:
            logger.error(f"{self.name}: transport fault for {len(recipients)} recipient(s): {e}")
            result.faults.append(e)
            return CallOutcome(delivered=False, error=str(e) or UNKNOWN_ERROR)

    @staticmethod
    def _fold(result: DeliveryResult, recipient: str, outcome: CallOutcome) -> None:
        if outcome.delivered:
            result.record_delivered(recipient)
        else:
            result.record_failed(recipient, outcome.error)
