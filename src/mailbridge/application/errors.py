"""Exceptions raised by email adapters, and provider error normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence, Union

from mailbridge.domain.entities.delivery import UNKNOWN_ERROR

if TYPE_CHECKING:
    from mailbridge.domain.entities.delivery import DeliveryResult

ErrorPath = Sequence[Union[str, int]]


class MailbridgeError(Exception):
    """Base class for all mailbridge errors."""


class ConfigurationError(MailbridgeError):
    """Adapter or settings values are missing or invalid."""


class ValidationError(MailbridgeError):
    """A message cannot be sent as given. Raised before any network call."""


class AttachmentTooLargeError(ValidationError):
    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            f"Attachments size of {size} bytes exceeds the maximum allowed size of {limit // (1024 * 1024)}MB"
        )


class TransportError(MailbridgeError):
    """The transport could not complete a call (connection, TLS, timeout)."""


class DeliveryFaultError(MailbridgeError):
    """One or more outbound calls hit a transport fault during ``send``.

    ``result`` is the full delivery report: every recipient is present,
    the ones covered by a faulted call carry the fault text as their error.
    """

    def __init__(self, result: DeliveryResult) -> None:
        self.result = result
        self.faults = list(result.faults)
        super().__init__(f"{len(self.faults)} transport fault(s) while sending: {self.faults[0]}")


def normalize_error(body: Any, path: ErrorPath) -> str:
    """Turn a raw provider response body into an error message.

    A plain string body is the message itself. Otherwise exactly one nested
    field is probed, e.g. ``("errors", 0, "message")``; anything missing
    along the way yields ``"Unknown error"``.
    """
    if isinstance(body, str):
        return body or UNKNOWN_ERROR

    node = body
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, (list, tuple)) or not -len(node) <= key < len(node):
                return UNKNOWN_ERROR
            node = node[key]
        else:
            if not isinstance(node, dict) or key not in node:
                return UNKNOWN_ERROR
            node = node[key]

    if node is None or node == "":
        return UNKNOWN_ERROR
    return str(node)
