"""Application layer - the delivery contract and its shared policies."""

from mailbridge.application.attachments import MAX_ATTACHMENT_BYTES, check_attachment_size
from mailbridge.application.errors import (
    AttachmentTooLargeError,
    ConfigurationError,
    DeliveryFaultError,
    MailbridgeError,
    TransportError,
    ValidationError,
    normalize_error,
)

__all__ = [
    "MAX_ATTACHMENT_BYTES",
    "check_attachment_size",
    "MailbridgeError",
    "ConfigurationError",
    "ValidationError",
    "AttachmentTooLargeError",
    "TransportError",
    "DeliveryFaultError",
    "normalize_error",
]
