"""Domain models and entities."""

from mailbridge.domain.entities.delivery import (
    UNKNOWN_ERROR,
    DeliveryResult,
    RecipientResult,
)
from mailbridge.domain.entities.email import Address, Attachment, OutboundEmail

__all__ = [
    "Address",
    "Attachment",
    "OutboundEmail",
    "DeliveryResult",
    "RecipientResult",
    "UNKNOWN_ERROR",
]
