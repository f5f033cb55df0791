"""Interfaces between the delivery core and its collaborators."""

from mailbridge.application.ports.email_adapter import (
    CallOutcome,
    DispatchMode,
    EmailAdapter,
    chunk_recipients,
)
from mailbridge.application.ports.mail_client import MailClient
from mailbridge.application.ports.transport import FilePart, HttpTransport, TransportResponse

__all__ = [
    "CallOutcome",
    "DispatchMode",
    "EmailAdapter",
    "chunk_recipients",
    "MailClient",
    "FilePart",
    "HttpTransport",
    "TransportResponse",
]
