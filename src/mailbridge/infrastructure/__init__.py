# src/mailbridge/infrastructure/__init__.py
"""Infrastructure layer - providers, transports, and configuration."""

from mailbridge.infrastructure.email.factory import EmailAdapterFactory, get_email_adapter
from mailbridge.infrastructure.http.transport import HttpxTransport
from mailbridge.infrastructure.settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Email adapters
    "EmailAdapterFactory",
    "get_email_adapter",
    # HTTP
    "HttpxTransport",
]
