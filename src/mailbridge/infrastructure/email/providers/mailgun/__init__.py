"""Mailgun email provider."""

from mailbridge.infrastructure.email.providers.mailgun.config import MailgunConfig
from mailbridge.infrastructure.email.providers.mailgun.outbound import MailgunAdapter

__all__ = ["MailgunAdapter", "MailgunConfig"]
