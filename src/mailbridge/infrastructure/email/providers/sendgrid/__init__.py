"""Sendgrid email provider."""

from mailbridge.infrastructure.email.providers.sendgrid.config import SendgridConfig
from mailbridge.infrastructure.email.providers.sendgrid.outbound import SendgridAdapter

__all__ = ["SendgridAdapter", "SendgridConfig"]
