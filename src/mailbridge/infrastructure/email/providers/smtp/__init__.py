"""SMTP email provider."""

from mailbridge.infrastructure.email.providers.smtp.config import SmtpConfig, SmtpHost
from mailbridge.infrastructure.email.providers.smtp.mailer import SmtpMailer
from mailbridge.infrastructure.email.providers.smtp.outbound import SmtpAdapter, html_to_text

__all__ = ["SmtpAdapter", "SmtpConfig", "SmtpHost", "SmtpMailer", "html_to_text"]
