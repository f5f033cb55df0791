"""Factory for building the configured email adapter."""

from __future__ import annotations

from typing import Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from mailbridge.application.errors import ConfigurationError
from mailbridge.application.ports.email_adapter import EmailAdapter
from mailbridge.application.ports.transport import HttpTransport
from mailbridge.infrastructure.email.providers.loopback import LoopbackAdapter, LoopbackConfig
from mailbridge.infrastructure.email.providers.mailgun import MailgunAdapter, MailgunConfig
from mailbridge.infrastructure.email.providers.sendgrid import SendgridAdapter, SendgridConfig
from mailbridge.infrastructure.email.providers.smtp import SmtpAdapter, SmtpConfig
from mailbridge.infrastructure.http.transport import HttpxTransport
from mailbridge.infrastructure.settings import Settings, get_settings


class EmailAdapterFactory:
    """Factory for creating email adapter instances."""

    @staticmethod
    def from_env() -> EmailAdapter:
        """Create the adapter selected by EMAIL_PROVIDER."""
        return EmailAdapterFactory.from_settings(get_settings())

    @staticmethod
    def from_settings(settings: Settings, transport: Optional[HttpTransport] = None) -> EmailAdapter:
        """Create an adapter from explicit settings.

        ``transport`` is only used by the HTTP providers; a fresh
        HttpxTransport is created when it is not given.
        """
        provider = settings.email_provider
        if provider is None:
            raise ConfigurationError("EMAIL_PROVIDER is required (sendgrid, mailgun, smtp or loopback)")
        try:
            if provider == "sendgrid":
                if settings.sendgrid_api_key is None:
                    raise ConfigurationError("SENDGRID_API_KEY is required")
                config = SendgridConfig(
                    api_key=settings.sendgrid_api_key,
                    send_in_batch=settings.email_send_in_batch,
                )
                adapter: EmailAdapter = SendgridAdapter(config, transport or _http(settings))
            elif provider == "mailgun":
                if settings.mailgun_api_key is None or not settings.mailgun_domain:
                    raise ConfigurationError("MAILGUN_API_KEY and MAILGUN_DOMAIN are required")
                config = MailgunConfig(
                    api_key=settings.mailgun_api_key,
                    domain=settings.mailgun_domain,
                    is_eu=settings.mailgun_eu,
                    send_in_batch=settings.email_send_in_batch,
                )
                adapter = MailgunAdapter(config, transport or _http(settings))
            elif provider == "smtp":
                if not settings.smtp_host:
                    raise ConfigurationError("SMTP_HOST is required")
                config = SmtpConfig(
                    host=settings.smtp_host,
                    port=settings.smtp_port,
                    username=settings.smtp_username,
                    password=settings.smtp_password,
                    smtp_secure=settings.smtp_secure,
                    smtp_auto_tls=settings.smtp_auto_tls,
                    x_mailer=settings.smtp_x_mailer,
                    send_in_batch=settings.email_send_in_batch,
                )
                adapter = SmtpAdapter(config)
            elif provider == "loopback":
                adapter = LoopbackAdapter(LoopbackConfig(send_in_batch=settings.email_send_in_batch))
            else:
                raise ConfigurationError(f"Unknown email provider: {provider}")
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid {provider} configuration: {e}") from e

        logger.info(f"Email adapter ready: {adapter.name} (mode={adapter.dispatch_mode.value})")
        return adapter


def _http(settings: Settings) -> HttpxTransport:
    return HttpxTransport(timeout=settings.http_timeout_seconds)


# Singleton instance
_adapter: EmailAdapter | None = None


def get_email_adapter() -> EmailAdapter:
    """Get or create the configured email adapter singleton."""
    global _adapter
    if _adapter is None:
        _adapter = EmailAdapterFactory.from_env()
    return _adapter
