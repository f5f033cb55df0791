from __future__ import annotations

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

US_API_HOST = "api.mailgun.net"
EU_API_HOST = "api.eu.mailgun.net"


class MailgunConfig(BaseModel):
    """Immutable Mailgun adapter settings."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    domain: str
    is_eu: bool = False
    send_in_batch: bool = False

    @field_validator("domain")
    @classmethod
    def _domain_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Mailgun sending domain is required")
        return v

    @property
    def api_host(self) -> str:
        return EU_API_HOST if self.is_eu else US_API_HOST

    @property
    def messages_url(self) -> str:
        return f"https://{self.api_host}/v3/{self.domain}/messages"
