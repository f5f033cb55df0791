from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class SendgridConfig(BaseModel):
    """Immutable Sendgrid adapter settings."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    send_in_batch: bool = False
    base_url: str = Field(default="https://api.sendgrid.com/v3")
