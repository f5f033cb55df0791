from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator

SmtpSecure = Literal["", "ssl", "tls"]


@dataclass(frozen=True)
class SmtpHost:
    host: str
    port: int
    secure: SmtpSecure


class SmtpConfig(BaseModel):
    """Immutable SMTP adapter settings.

    ``host`` may list several servers separated by ``;``, each optionally
    written as ``[ssl|tls://]hostname[:port]``. Servers are tried in order;
    entries without a scheme or port fall back to ``smtp_secure`` and ``port``.
    """

    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(default=25, ge=1, le=65535)
    username: str = ""
    password: SecretStr = SecretStr("")
    smtp_secure: SmtpSecure = ""
    smtp_auto_tls: bool = False
    x_mailer: str = ""
    send_in_batch: bool = False
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("host")
    @classmethod
    def _host_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SMTP host is required")
        return v.strip()

    @model_validator(mode="after")
    def _hosts_parse(self) -> SmtpConfig:
        hosts = self.hosts
        if not hosts:
            raise ValueError("SMTP host is required")
        for host in hosts:
            if not host.host or not 1 <= host.port <= 65535:
                raise ValueError(f"Invalid SMTP host entry: {host.host}:{host.port}")
        return self

    @property
    def auth_enabled(self) -> bool:
        return bool(self.username) and bool(self.password.get_secret_value())

    @property
    def hosts(self) -> list[SmtpHost]:
        return [self._parse_host(entry.strip()) for entry in self.host.split(";") if entry.strip()]

    def _parse_host(self, entry: str) -> SmtpHost:
        secure = self.smtp_secure
        if "://" in entry:
            scheme, entry = entry.split("://", 1)
            scheme = scheme.lower()
            if scheme not in ("ssl", "tls"):
                raise ValueError(f"Invalid SMTP host scheme '{scheme}'. Must be ssl or tls")
            secure = scheme

        port = self.port
        if ":" in entry:
            entry, raw_port = entry.rsplit(":", 1)
            port = int(raw_port)
        return SmtpHost(host=entry, port=port, secure=secure)
