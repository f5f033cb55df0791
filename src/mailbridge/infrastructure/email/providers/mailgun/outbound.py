"""Mailgun messages API adapter."""

from __future__ import annotations

import base64
from typing import Any, Iterable, Optional, Sequence

from loguru import logger

from mailbridge.application.errors import normalize_error
from mailbridge.application.ports.email_adapter import CallOutcome, DispatchMode, EmailAdapter
from mailbridge.application.ports.transport import FilePart, HttpTransport
from mailbridge.domain.entities.email import Address, OutboundEmail
from mailbridge.infrastructure.email.providers.mailgun.config import MailgunConfig

ERROR_PATH = ("message",)


class MailgunAdapter(EmailAdapter):
    """Mailgun provider.

    Batch mode comma-joins the chunk into a single ``to`` field. Requests are
    form encoded, or multipart when the message carries attachments. Any 2xx
    counts as delivered.
    """

    NAME = "Mailgun"

    def __init__(self, config: MailgunConfig, transport: HttpTransport) -> None:
        super().__init__(dispatch_mode=DispatchMode.from_flag(config.send_in_batch))
        self.config = config
        self.transport = transport

    def prepare_attachments(self, message: OutboundEmail) -> dict[str, FilePart]:
        return {
            f"attachment[{index}]": FilePart(filename=a.name, content=a.read_bytes(), mime_type=a.mime_type)
            for index, a in enumerate(message.attachments)
        }

    def deliver(self, message: OutboundEmail, recipients: Sequence[str], attachments: Any) -> CallOutcome:
        body = self.build_body(message, recipients)
        multipart = bool(attachments)

        headers = {"Authorization": f"Basic {self._basic_auth()}"}
        if not multipart:
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        result = self.transport.request(
            method="POST",
            url=self.config.messages_url,
            headers=headers,
            body=body,
            files=attachments or None,
        )

        if result.ok:
            return CallOutcome(delivered=True)

        logger.debug(f"Mailgun rejected call ({result.status_code}): {result.response}")
        return CallOutcome(delivered=False, error=normalize_error(result.response, ERROR_PATH))

    def build_body(self, message: OutboundEmail, recipients: Sequence[str]) -> dict[str, Optional[str]]:
        body: dict[str, Optional[str]] = {
            "to": ",".join(recipients),
            "from": _named(message.sender),
            "subject": message.subject,
            "text": None if message.html else message.content,
            "html": message.content if message.html else None,
            "h:Reply-To": _named(message.reply_to),
        }
        cc = _address_list(message.cc)
        if cc:
            body["cc"] = cc
        bcc = _address_list(message.bcc)
        if bcc:
            body["bcc"] = bcc
        return body

    def _basic_auth(self) -> str:
        token = f"api:{self.config.api_key.get_secret_value()}".encode()
        return base64.b64encode(token).decode("ascii")


def _named(address: Address) -> str:
    return f"{address.name or ''}<{address.email}>"


def _address_list(addresses: Iterable[Address]) -> str:
    # Entries without an email are skipped
    return ",".join(a.format() for a in addresses if a.email)
