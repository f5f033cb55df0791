"""Sendgrid v3 mail/send adapter."""

from __future__ import annotations

import base64
from typing import Any, Sequence

from loguru import logger

from mailbridge.application.errors import normalize_error
from mailbridge.application.ports.email_adapter import CallOutcome, DispatchMode, EmailAdapter
from mailbridge.application.ports.transport import HttpTransport
from mailbridge.domain.entities.email import Address, OutboundEmail
from mailbridge.infrastructure.email.providers.sendgrid.config import SendgridConfig

ERROR_PATH = ("errors", 0, "message")
ACCEPTED = 202


class SendgridAdapter(EmailAdapter):
    """Sendgrid provider.

    Batch mode puts the whole chunk in a single personalization; Sendgrid
    answers with one status for the call, so the chunk succeeds or fails
    together. Only 202 Accepted counts as delivered.
    """

    NAME = "Sendgrid"

    def __init__(self, config: SendgridConfig, transport: HttpTransport) -> None:
        super().__init__(dispatch_mode=DispatchMode.from_flag(config.send_in_batch))
        self.config = config
        self.transport = transport

    def prepare_attachments(self, message: OutboundEmail) -> list[dict[str, str]]:
        return [
            {
                "content": base64.b64encode(a.read_bytes()).decode("ascii"),
                "filename": a.name,
                "type": a.mime_type,
                "disposition": "attachment",
            }
            for a in message.attachments
        ]

    def deliver(self, message: OutboundEmail, recipients: Sequence[str], attachments: Any) -> CallOutcome:
        body = self.build_body(message, recipients, attachments)
        result = self.transport.request(
            method="POST",
            url=f"{self.config.base_url}/mail/send",
            headers={
                "Authorization": f"Bearer {self.config.api_key.get_secret_value()}",
                "Content-Type": "application/json",
            },
            body=body,
        )

        if result.status_code == ACCEPTED:
            return CallOutcome(delivered=True)

        logger.debug(f"Sendgrid rejected call ({result.status_code}): {result.response}")
        return CallOutcome(delivered=False, error=normalize_error(result.response, ERROR_PATH))

    def build_body(
        self,
        message: OutboundEmail,
        recipients: Sequence[str],
        attachments: list[dict[str, str]],
    ) -> dict[str, Any]:
        personalization: dict[str, Any] = {
            "to": [{"email": to} for to in recipients],
            "subject": message.subject,
        }
        if message.cc:
            personalization["cc"] = [_contact(a) for a in message.cc]
        if message.bcc:
            personalization["bcc"] = [_contact(a) for a in message.bcc]

        body: dict[str, Any] = {
            "personalizations": [personalization],
            "reply_to": {"name": message.reply_to.name, "email": message.reply_to.email},
            "from": {"name": message.sender.name, "email": message.sender.email},
            "content": [
                {
                    "type": "text/html" if message.html else "text/plain",
                    "value": message.content,
                }
            ],
        }
        if attachments:
            body["attachments"] = attachments
        return body


def _contact(address: Address) -> dict[str, str]:
    if address.name:
        return {"name": address.name, "email": address.email}
    return {"email": address.email}
