"""Direct SMTP adapter."""

from __future__ import annotations

import re
from typing import Any, Callable, Optional, Sequence

from mailbridge.application.ports.email_adapter import CallOutcome, DispatchMode, EmailAdapter
from mailbridge.application.ports.mail_client import MailClient
from mailbridge.domain.entities.delivery import UNKNOWN_ERROR
from mailbridge.domain.entities.email import Attachment, OutboundEmail
from mailbridge.infrastructure.email.providers.smtp.config import SmtpConfig
from mailbridge.infrastructure.email.providers.smtp.mailer import SmtpMailer

_STYLE_BLOCK = re.compile(r"<style\b[^>]*>(.*?)</style>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]+>")


def html_to_text(body: str) -> str:
    """Plain-text alternative for an HTML body."""
    # Tag stripping alone would keep the CSS text
    text = _STYLE_BLOCK.sub("", body)
    return _TAG.sub("", text).strip()


class SmtpAdapter(EmailAdapter):
    """Sends through an SMTP server using a fresh MailClient per call.

    Batch mode adds the whole chunk as ``To`` addresses of one message, so
    the server's single accept/reject decision applies to all of them.
    """

    NAME = "SMTP"

    def __init__(
        self,
        config: SmtpConfig,
        mailer_factory: Optional[Callable[[SmtpConfig], MailClient]] = None,
    ) -> None:
        super().__init__(dispatch_mode=DispatchMode.from_flag(config.send_in_batch))
        self.config = config
        self.mailer_factory = mailer_factory or SmtpMailer

    def deliver(self, message: OutboundEmail, recipients: Sequence[str], attachments: Any) -> CallOutcome:
        mail = self.mailer_factory(self.config)
        self._setup(mail, message, attachments)
        for to in recipients:
            mail.add_address(to)

        if mail.send():
            return CallOutcome(delivered=True)
        return CallOutcome(delivered=False, error=mail.error_info or UNKNOWN_ERROR)

    def _setup(self, mail: MailClient, message: OutboundEmail, attachments: list[Attachment]) -> None:
        mail.set_from(message.sender.email, message.sender.name)
        mail.add_reply_to(message.reply_to.email, message.reply_to.name)
        mail.set_content(
            subject=message.subject,
            body=message.content,
            alt_body=html_to_text(message.content),
            html=message.html,
        )
        for cc in message.cc:
            mail.add_cc(cc.email, cc.name)
        for bcc in message.bcc:
            mail.add_bcc(bcc.email, bcc.name)
        for attachment in attachments:
            mail.add_string_attachment(attachment.read_bytes(), attachment.name, attachment.mime_type)
