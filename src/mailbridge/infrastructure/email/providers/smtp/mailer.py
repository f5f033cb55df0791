"""smtplib-backed mail client used by the SMTP adapter."""

from __future__ import annotations

import smtplib
import ssl
from email.message import EmailMessage as MimeMessage
from email.utils import formataddr
from typing import Optional

from loguru import logger

from mailbridge.infrastructure.email.providers.smtp.config import SmtpConfig, SmtpHost


class SmtpMailer:
    """Builds one MIME message and submits it over SMTP.

    Mirrors the usual mailer object shape: fill in sender, recipients,
    content and attachments, then call ``send``. Server and network errors
    do not raise; ``send`` returns False and ``error_info`` holds the reason.
    """

    def __init__(self, config: SmtpConfig) -> None:
        self.config = config
        self.error_info = ""

        self._from: Optional[tuple[str, str]] = None
        self._reply_to: list[tuple[str, str]] = []
        self._to: list[tuple[str, str]] = []
        self._cc: list[tuple[str, str]] = []
        self._bcc: list[tuple[str, str]] = []
        self._subject = ""
        self._body = ""
        self._alt_body = ""
        self._html = False
        self._attachments: list[tuple[bytes, str, str]] = []

    def set_from(self, email: str, name: Optional[str] = None) -> None:
        self._from = (name or "", email)

    def add_reply_to(self, email: str, name: Optional[str] = None) -> None:
        self._reply_to.append((name or "", email))

    def add_address(self, email: str, name: Optional[str] = None) -> None:
        self._to.append((name or "", email))

    def add_cc(self, email: str, name: Optional[str] = None) -> None:
        self._cc.append((name or "", email))

    def add_bcc(self, email: str, name: Optional[str] = None) -> None:
        self._bcc.append((name or "", email))

    def set_content(self, subject: str, body: str, alt_body: str, html: bool) -> None:
        self._subject = subject
        self._body = body
        self._alt_body = alt_body
        self._html = html

    def add_string_attachment(self, content: bytes, filename: str, mime_type: str) -> None:
        self._attachments.append((content, filename, mime_type))

    def build_message(self) -> MimeMessage:
        msg = MimeMessage()
        msg["Subject"] = self._subject
        if self._from:
            msg["From"] = formataddr(self._from)
        if self._reply_to:
            msg["Reply-To"] = ", ".join(formataddr(a) for a in self._reply_to)
        if self._to:
            msg["To"] = ", ".join(formataddr(a) for a in self._to)
        if self._cc:
            msg["Cc"] = ", ".join(formataddr(a) for a in self._cc)
        if self.config.x_mailer:
            msg["X-Mailer"] = self.config.x_mailer

        if self._html:
            msg.set_content(self._alt_body, charset="utf-8")
            msg.add_alternative(self._body, subtype="html", charset="utf-8")
        else:
            msg.set_content(self._body, charset="utf-8")

        for content, filename, mime_type in self._attachments:
            maintype, _, subtype = mime_type.partition("/")
            msg.add_attachment(
                content,
                maintype=maintype or "application",
                subtype=subtype or "octet-stream",
                filename=filename,
            )
        return msg

    @property
    def envelope_recipients(self) -> list[str]:
        return [email for _, email in self._to + self._cc + self._bcc]

    def send(self) -> bool:
        """Submit the message through the first configured host that accepts a connection.

        Only connection setup (connect, EHLO, STARTTLS, login) moves on to the
        next host. Once the message has been handed to a server, any error
        ends the send.
        """
        if self._from is None or not self.envelope_recipients:
            self.error_info = "You must provide a sender and at least one recipient"
            return False

        msg = self.build_message()
        for host in self.config.hosts:
            try:
                server = self._connect(host)
            except (smtplib.SMTPException, OSError) as e:
                self.error_info = f"SMTP Error ({host.host}:{host.port}): {e}"
                logger.warning(self.error_info)
                continue

            try:
                with server:
                    refused = server.send_message(msg, from_addr=self._from[1], to_addrs=self.envelope_recipients)
            except (smtplib.SMTPException, OSError) as e:
                self.error_info = f"SMTP Error ({host.host}:{host.port}): {e}"
                logger.warning(self.error_info)
                return False

            if refused:
                self.error_info = "SMTP Error: The following recipients failed: " + ", ".join(
                    f"{rcpt}: {code} {reason.decode(errors='replace') if isinstance(reason, bytes) else reason}"
                    for rcpt, (code, reason) in refused.items()
                )
                return False

            self.error_info = ""
            return True
        return False

    def _connect(self, host: SmtpHost) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if host.secure == "ssl":
            server: smtplib.SMTP = smtplib.SMTP_SSL(host.host, host.port, timeout=self.config.timeout, context=context)
        else:
            server = smtplib.SMTP(host.host, host.port, timeout=self.config.timeout)

        try:
            server.ehlo()
            if host.secure == "tls" or (
                host.secure == "" and self.config.smtp_auto_tls and server.has_extn("starttls")
            ):
                server.starttls(context=context)
                server.ehlo()
            if self.config.auth_enabled:
                server.login(self.config.username, self.config.password.get_secret_value())
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
        return server
