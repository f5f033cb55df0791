"""Shared fixtures: message builder and fakes for the transport collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import pytest

from mailbridge.application.ports.transport import FilePart, TransportResponse
from mailbridge.domain import Address, OutboundEmail


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    body: dict[str, Any]
    files: Optional[dict[str, FilePart]]


class FakeTransport:
    """HttpTransport that replays scripted responses (or raises scripted errors)."""

    def __init__(self, *responses, default: TransportResponse | None = None) -> None:
        self.responses = list(responses)
        self.default = default or TransportResponse(status_code=200, response="")
        self.calls: list[RecordedRequest] = []

    def request(self, method, url, headers, body, files=None):
        self.calls.append(RecordedRequest(method, url, dict(headers), dict(body), dict(files) if files else None))
        outcome = self.responses.pop(0) if self.responses else self.default
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeMailer:
    """MailClient double; fails when any address is in ``fail_for``."""

    instances: list["FakeMailer"] = []

    def __init__(self, config=None, fail_for=(), error_info: str = "550 mailbox unavailable") -> None:
        self.config = config
        self.fail_for = set(fail_for)
        self.failure_text = error_info
        self.error_info = ""
        self.sender = None
        self.reply_to = []
        self.to = []
        self.cc = []
        self.bcc = []
        self.content = None
        self.attachments = []
        self.sent = False
        FakeMailer.instances.append(self)

    def set_from(self, email, name=None):
        self.sender = (email, name)

    def add_reply_to(self, email, name=None):
        self.reply_to.append((email, name))

    def add_address(self, email, name=None):
        self.to.append(email)

    def add_cc(self, email, name=None):
        self.cc.append((email, name))

    def add_bcc(self, email, name=None):
        self.bcc.append((email, name))

    def set_content(self, subject, body, alt_body, html):
        self.content = {"subject": subject, "body": body, "alt_body": alt_body, "html": html}

    def add_string_attachment(self, content, filename, mime_type):
        self.attachments.append((content, filename, mime_type))

    def send(self):
        self.sent = True
        if self.fail_for & set(self.to):
            self.error_info = self.failure_text
            return False
        return True


@pytest.fixture(autouse=True)
def _reset_fake_mailers():
    FakeMailer.instances = []
    yield
    FakeMailer.instances = []


@pytest.fixture
def make_email():
    """Build an OutboundEmail with sensible defaults."""

    def _make(to=("alice@example.com", "bob@example.com"), **overrides) -> OutboundEmail:
        fields = {
            "subject": "Quarterly report",
            "content": "Numbers are up.",
            "sender": Address(email="reports@example.com", name="Reports"),
            "reply_to": Address(email="support@example.com", name="Support"),
            "to": tuple(to),
        }
        fields.update(overrides)
        return OutboundEmail(**fields)

    return _make
