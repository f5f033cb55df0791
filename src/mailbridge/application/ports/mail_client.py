from __future__ import annotations

from typing import Optional, Protocol


class MailClient(Protocol):
    """A protocol-level mail client holding one message at a time.

    Connection settings are given at construction. ``send`` returns False
    instead of raising when the server rejects the message or cannot be
    reached; ``error_info`` then describes what went wrong.
    """

    error_info: str

    def set_from(self, email: str, name: Optional[str] = None) -> None: ...
    def add_reply_to(self, email: str, name: Optional[str] = None) -> None: ...
    def add_address(self, email: str, name: Optional[str] = None) -> None: ...
    def add_cc(self, email: str, name: Optional[str] = None) -> None: ...
    def add_bcc(self, email: str, name: Optional[str] = None) -> None: ...
    def set_content(self, subject: str, body: str, alt_body: str, html: bool) -> None: ...
    def add_string_attachment(self, content: bytes, filename: str, mime_type: str) -> None: ...
    def send(self) -> bool: ...
