from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Sequence


@dataclass(frozen=True)
class Address:
    email: str
    name: Optional[str] = None

    def format(self) -> str:
        """Render as ``Name<email>``, or the bare email when unnamed."""
        if self.name:
            return f"{self.name}<{self.email}>"
        return self.email


@dataclass(frozen=True)
class Attachment:
    name: str
    mime_type: str

    # Where the bytes live: a file on disk, or inline content
    path: Optional[Path] = None
    content: Optional[bytes] = None

    def __post_init__(self) -> None:
        if (self.path is None) == (self.content is None):
            raise ValueError("Attachment needs exactly one of path or content")
        if self.path is not None and not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))

    @property
    def size(self) -> int:
        if self.content is not None:
            return len(self.content)
        return self.path.stat().st_size

    def read_bytes(self) -> bytes:
        if self.content is not None:
            return self.content
        return self.path.read_bytes()


@dataclass(frozen=True)
class OutboundEmail:
    subject: str
    content: str
    sender: Address
    reply_to: Address
    to: tuple[str, ...]
    cc: tuple[Address, ...] = ()
    bcc: tuple[Address, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    html: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence from callers, store tuples
        for attr in ("to", "cc", "bcc", "attachments"):
            value = getattr(self, attr)
            if not isinstance(value, tuple):
                object.__setattr__(self, attr, tuple(value or ()))
        if not self.to:
            raise ValueError("OutboundEmail requires at least one recipient")

    def with_recipients(self, recipients: Sequence[str]) -> OutboundEmail:
        """Copy of this message addressed to a subset of its recipients."""
        return replace(self, to=tuple(recipients))
