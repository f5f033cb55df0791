"""Pre-flight attachment checks shared by every adapter."""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from mailbridge.application.errors import AttachmentTooLargeError
from mailbridge.domain.entities.email import Attachment

MAX_ATTACHMENT_BYTES = 25 * 1024 * 1024


def total_attachment_size(attachments: Iterable[Attachment]) -> int:
    return sum(a.size for a in attachments)


def check_attachment_size(attachments: Iterable[Attachment], limit: int = MAX_ATTACHMENT_BYTES) -> int:
    """Raise AttachmentTooLargeError when the attachments sum past ``limit``.

    Exactly ``limit`` bytes is allowed. Returns the total size.
    """
    size = total_attachment_size(attachments)
    if size > limit:
        logger.warning(f"Rejecting message: attachments total {size} bytes (limit {limit})")
        raise AttachmentTooLargeError(size, limit)
    return size
