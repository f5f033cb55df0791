"""One-shot email send through the configured provider."""

from __future__ import annotations

import argparse
import json
import mimetypes
import os
import sys
from pathlib import Path

from loguru import logger

from mailbridge.application.errors import DeliveryFaultError, MailbridgeError
from mailbridge.domain import Address, Attachment, OutboundEmail
from mailbridge.infrastructure import EmailAdapterFactory


def parse_address(value: str) -> Address:
    """Parse ``Name <email>`` or a bare email."""
    value = value.strip()
    if "<" in value and value.endswith(">"):
        name, email = value[:-1].split("<", 1)
        return Address(email=email.strip(), name=name.strip() or None)
    return Address(email=value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one email via the configured provider")
    parser.add_argument("--from", dest="sender", required=True, help="Sender, 'Name <email>' or email")
    parser.add_argument("--reply-to", default=None, help="Reply-To address (default: sender)")
    parser.add_argument("--to", action="append", required=True, help="Recipient email (repeatable)")
    parser.add_argument("--cc", action="append", default=[], help="CC address (repeatable)")
    parser.add_argument("--bcc", action="append", default=[], help="BCC address (repeatable)")
    parser.add_argument("--subject", required=True)
    body = parser.add_mutually_exclusive_group(required=True)
    body.add_argument("--body", help="Message body")
    body.add_argument("--body-file", type=Path, help="Read message body from file")
    parser.add_argument("--html", action="store_true", help="Body is HTML")
    parser.add_argument("--attach", action="append", type=Path, default=[], help="File to attach (repeatable)")
    return parser


def build_message(args: argparse.Namespace) -> OutboundEmail:
    sender = parse_address(args.sender)
    content = args.body if args.body is not None else args.body_file.read_text(encoding="utf-8")

    attachments = []
    for path in args.attach:
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        attachments.append(Attachment(name=path.name, mime_type=mime_type, path=path))

    return OutboundEmail(
        subject=args.subject,
        content=content,
        html=args.html,
        sender=sender,
        reply_to=parse_address(args.reply_to) if args.reply_to else sender,
        to=tuple(args.to),
        cc=tuple(parse_address(a) for a in args.cc),
        bcc=tuple(parse_address(a) for a in args.bcc),
        attachments=tuple(attachments),
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point.

    Exit codes: 0 when every recipient was delivered, 1 when any recipient
    failed or a transport fault occurred, 2 when the input or configuration
    was invalid and nothing was sent.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=os.getenv("LOG_LEVEL", "INFO"),
    )

    args = build_parser().parse_args(argv)

    try:
        message = build_message(args)
        adapter = EmailAdapterFactory.from_env()
        result = adapter.send(message)
    except DeliveryFaultError as e:
        print(json.dumps(e.result.to_dict(), indent=2))
        logger.error(str(e))
        return 1
    except (MailbridgeError, OSError, ValueError) as e:
        logger.error(str(e))
        return 2

    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.failed_to == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
