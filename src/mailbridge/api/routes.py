"""
API routes for the Mailbridge service.

Exposes one send endpoint in front of the configured email adapter, plus
health checks.
"""

import base64
import binascii
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from mailbridge.application.errors import AttachmentTooLargeError, DeliveryFaultError
from mailbridge.application.ports.email_adapter import EmailAdapter
from mailbridge.domain import Address, Attachment, DeliveryResult, OutboundEmail
from mailbridge.infrastructure import get_email_adapter, get_settings

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class AddressIn(BaseModel):
    """An email address with an optional display name."""

    email: str = Field(..., min_length=3, description="Email address")
    name: str | None = Field(None, description="Display name")

    def to_domain(self) -> Address:
        return Address(email=self.email, name=self.name)


class AttachmentIn(BaseModel):
    """An inline attachment."""

    name: str = Field(..., description="File name shown to recipients")
    mime_type: str = Field("application/octet-stream", description="MIME type")
    content_base64: str = Field(..., description="Base64 encoded file content")


class SendEmailRequest(BaseModel):
    """Request body for the send endpoint."""

    subject: str
    content: str
    html: bool = False
    sender: AddressIn
    reply_to: AddressIn | None = Field(None, description="Defaults to the sender")
    to: list[str] = Field(..., min_length=1, description="Recipient email addresses")
    cc: list[AddressIn] = Field(default_factory=list)
    bcc: list[AddressIn] = Field(default_factory=list)
    attachments: list[AttachmentIn] = Field(default_factory=list)


class RecipientResultOut(BaseModel):
    recipient: str
    error: str


class DeliveryReport(BaseModel):
    """Uniform delivery report, whichever provider was used."""

    model_config = ConfigDict(populate_by_name=True)

    delivered_to: int = Field(..., serialization_alias="deliveredTo")
    failed_to: int = Field(..., serialization_alias="failedTo")
    type: str
    provider: str
    results: list[RecipientResultOut]

    @classmethod
    def from_result(cls, result: DeliveryResult, provider: str) -> "DeliveryReport":
        return cls(
            delivered_to=result.delivered_to,
            failed_to=result.failed_to,
            type=result.channel,
            provider=provider,
            results=[RecipientResultOut(recipient=r.recipient, error=r.error) for r in result.results],
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str
    provider: str | None


# ============================================================================
# Helpers
# ============================================================================


def to_outbound_email(request: SendEmailRequest) -> OutboundEmail:
    """Convert the API payload into the domain message."""
    attachments = []
    for item in request.attachments:
        try:
            content = base64.b64decode(item.content_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise HTTPException(status_code=422, detail=f"Attachment '{item.name}' is not valid base64") from e
        attachments.append(Attachment(name=item.name, mime_type=item.mime_type, content=content))

    sender = request.sender.to_domain()
    return OutboundEmail(
        subject=request.subject,
        content=request.content,
        html=request.html,
        sender=sender,
        reply_to=request.reply_to.to_domain() if request.reply_to else sender,
        to=tuple(request.to),
        cc=tuple(a.to_domain() for a in request.cc),
        bcc=tuple(a.to_domain() for a in request.bcc),
        attachments=tuple(attachments),
    )


# ============================================================================
# Routes
# ============================================================================


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        provider=settings.email_provider,
    )


@router.post("/v1/emails", response_model=DeliveryReport, tags=["email"])
def send_email(
    request: SendEmailRequest,
    adapter: EmailAdapter = Depends(get_email_adapter),
):
    """Send one message to all of its recipients and report per-recipient outcomes.

    A 200 response does not mean every recipient succeeded; check
    ``failedTo`` and the per-recipient errors.
    """
    message = to_outbound_email(request)

    try:
        result = adapter.send(message)
    except AttachmentTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except DeliveryFaultError as e:
        logger.error(f"Send via {adapter.name} hit transport faults: {e}")
        report = DeliveryReport.from_result(e.result, adapter.name)
        return JSONResponse(
            status_code=502,
            content={"detail": str(e), "report": report.model_dump(by_alias=True)},
        )

    return DeliveryReport.from_result(result, adapter.name)
