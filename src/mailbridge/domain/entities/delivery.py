"""Delivery outcome records produced by every email adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True)
class RecipientResult:
    recipient: str
    error: str = ""

    @property
    def delivered(self) -> bool:
        return not self.error


@dataclass
class DeliveryResult:
    """Aggregate outcome of one ``send`` call.

    Created fresh per call and only ever appended to. ``results`` keeps the
    order in which recipients were processed, which is the order of the
    original message's recipient list.
    """

    channel: str = "email"
    delivered_to: int = 0
    results: list[RecipientResult] = field(default_factory=list)
    faults: list[Exception] = field(default_factory=list)

    def record_delivered(self, recipient: str) -> None:
        self.delivered_to += 1
        self.results.append(RecipientResult(recipient=recipient))

    def record_failed(self, recipient: str, error: str) -> None:
        # An empty error would read as success
        self.results.append(RecipientResult(recipient=recipient, error=error or UNKNOWN_ERROR))

    def merge(self, other: DeliveryResult) -> None:
        """Append another partial result, keeping its recipient order."""
        self.delivered_to += other.delivered_to
        self.results.extend(other.results)
        self.faults.extend(other.faults)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failed_to(self) -> int:
        return self.total - self.delivered_to

    @property
    def recipients(self) -> list[str]:
        return [r.recipient for r in self.results]

    def to_dict(self) -> dict[str, Any]:
        return {
            "deliveredTo": self.delivered_to,
            "type": self.channel,
            "results": [{"recipient": r.recipient, "error": r.error} for r in self.results],
        }
