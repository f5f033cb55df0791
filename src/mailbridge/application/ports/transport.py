from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Union


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    # Decoded JSON when the provider sent JSON, raw text otherwise
    response: Union[str, dict[str, Any], list[Any]]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class FilePart:
    """A file field for multipart form bodies."""

    filename: str
    content: bytes
    mime_type: str


class HttpTransport(Protocol):
    """Performs one HTTP call. Raises TransportError when no response was received.

    The body is encoded according to the ``Content-Type`` header: JSON for
    ``application/json``, form fields otherwise. When ``files`` is given the
    body is sent as multipart form data.
    """

    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Mapping[str, Any],
        files: Optional[Mapping[str, FilePart]] = None,
    ) -> TransportResponse: ...
