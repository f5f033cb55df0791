"""httpx-backed HTTP transport used by the API email providers."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx
from loguru import logger

from mailbridge.application.errors import TransportError
from mailbridge.application.ports.transport import FilePart, TransportResponse


class HttpxTransport:
    """Performs provider calls with a shared httpx.Client.

    Any failure to obtain a response (connect error, TLS, timeout) is raised
    as TransportError. Non-2xx responses are returned, never raised.
    """

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 30.0) -> None:
        self._client = client or httpx.Client(timeout=timeout)

    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Mapping[str, Any],
        files: Optional[Mapping[str, FilePart]] = None,
    ) -> TransportResponse:
        headers = dict(headers)
        content_type = next((v for k, v in headers.items() if k.lower() == "content-type"), "")

        kwargs: dict[str, Any] = {}
        if files:
            # httpx writes the multipart boundary into Content-Type itself
            headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
            kwargs["data"] = _form_fields(body)
            kwargs["files"] = {
                field: (part.filename, part.content, part.mime_type) for field, part in files.items()
            }
        elif content_type.startswith("application/json"):
            kwargs["json"] = dict(body)
        else:
            kwargs["data"] = _form_fields(body)

        try:
            response = self._client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"HTTP timeout calling {url}")
            raise TransportError(f"Request timeout: {url}") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP transport error calling {url}: {e}")
            raise TransportError(f"{type(e).__name__}: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return TransportResponse(status_code=response.status_code, response=_decode(response))

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _form_fields(body: Mapping[str, Any]) -> dict[str, str]:
    # Form encoding has no null; unset fields are left out
    return {k: str(v) for k, v in body.items() if v is not None}


def _decode(response: httpx.Response) -> Any:
    if "json" in response.headers.get("content-type", ""):
        try:
            return response.json()
        except ValueError:
            pass
    return response.text
