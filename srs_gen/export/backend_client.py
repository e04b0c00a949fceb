"""Async client for the remote SRS rendering service.

Wraps ``POST /api/generate-srs``: the request carries the flattened text
payload and the response body is the finished document, returned verbatim.
Every failure (transport or non-success status) surfaces as a
``TransportError``; there is no retry and no local fallback.

Typical usage::

    client = BackendRenderClient("http://localhost:5000")
    rendered = await client.render(flatten_document(document))
    print(rendered.media_type, len(rendered.content))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from srs_gen.errors import TransportError
from srs_gen.export.payload import RenderPayload
from srs_gen.utils import CancellationToken, run_cancellable

GENERATE_ENDPOINT = "/api/generate-srs"
DEFAULT_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class RenderedDocument:
    """Response body of the rendering service and its declared media type."""

    content: bytes
    media_type: str = DEFAULT_MEDIA_TYPE


def _media_type(response: httpx.Response) -> str:
    """Bare media type of *response*; a missing or generic header means PDF."""
    value = response.headers.get("content-type") or ""
    media_type = value.split(";", 1)[0].strip().lower()
    if not media_type or media_type == "application/octet-stream":
        return DEFAULT_MEDIA_TYPE
    return media_type


class BackendRenderClient:
    """Async client for the document-rendering backend.

    The client uses ``httpx.AsyncClient`` for non-blocking HTTP; a fresh
    client is opened per call since only one export is ever in flight.
    """

    def __init__(self, base_url: str = "http://localhost:5000", timeout: int = 60) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    async def _post(self, payload: RenderPayload) -> RenderedDocument:
        try:
            async with self._client() as client:
                response = await client.post(GENERATE_ENDPOINT, json=payload.to_json_body())
                response.raise_for_status()
                return RenderedDocument(content=response.content, media_type=_media_type(response))
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(
                f"Rendering service returned HTTP {status}: {exc.response.text[:500]}",
                status_code=status,
            ) from exc
        except httpx.ConnectError as exc:
            raise TransportError(
                f"Cannot connect to the rendering service at {self.base_url}. Is it running?"
            ) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to the rendering service timed out after {self.timeout}s."
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Transport error talking to the rendering service: {exc}") from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def render(
        self,
        payload: RenderPayload,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> RenderedDocument:
        """Send *payload* and return the rendered document.

        The body is kept verbatim; its media type comes from the response
        ``Content-Type``.

        Raises:
            TransportError: On a non-2xx status or any transport failure.
            ExportCancelledError: If *cancel* fires before the response arrives.
        """
        return await run_cancellable(self._post(payload), cancel)

    async def is_available(self) -> bool:
        """Return ``True`` if the service answers at its base URL."""
        try:
            async with self._client() as client:
                response = await client.get("/")
                return response.status_code < 500
        except httpx.HTTPError:
            return False
