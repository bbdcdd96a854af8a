"""Shared asynchronous HTTP transport for binary license requests."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..errors import TransportFailure
from ..interfaces.transport import TransportResponse

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 20.0
DEFAULT_TOTAL_TIMEOUT = 30.0

DEFAULT_HEADERS = {"Content-Type": "application/octet-stream"}


class AsyncHTTP:
    """Wrapper around :class:`httpx.AsyncClient` performing one attempt per call.

    Each call issues exactly one request. :class:`LicenseRequest` owns the
    attempt loop and the backoff schedule.
    """

    def __init__(
        self,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        total_timeout = timeout or DEFAULT_TOTAL_TIMEOUT
        self._client = httpx.AsyncClient(
            headers={**DEFAULT_HEADERS, **dict(headers or {})},
            timeout=httpx.Timeout(
                total_timeout,
                connect=DEFAULT_CONNECT_TIMEOUT,
                read=DEFAULT_READ_TIMEOUT,
            ),
            follow_redirects=follow_redirects,
            transport=transport,
        )

    async def __aenter__(self) -> "AsyncHTTP":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def post_bytes(
        self,
        url: str,
        body: Optional[bytes],
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        logger.debug("AsyncHTTP request", extra={"method": "POST", "url": url})
        request_kwargs = {}
        if timeout is not None:
            request_kwargs["timeout"] = timeout
        try:
            response = await self._client.post(
                url,
                content=body,
                headers=dict(headers) if headers else None,
                **request_kwargs,
            )
        except httpx.HTTPError as exc:
            raise TransportFailure(
                f"POST {url} failed without a response: {exc.__class__.__name__}",
                status=None,
                address=url,
            ) from exc

        if not response.is_success:
            raise TransportFailure(
                f"POST {url} returned HTTP {response.status_code}",
                status=response.status_code,
                address=url,
            )
        return TransportResponse(status=response.status_code, content=response.content)
