"""Single-use license request with bounded exponential-backoff retry.

A :class:`LicenseRequest` POSTs an opaque challenge to a license server and
returns the raw response bytes. Inline ``data:`` addresses are decoded
locally and never reach the transport.

Attempts are strictly sequential. After the failed attempt ``i`` (0-based)
the request waits ``base_delay_ms * backoff_factor ** i`` before trying
again, until ``max_attempts`` attempts have been made. Every non-2xx status
and every transport fault is retried the same way.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Mapping, Optional, Union

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from .config.config import Settings, settings
from .errors import MisuseFailure, ParseFailure, TransportFailure
from .interfaces.transport import ITransportClient, TransportResponse
from .utils.async_http import AsyncHTTP
from .utils.data_uri import decode_data_uri, is_data_uri
from .utils.retry import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_REQUEST_TIMEOUT_MS,
    backoff_delay_ms,
)

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class RequestState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    AWAITING_BACKOFF = "awaiting_backoff"
    SUCCEEDED = "succeeded"
    EXHAUSTED_FAILED = "exhausted_failed"
    FAILED = "failed"


@dataclass(frozen=True)
class RequestParameters:
    """Retry and timeout configuration for one :class:`LicenseRequest`."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay_ms: float = DEFAULT_BASE_DELAY_MS
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    request_timeout_ms: float = DEFAULT_REQUEST_TIMEOUT_MS

    def __post_init__(self) -> None:
        max_attempts = self.max_attempts
        if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
            raise ValueError("max_attempts must be an integer")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")
        if self.request_timeout_ms < 0:
            raise ValueError("request_timeout_ms must not be negative")

    @classmethod
    def from_settings(
        cls, runtime_settings: Optional[Settings] = None
    ) -> "RequestParameters":
        current = runtime_settings or settings
        return cls(
            max_attempts=current.license_max_attempts,
            base_delay_ms=current.license_base_delay_ms,
            backoff_factor=current.license_backoff_factor,
            request_timeout_ms=current.license_request_timeout_ms,
        )

    def delay_for(self, index: int) -> float:
        """Backoff in milliseconds after the failed attempt ``index``."""
        return backoff_delay_ms(self.base_delay_ms, self.backoff_factor, index)


class LicenseRequest:
    """One logical request for a binary payload.

    ``send()`` may be awaited exactly once. A second call raises
    :class:`MisuseFailure`; the handle has no defined recovery from that.

    When ``transport`` is omitted the request opens its own :class:`AsyncHTTP`
    client for the duration of ``send()``.
    """

    METHOD = "POST"

    def __init__(
        self,
        address: str,
        body: Optional[Union[bytes, str]] = None,
        *,
        parameters: Optional[RequestParameters] = None,
        transport: Optional[ITransportClient] = None,
        headers: Optional[Mapping[str, str]] = None,
        sleep: Optional[SleepFn] = None,
    ) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._address = address
        self._body: Optional[bytes] = body
        self._parameters = parameters or RequestParameters.from_settings()
        self._transport = transport
        self._headers = dict(headers or {})
        self._sleep: SleepFn = sleep or asyncio.sleep

        self._sent = False
        self._state = RequestState.IDLE
        self._attempts = 0
        self._last_delay_ms = 0.0
        self._pending_delay_ms = 0.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def address(self) -> str:
        return self._address

    @property
    def body(self) -> Optional[bytes]:
        return self._body

    @property
    def parameters(self) -> RequestParameters:
        return self._parameters

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def attempts(self) -> int:
        """Number of transport attempts made so far."""
        return self._attempts

    @property
    def last_delay_ms(self) -> float:
        """Delay of the most recent backoff wait, ``0`` if none happened."""
        return self._last_delay_ms

    async def send(self) -> bytes:
        """Fetch the payload, retrying transport failures with backoff."""

        if self._sent:
            raise MisuseFailure("LicenseRequest.send() may only be called once")
        self._sent = True

        if is_data_uri(self._address):
            return self._resolve_inline()

        if self._transport is not None:
            return await self._send_with_retry(self._transport)

        async with AsyncHTTP(headers=self._headers) as transport:
            return await self._send_with_retry(transport)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _resolve_inline(self) -> bytes:
        try:
            data = decode_data_uri(self._address)
        except ParseFailure:
            self._transition(RequestState.FAILED)
            raise
        self._transition(RequestState.SUCCEEDED)
        return data

    async def _send_with_retry(self, transport: ITransportClient) -> bytes:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._parameters.max_attempts),
            wait=self._next_delay,
            retry=retry_if_exception_type(TransportFailure),
            before_sleep=self._log_retry,
            sleep=self._backoff,
            reraise=True,
        )
        try:
            response: TransportResponse = await retrying(self._attempt, transport)
        except TransportFailure as exc:
            self._transition(RequestState.EXHAUSTED_FAILED)
            logger.error(
                "License request failed after %d attempt(s): %s",
                self._attempts,
                exc,
                extra={"status": exc.status, "url": self._address},
            )
            raise

        self._transition(RequestState.SUCCEEDED)
        return response.content

    async def _attempt(self, transport: ITransportClient) -> TransportResponse:
        self._attempts += 1
        self._transition(RequestState.ATTEMPTING)
        logger.debug(
            "License request attempt",
            extra={"attempt": self._attempts, "url": self._address},
        )
        timeout_ms = self._parameters.request_timeout_ms
        return await transport.post_bytes(
            self._address,
            self._body,
            headers=self._headers or None,
            timeout=timeout_ms / 1000.0 if timeout_ms else None,
        )

    def _next_delay(self, retry_state: RetryCallState) -> float:
        # tenacity counts attempts from 1; the schedule is keyed to a 0-based index.
        # Also evaluated after the final attempt, when no wait follows.
        index = retry_state.attempt_number - 1
        self._pending_delay_ms = self._parameters.delay_for(index)
        return self._pending_delay_ms / 1000.0

    async def _backoff(self, seconds: float) -> None:
        self._transition(RequestState.AWAITING_BACKOFF)
        self._last_delay_ms = self._pending_delay_ms
        await self._sleep(seconds)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retrying license request after failure",
            extra={
                "attempt": retry_state.attempt_number,
                "delay_ms": self._pending_delay_ms,
                "status": getattr(exc, "status", None),
            },
        )

    def _transition(self, state: RequestState) -> None:
        logger.debug("License request %s -> %s", self._state.value, state.value)
        self._state = state


async def fetch_license(
    address: str,
    body: Optional[Union[bytes, str]] = None,
    **kwargs,
) -> bytes:
    """Build a :class:`LicenseRequest` and send it."""

    return await LicenseRequest(address, body, **kwargs).send()
