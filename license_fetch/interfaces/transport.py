# ================================================================
# File: interfaces/transport.py
# Purpose: Define the abstract interface (port) for a single outbound
# request attempt. Any transport (httpx, a test fake, ...) can plug into
# LicenseRequest without changing the retry logic.
# ================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass(frozen=True)
class TransportResponse:
    """Successful (2xx) response of one attempt."""

    status: int
    content: bytes


class ITransportClient(Protocol):
    """
    Interface for an asynchronous, single-shot binary POST.

    Implementations are responsible for:
    - issuing exactly one outbound call per invocation
    - returning a TransportResponse for 2xx statuses
    - raising TransportFailure for any other status (with ``status`` set) or
      for transport faults (with ``status=None``)

    Implementations must not retry or sleep; LicenseRequest owns that.
    """

    async def post_bytes(
        self,
        url: str,
        body: Optional[bytes],
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        ...

    async def aclose(self) -> None:
        ...
