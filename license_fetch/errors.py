"""Failure taxonomy for license and payload requests."""

from __future__ import annotations

from typing import Optional


class LicenseRequestError(Exception):
    """Base class for every failure surfaced by :meth:`LicenseRequest.send`."""

    status: Optional[int] = None


class TransportFailure(LicenseRequestError):
    """A single network attempt failed.

    ``status`` carries the HTTP status code of the response, or ``None`` when
    no response was received at all (connection refused, timeout, ...).
    """

    def __init__(
        self, message: str, *, status: Optional[int] = None, address: str = ""
    ) -> None:
        super().__init__(message)
        self.status = status
        self.address = address


class ParseFailure(LicenseRequestError, ValueError):
    """An inline ``data:`` address could not be parsed or decoded."""


class MisuseFailure(LicenseRequestError, RuntimeError):
    """``send()`` was invoked more than once on the same request."""
