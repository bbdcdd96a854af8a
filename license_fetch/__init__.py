"""Resilient fetcher for license responses and inline ``data:`` payloads."""

from .errors import (
    LicenseRequestError,
    MisuseFailure,
    ParseFailure,
    TransportFailure,
)
from .license_request import (
    LicenseRequest,
    RequestParameters,
    RequestState,
    fetch_license,
)
from .utils.async_http import AsyncHTTP
from .utils.data_uri import DataUri, decode_data_uri, is_data_uri, parse_data_uri

__all__ = [
    "AsyncHTTP",
    "DataUri",
    "LicenseRequest",
    "LicenseRequestError",
    "MisuseFailure",
    "ParseFailure",
    "RequestParameters",
    "RequestState",
    "TransportFailure",
    "decode_data_uri",
    "fetch_license",
    "is_data_uri",
    "parse_data_uri",
]

__version__ = "0.1.0"
