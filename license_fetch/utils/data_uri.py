"""Resolver for inline ``data:`` addresses.

An inline address embeds its whole payload instead of pointing at a server::

    data:[<mime type>][;base64],<payload>

The metadata segment is optional and ends at the first comma. When no comma
is present the text after the last ``;`` is the payload, so both
``data:Hello%2C%20data!`` and ``data:text/plain;Hello%2C%20data!`` are valid
percent-encoded payloads.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, unquote_to_bytes

from ..errors import ParseFailure

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:"
_BASE64_TOKEN = "base64"
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class DataUri:
    """Parsed representation of an inline ``data:`` address."""

    mime_type: Optional[str]
    is_base64: bool
    raw_payload: str

    def decode(self) -> bytes:
        if _MALFORMED_ESCAPE.search(self.raw_payload):
            raise ParseFailure("Malformed percent escape in data URI payload")
        if not self.is_base64:
            return unquote_to_bytes(self.raw_payload)

        # Base64 alphabets may arrive percent-escaped (``%2B``, ``%3D``).
        encoded = unquote(self.raw_payload)
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ParseFailure(f"Invalid base64 payload in data URI: {exc}") from exc


def is_data_uri(address: str) -> bool:
    """Return ``True`` when *address* carries an inline payload."""

    return address[: len(DATA_URI_PREFIX)].lower() == DATA_URI_PREFIX


def parse_data_uri(address: str) -> DataUri:
    """Split a ``data:`` address into its metadata and raw payload."""

    if not is_data_uri(address):
        raise ParseFailure(f"Not a data URI: {address[:32]!r}")

    body = address[len(DATA_URI_PREFIX) :]
    metadata, separator, payload = body.partition(",")
    if separator:
        tokens = metadata.split(";") if metadata else []
    else:
        *tokens, payload = body.split(";")
        if payload.strip().lower() == _BASE64_TOKEN:
            raise ParseFailure("Data URI declares base64 but has no ',' separator")

    mime_type: Optional[str] = None
    is_base64 = False
    for token in tokens:
        token = token.strip()
        if token.lower() == _BASE64_TOKEN:
            if not separator:
                raise ParseFailure(
                    "Data URI declares base64 but has no ',' separator"
                )
            is_base64 = True
        elif "/" in token and mime_type is None:
            mime_type = token

    return DataUri(mime_type=mime_type, is_base64=is_base64, raw_payload=payload)


def decode_data_uri(address: str) -> bytes:
    """Decode the payload of an inline address to bytes."""

    parsed = parse_data_uri(address)
    data = parsed.decode()
    logger.debug(
        "Decoded data URI",
        extra={
            "mime_type": parsed.mime_type,
            "base64": parsed.is_base64,
            "size": len(data),
        },
    )
    return data
