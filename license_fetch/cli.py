"""Command line entrypoint for fetching a license or inline payload."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config.config import settings
from .errors import LicenseRequestError
from .license_request import LicenseRequest, RequestParameters
from .utils.logging_setup import init_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="license-fetch",
        description="POST a license challenge or decode a data: URI",
    )
    parser.add_argument("address", help="License server URL or data: URI")
    parser.add_argument(
        "--body-file",
        type=Path,
        help="File whose bytes are sent as the request body",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the response here instead of stdout",
    )
    parser.add_argument(
        "--max-attempts", type=int, default=settings.license_max_attempts
    )
    parser.add_argument(
        "--base-delay-ms", type=float, default=settings.license_base_delay_ms
    )
    parser.add_argument(
        "--backoff-factor", type=float, default=settings.license_backoff_factor
    )
    parser.add_argument(
        "--timeout-ms", type=float, default=settings.license_request_timeout_ms
    )
    parser.add_argument("--log-level", default=settings.log_level)
    return parser.parse_args(list(argv) if argv is not None else None)


async def _fetch(args: argparse.Namespace) -> bytes:
    parameters = RequestParameters(
        max_attempts=args.max_attempts,
        base_delay_ms=args.base_delay_ms,
        backoff_factor=args.backoff_factor,
        request_timeout_ms=args.timeout_ms,
    )
    body = args.body_file.read_bytes() if args.body_file else None
    return await LicenseRequest(args.address, body, parameters=parameters).send()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    init_logging(args.log_level)

    try:
        payload = asyncio.run(_fetch(args))
    except LicenseRequestError as exc:
        logger.error("Request failed (status=%s): %s", exc.status, exc)
        return 1
    except ValueError as exc:
        logger.error("Invalid request parameters: %s", exc)
        return 1

    if args.output:
        args.output.write_bytes(payload)
        logger.info("Wrote %d bytes to %s", len(payload), args.output)
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
