"""Test configuration helpers and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


LICENSE_ENV_KEYS = (
    "LICENSE_MAX_ATTEMPTS",
    "LICENSE_BASE_DELAY_MS",
    "LICENSE_RETRY_DELAY_MS",
    "LICENSE_BACKOFF_FACTOR",
    "LICENSE_REQUEST_TIMEOUT_MS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_license_env(monkeypatch):
    """Keep settings deterministic regardless of the developer's shell."""

    for key in LICENSE_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
