"""Shared retry/backoff configuration utilities."""

DEFAULT_MAX_ATTEMPTS: int = 3
DEFAULT_BASE_DELAY_MS: float = 1000.0
DEFAULT_BACKOFF_FACTOR: float = 2.0
DEFAULT_REQUEST_TIMEOUT_MS: float = 0.0


def backoff_delay_ms(base_delay_ms: float, backoff_factor: float, index: int) -> float:
    """Return the wait inserted after the failed attempt number ``index`` (0-based)."""

    return float(base_delay_ms) * float(backoff_factor) ** index
