"""Configuration loader.

Reads environment variables and `.env` to configure the checker.
"""

from __future__ import annotations

import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

# Load variables from a .env file if present (project root).
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(name, default)


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes")


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _parse_float(value: Optional[str], default: Optional[float]) -> Optional[float]:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


# ---- Storage -----------------------------------------------------------------

# JSON file holding every tracked site and its last-seen products.
PRODUCTS_FILE: str = _get_env("PRODUCTS_FILE", "products.json")

# Path used by the `add` command when none is entered.
DEFAULT_PRODUCTS_PATH: str = _get_env("DEFAULT_PRODUCTS_PATH", "/products.json")

# ---- Monitoring loop ---------------------------------------------------------

# Fixed delay between check cycles, in milliseconds.
SLEEP_TIME_MS: int = _parse_int(_get_env("SLEEP_TIME_MS", "3000"), 3000)
SLEEP_SECONDS: float = SLEEP_TIME_MS / 1000.0

# ---- HTTP --------------------------------------------------------------------

USER_AGENT: str = _get_env("USER_AGENT", "request")

# Unset means no timeout: a hung request stalls the whole cycle.
REQUEST_TIMEOUT_SECONDS: Optional[float] = _parse_float(_get_env("REQUEST_TIMEOUT_SECONDS"), None)

# Total attempts per fetch. 1 disables retries.
FETCH_ATTEMPTS: int = _parse_int(_get_env("FETCH_ATTEMPTS", "1"), 1)

# Verify TLS certificates of tracked storefronts.
VERIFY_TLS: bool = _parse_bool(_get_env("VERIFY_TLS", "true"), True)

# Logging level: DEBUG, INFO, WARNING, ERROR.
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO")

# ---- Validation --------------------------------------------------------------

def validate() -> None:
    """Validate configuration parameters."""
    if not PRODUCTS_FILE:
        raise RuntimeError("PRODUCTS_FILE must not be empty. See .env.example for details.")
    if SLEEP_TIME_MS < 0:
        raise RuntimeError("SLEEP_TIME_MS must be >= 0, got %d." % SLEEP_TIME_MS)
    if FETCH_ATTEMPTS < 1:
        raise RuntimeError("FETCH_ATTEMPTS must be >= 1, got %d." % FETCH_ATTEMPTS)
    if REQUEST_TIMEOUT_SECONDS is not None and REQUEST_TIMEOUT_SECONDS <= 0:
        raise RuntimeError("REQUEST_TIMEOUT_SECONDS must be positive when set.")


__all__ = [
    "PRODUCTS_FILE",
    "DEFAULT_PRODUCTS_PATH",
    "SLEEP_TIME_MS",
    "SLEEP_SECONDS",
    "USER_AGENT",
    "REQUEST_TIMEOUT_SECONDS",
    "FETCH_ATTEMPTS",
    "VERIFY_TLS",
    "LOG_LEVEL",
    "validate",
]
