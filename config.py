"""
Centralized configuration for the account gateway.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


DB_PATH = os.getenv("DB_PATH", "accounts.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SQLITE_BUSY_TIMEOUT_MS = _parse_int("SQLITE_BUSY_TIMEOUT_MS", 5000)

# Loyalty reconciliation writes back to the accounts table when a load finds
# purchased days below remaining days, or a missing creation time.
LOYALTY_RECONCILE_ON_LOAD = _parse_bool("LOYALTY_RECONCILE_ON_LOAD", True)

SECONDS_PER_DAY = 86400
