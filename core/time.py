# PATH: core/time.py
"""
Time utilities for the teleport demo.
"""

import time
from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """Get current UTC datetime as ISO string."""
    return now_utc().isoformat()


def monotonic_s() -> float:
    """Monotonic clock in seconds, for deadlines."""
    return time.monotonic()
