from __future__ import annotations

from datetime import datetime


def getNowIso() -> str:
    """Локальное время с offset, ISO 8601."""
    return datetime.now().astimezone().isoformat()


def getDurationMs(startMonotonic: float, endMonotonic: float) -> int:
    return int((endMonotonic - startMonotonic) * 1000)
