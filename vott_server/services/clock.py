"""UTC timestamps in the ``yyyy-MM-ddTHH:mm:ssZ`` form stored on tasks."""
from collections.abc import Callable
from datetime import datetime, timezone

ISO_8601_UTC = "%Y-%m-%dT%H:%M:%SZ"

Clock = Callable[[], str]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).strftime(ISO_8601_UTC)


def get_clock() -> Clock:
    """FastAPI dependency; tests override it with a fixed sequence."""
    return utc_now_iso
