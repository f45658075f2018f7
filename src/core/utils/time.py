"""Timestamp helpers."""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with offset, e.g. ``2024-01-15T10:42:31.123456+00:00``.

    Used for the ``timestamp`` field of error responses.
    """
    return datetime.now(timezone.utc).isoformat()
