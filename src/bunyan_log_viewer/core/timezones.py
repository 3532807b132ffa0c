"""Display timezone resolution."""

from __future__ import annotations

from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_UTC_NAMES = {"", "utc", "z", "gmt", "etc/utc"}


def local_timezone() -> tzinfo:
    """Return the system's local timezone."""
    return datetime.now().astimezone().tzinfo


def resolve_timezone(name: str | None, *, local: bool = False) -> tzinfo | None:
    """Resolve a timezone name for display; ``None`` means UTC.

    ``local`` wins over ``name``. ``Local`` selects the system timezone.
    """
    if local:
        return local_timezone()
    if name is None or name.strip().lower() in _UTC_NAMES:
        return None
    if name.strip().lower() == "local":
        return local_timezone()
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}'") from e
