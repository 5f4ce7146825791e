"""Clock and timezone helpers shared by the display services.

DATE CONVENTION:
Upstream schedule times are civil times in the source zone (US Eastern by
default, see ``SOURCE_TIMEZONE``). Everything shown to a viewer is expressed
in the viewer's zone, which is either passed in explicitly, configured via
``VIEWER_TIMEZONE``, or the host's local zone.

All instants passed between helpers are timezone-aware.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def now_utc() -> datetime:
    """Get the current time in UTC, timezone-aware."""
    return datetime.now(timezone.utc)


def fixed_clock(instant: datetime) -> Clock:
    """Return a clock that always reports ``instant``.

    Naive datetimes are treated as UTC.
    """
    if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
        instant = instant.replace(tzinfo=timezone.utc)

    def _clock() -> datetime:
        return instant

    return _clock


@lru_cache(maxsize=32)
def zone(name: str) -> ZoneInfo:
    """Look up an IANA zone, raising ``ZoneInfoNotFoundError`` for unknown names."""
    return ZoneInfo(name)


def to_viewer_local(instant: datetime, viewer_tz: tzinfo | None = None) -> datetime:
    """Express an aware instant in the viewer's zone.

    With no zone, ``astimezone()`` picks the host's local zone for that
    specific instant, so DST on the host side is honoured too.
    """
    if viewer_tz is None:
        return instant.astimezone()
    return instant.astimezone(viewer_tz)


def viewer_today(now: datetime, viewer_tz: tzinfo | None = None) -> date:
    """Return the viewer's local calendar date for ``now``."""
    return to_viewer_local(now, viewer_tz).date()
