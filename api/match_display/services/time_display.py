"""Viewer-facing labels for upstream schedule times.

Upstream match times are civil times in a fixed source zone (US Eastern).
The strings sometimes carry a trailing ``Z`` that is a formatting artifact,
not an offset, so the marker is ignored and the wall-clock numbers are
always read as source-zone time.

The source offset is never hardcoded. It is recovered per date by probing:
the civil components are first anchored as if they were UTC, that probe is
rendered in the source zone, and the difference between the two wall clocks
is exactly how far the probe is off. Applying it yields the true instant,
which is then classified against the viewer's own calendar:

    "Today, 7:00 PM" / "Tomorrow, 7:00 PM" / "Thursday, January 15, 7:00 PM"

Malformed input degrades to returning the string unchanged.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo

from ..config import settings
from ..utils.datetime_utils import Clock, now_utc, to_viewer_local, viewer_today, zone

logger = logging.getLogger(__name__)

_SCHEDULED_TIMESTAMP_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[T ](?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.\d+)?)?"
    r"Z?$",
    re.ASCII,
)

_WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_scheduled_timestamp(value: str | None) -> datetime | None:
    """Extract the civil date-time components from a schedule string.

    Returns a naive datetime holding the wall-clock numbers exactly as
    written, or None when the string does not have the expected shape or
    names an impossible date.
    """
    if not value:
        return None
    match = _SCHEDULED_TIMESTAMP_RE.match(value.strip())
    if match is None:
        return None
    parts = match.groupdict()
    try:
        return datetime(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"]),
            int(parts["minute"]),
            int(parts["second"] or 0),
        )
    except ValueError:
        return None


def source_offset(civil: datetime, source_tz: tzinfo) -> timedelta:
    """Return how far a UTC-anchored probe of ``civil`` is from the truth.

    The value is ``civil - probe_rendered_in_source_zone``, which equals the
    negated UTC offset of the source zone on that date (e.g. +5h for EST,
    +4h for EDT).
    """
    probe = civil.replace(tzinfo=timezone.utc)
    rendered = probe.astimezone(source_tz).replace(tzinfo=None)
    return civil - rendered


def resolve_source_instant(civil: datetime, source_tz: tzinfo) -> datetime:
    """Turn source-zone civil time into an aware UTC instant."""
    probe = civil.replace(tzinfo=timezone.utc)
    return probe + source_offset(civil, source_tz)


def format_clock_time(local: datetime) -> str:
    """Render ``h:mm AM/PM`` with no leading zero on the hour."""
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem}"


def format_full_date(local: datetime) -> str:
    """Render ``Weekday, Month Day`` in English regardless of process locale."""
    return f"{_WEEKDAY_NAMES[local.weekday()]}, {_MONTH_NAMES[local.month - 1]} {local.day}"


def _default_source_zone() -> tzinfo:
    return zone(settings.source_timezone)


def _default_viewer_zone() -> tzinfo | None:
    if settings.viewer_timezone:
        return zone(settings.viewer_timezone)
    return None


def format_match_time(
    value: str,
    *,
    now: Clock = now_utc,
    viewer_tz: tzinfo | None = None,
    source_tz: tzinfo | None = None,
) -> str:
    """Format an upstream schedule string for display in the viewer's zone.

    Args:
        value: Schedule string such as "2026-01-15T19:00:00Z" (Eastern civil time).
        now: Clock returning the current instant; read once per call.
        viewer_tz: Viewer zone; defaults to ``VIEWER_TIMEZONE`` or the host zone.
        source_tz: Source zone; defaults to ``SOURCE_TIMEZONE``.

    Returns:
        "Today, h:mm AM", "Tomorrow, h:mm PM", "Weekday, Month D, h:mm AM",
        or ``value`` unchanged when it cannot be parsed.
    """
    civil = parse_scheduled_timestamp(value)
    if civil is None:
        logger.debug("unparseable_scheduled_timestamp", extra={"value": value})
        return value

    if source_tz is None:
        source_tz = _default_source_zone()
    if viewer_tz is None:
        viewer_tz = _default_viewer_zone()

    try:
        instant = resolve_source_instant(civil, source_tz)
        local = to_viewer_local(instant, viewer_tz)
    except OverflowError:
        logger.debug("scheduled_timestamp_out_of_range", extra={"value": value, "viewer_tz": viewer_tz})
        return value

    current = now()
    if current.tzinfo is None or current.tzinfo.utcoffset(current) is None:
        current = current.replace(tzinfo=timezone.utc)
    today = viewer_today(current, viewer_tz)

    clock_text = format_clock_time(local)
    if local.date() == today:
        return f"Today, {clock_text}"
    if local.date() == today + timedelta(days=1):
        return f"Tomorrow, {clock_text}"
    return f"{format_full_date(local)}, {clock_text}"
