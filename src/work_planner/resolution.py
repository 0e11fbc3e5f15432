"""Boundary: config strings ↔ timezone-aware datetimes and durations."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_SHORT_DURATION_RE = re.compile(
    r"^(?:(\d+(?:\.\d+)?)h)?\s*(?:(\d+(?:\.\d+)?)m)?\s*(?:(\d+(?:\.\d+)?)s)?$",
    re.IGNORECASE,
)
_ISO_DURATION_RE = re.compile(
    r"^PT(?:(\d+(?:\.\d+)?)H)?(?:(\d+(?:\.\d+)?)M)?(?:(\d+(?:\.\d+)?)S)?$",
    re.IGNORECASE,
)
_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d")


def resolve_tz(name: str | None) -> tzinfo:
    """Resolve "UTC", a fixed offset ("+02:00") or an IANA name to a tzinfo.

    Raises ValueError for unknown identifiers.
    """
    s = (name or "UTC").strip()
    if s.upper() in {"UTC", "Z", "GMT"}:
        return timezone.utc

    m = _OFFSET_RE.match(s)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {s!r}")
        sign = 1 if sign_s == "+" else -1
        return timezone(sign * timedelta(hours=hh, minutes=mm))

    try:
        return ZoneInfo(s)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Invalid timezone identifier: {s!r}") from e


def parse_timestamp(s: str, tz: tzinfo) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM', 'YYYY-MM-DD' or ISO 8601.

    Naive values are interpreted in `tz`; values with an explicit offset
    keep it. Raises ValueError if nothing matches.
    """
    text = s.strip()
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=tz)
        except ValueError:
            continue

    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt


def parse_granularity(s: str) -> timedelta:
    """Parse '1h', '30m', '1h30m', '90s' or ISO 8601 'PT1H30M' into a timedelta.

    Raises ValueError for anything else, including an empty duration.
    """
    text = s.strip()
    m = _ISO_DURATION_RE.match(text) or _SHORT_DURATION_RE.match(text)
    if not text or m is None or not any(m.groups()):
        raise ValueError(f"Invalid duration: {s!r}")
    hours, minutes, seconds = (float(g) if g else 0.0 for g in m.groups())
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)
