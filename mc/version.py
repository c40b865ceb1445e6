"""Build version token and its display form.

``BUILD_VERSION`` is stamped at release time with the RFC3339 build
timestamp. Development checkouts carry a non-timestamp placeholder, which
renders as an empty version line.
"""
import re
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Optional

BUILD_VERSION = "DEVELOPMENT.GOGET"

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)


def parse_rfc3339(token: str) -> Optional[datetime]:
    """Parse an RFC3339 timestamp with optional nanosecond fraction.

    Returns None for empty or malformed input. Digits past microseconds are
    truncated.
    """
    if not token:
        return None
    match = _RFC3339.match(token.strip())
    if not match:
        return None
    year, month, day, hour, minute, second, frac, zulu, sign, off_h, off_m = match.groups()
    micro = int((frac or "0")[:6].ljust(6, "0"))
    try:
        if zulu:
            tz = timezone.utc
        else:
            offset = timedelta(hours=int(off_h), minutes=int(off_m))
            tz = timezone(offset if sign == "+" else -offset)
        return datetime(int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz)
    except ValueError:
        return None


def get_formatted_version(token: Optional[str] = None) -> str:
    """Render the build token as an HTTP date, or '' if it isn't a timestamp."""
    parsed = parse_rfc3339(BUILD_VERSION if token is None else token)
    if parsed is None:
        return ""
    return format_datetime(parsed.astimezone(timezone.utc).replace(microsecond=0), usegmt=True)
