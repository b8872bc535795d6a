"""Best-effort normalisation of feed timestamps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Offsets in hours for the zone names RFC 822 allows in place of a numeric offset.
_NAMED_ZONES = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}


@dataclass(frozen=True)
class DatePattern:
    """A strptime format, optionally followed by a named time zone."""

    fmt: str
    named_zone: bool = False

    def parse(self, value: str) -> Optional[datetime]:
        text = value
        zone = timezone.utc
        if self.named_zone:
            text, _, zone_name = value.rpartition(" ")
            offset = _NAMED_ZONES.get(zone_name.upper())
            if not text or offset is None:
                return None
            zone = timezone(timedelta(hours=offset))

        try:
            parsed = datetime.strptime(text, self.fmt)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=zone)
            return parsed.astimezone(timezone.utc)
        except (ValueError, OverflowError):
            return None


# Tried top to bottom; the first pattern consuming the whole string wins.
DATE_PATTERNS: Tuple[DatePattern, ...] = (
    DatePattern("%a, %d %b %Y %H:%M:%S %z"),
    DatePattern("%a, %d %b %Y %H:%M:%S", named_zone=True),
    DatePattern("%Y-%m-%dT%H:%M:%S%z"),
    DatePattern("%Y-%m-%dT%H:%M:%S.%f%z"),
    DatePattern("%Y-%m-%d %H:%M:%S %z"),
    DatePattern("%d %b %Y %H:%M:%S %z"),
    DatePattern("%b %d, %Y %I:%M %p"),
)


def parse_published(raw_value: Optional[str]) -> Optional[datetime]:
    """Return the UTC instant encoded by ``raw_value`` or ``None``."""
    if raw_value is None:
        return None
    value = raw_value.strip()
    if not value:
        return None

    for pattern in DATE_PATTERNS:
        parsed = pattern.parse(value)
        if parsed is not None:
            return parsed

    logger.debug("Unrecognised timestamp format: %r", value)
    return None
