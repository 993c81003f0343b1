"""Conversion between UTC offsets and the firmware's timezone byte.

The firmware stores the timezone as ``(offset_hours + 12) * 4``, i.e. a
quarter-hour count starting at UTC-12:00.
"""

import re

# ISO-8601 timestamp ending in an offset, e.g. 2013-05-01T10:00:00-05:00
ISO_TIMESTAMP_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?([+-])(\d{2}):?(\d{2})"
)
# Bare offset, e.g. -0500 or +05:30
OFFSET_PATTERN = re.compile(r"^([+-])(\d{2}):?(\d{2})")

QUARTER_HOURS_PER_HOUR = 4
HOURS_BEFORE_UTC = 12


def parse_utc_offset(value: int | str) -> int:
    """Convert a UTC offset to minutes.

    Args:
        value: Minutes as an integer, an ISO-8601 timestamp with an offset
            suffix, or a bare ``±HHMM`` / ``±HH:MM`` offset

    Returns:
        Offset in minutes east of UTC

    Raises:
        ValueError: If the string holds no recognizable offset
    """
    if isinstance(value, int):
        return value

    match = ISO_TIMESTAMP_PATTERN.search(value) or OFFSET_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Unrecognized UTC offset: {value!r}")

    sign, hours, minutes = match.groups()
    total = int(hours) * 60 + int(minutes)
    return -total if sign == "-" else total


def encode_timezone(value: int | str) -> int:
    """Encode a UTC offset into the firmware timezone byte.

    Minutes are truncated to whole quarter hours toward zero.
    """
    minutes = parse_utc_offset(value)
    sign = -1 if minutes < 0 else 1
    hours, remainder = divmod(abs(minutes), 60)
    fraction = (remainder // 15) / QUARTER_HOURS_PER_HOUR
    offset_hours = sign * (hours + fraction)
    return int((offset_hours + HOURS_BEFORE_UTC) * QUARTER_HOURS_PER_HOUR)


def decode_timezone(byte: int) -> int:
    """Decode a firmware timezone byte back into UTC offset minutes."""
    return byte * 15 - HOURS_BEFORE_UTC * 60
