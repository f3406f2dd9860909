"""Duration and count parsing/formatting for editor text fields"""

import math
import re
from typing import Optional


class ParseError(ValueError):
    """Raised when field text does not match its grammar"""

    pass


# [sign] [[hours:]minutes:] seconds[.fraction]
DURATION_PATTERN = re.compile(
    r"^\s*(?P<sign>[-+−]?)\s*"
    r"(?:(?P<first>\d+):)?"
    r"(?:(?P<second>\d+):)?"
    r"(?P<seconds>\d+(?:\.\d*)?|\.\d+)\s*$"
)

COUNT_PATTERN = re.compile(r"^\s*(\d+)\s*$")

# Longest duration a field accepts, in seconds
MAX_DURATION = 1e9


def parse_duration(text: str) -> Optional[float]:
    """Parse a duration into seconds.

    Empty text means "clear" and parses to None.

    Raises:
        ParseError: If the text is not a duration
    """
    if not text.strip():
        return None

    match = DURATION_PATTERN.match(text)
    if not match:
        raise ParseError(f"not a duration: {text!r}")

    # A single "x:" prefix is minutes, two of them are hours and minutes
    first, second = match.group("first"), match.group("second")
    try:
        if first is not None and second is not None:
            hours, minutes = int(first), int(second)
        elif first is not None:
            hours, minutes = 0, int(first)
        else:
            hours, minutes = 0, 0
        seconds = hours * 3600 + minutes * 60 + float(match.group("seconds"))
    except (OverflowError, ValueError):
        raise ParseError(f"duration out of range: {text!r}")
    if not math.isfinite(seconds) or seconds > MAX_DURATION:
        raise ParseError(f"duration out of range: {text!r}")
    if match.group("sign") in ("-", "−"):
        seconds = -seconds
    return seconds


def parse_count(text: str) -> Optional[int]:
    """Parse a non-negative integer; empty text parses to None.

    Raises:
        ParseError: If the text is not a non-negative integer
    """
    if not text.strip():
        return None

    match = COUNT_PATTERN.match(text)
    if not match:
        raise ParseError(f"not a count: {text!r}")
    try:
        return int(match.group(1))
    except ValueError:
        raise ParseError(f"count out of range: {text!r}")


def is_duration(text: str) -> bool:
    try:
        parse_duration(text)
    except ParseError:
        return False
    return True


def is_count(text: str) -> bool:
    try:
        parse_count(text)
    except ParseError:
        return False
    return True


def format_duration(seconds: Optional[float]) -> str:
    """Format seconds the way the editor shows them, e.g. 1:23.45

    Truncated to hundredths; empty string for an absent time.
    """
    if seconds is None:
        return ""

    sign = "-" if seconds < 0 else ""
    # Round to milliseconds first so 83.45 doesn't truncate to 83.44
    hundredths = int(round(abs(seconds) * 1000)) // 10
    total_seconds, fraction = divmod(hundredths, 100)
    minutes, secs = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes, 60)

    if hours:
        return f"{sign}{hours}:{minutes:02d}:{secs:02d}.{fraction:02d}"
    if minutes:
        return f"{sign}{minutes}:{secs:02d}.{fraction:02d}"
    return f"{sign}{secs}.{fraction:02d}"
