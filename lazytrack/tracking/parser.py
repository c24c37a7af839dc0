"""Parsing and formatting of logged amounts ("2h", "1h30m", "8x", "3 times")."""

import re

from .models import Count, Duration, ParsedAmount

COUNT_SUFFIXES = ("x", "times")

# A bare number is an hour count: "5" -> 5h, "1.5" -> 1h30m.
_BARE_HOURS_RE = re.compile(r"^(?P<hours>\d+(?:\.\d+)?)$")
_DURATION_RE = re.compile(r"^(?:(?P<hours>\d+(?:\.\d+)?)h)?(?:(?P<minutes>\d+)m?)?$")
_COUNT_RE = re.compile(r"^\d+$")


class ParseError(ValueError):
    """Raised when an amount cannot be parsed."""


class EmptyInput(ParseError):
    pass


class InvalidCount(ParseError):
    pass


class InvalidDurationFormat(ParseError):
    pass


def is_count_based(text: str) -> bool:
    """Check whether the input describes repetitions rather than time."""
    return text.strip().lower().endswith(COUNT_SUFFIXES)


def parse(text: str) -> ParsedAmount:
    """
    Parse a logged amount.

    Args:
        text: User input such as "2h", "30m", "1h30m", "1.5h", "8x" or "3 times"

    Returns:
        Duration for time amounts, Count for repetitions

    Raises:
        EmptyInput: Input is blank
        InvalidCount: Count suffix present but the number is missing or not positive
        InvalidDurationFormat: Input is not a recognizable duration
    """
    text = text.strip()
    if not text:
        raise EmptyInput("empty duration")

    if is_count_based(text):
        return _parse_count(text)

    return _parse_duration(text)


def _parse_count(text: str) -> Count:
    lowered = text.lower()
    for suffix in COUNT_SUFFIXES:
        if lowered.endswith(suffix):
            number = lowered[: -len(suffix)].strip()
            break

    # Zero is rejected: logging "0x" is a mistake, not an entry
    if not _COUNT_RE.match(number) or int(number) <= 0:
        raise InvalidCount(f"invalid count format: {text}")

    return Count(int(number))


def _parse_duration(text: str) -> Duration:
    match = _BARE_HOURS_RE.match(text) or _DURATION_RE.match(text)
    if not match:
        raise InvalidDurationFormat(f"invalid duration format: {text}")

    hours = 0
    minutes = 0

    raw_hours = match.group("hours")
    if raw_hours:
        value = float(raw_hours)
        hours = int(value)
        minutes += int((value - hours) * 60)

    raw_minutes = match.groupdict().get("minutes")
    if raw_minutes:
        minutes += int(raw_minutes)

    if minutes >= 60:
        hours += minutes // 60
        minutes %= 60

    return Duration(hours=hours, minutes=minutes)


def format_duration(duration: Duration) -> str:
    """Render a duration as "1h30m", "2h" or "45m"."""
    if duration.hours > 0 and duration.minutes > 0:
        return f"{duration.hours}h{duration.minutes}m"
    elif duration.hours > 0:
        return f"{duration.hours}h"
    else:
        return f"{duration.minutes}m"


def format_count(count: int) -> str:
    """Render a count as "1 time" or "N times"."""
    if count == 1:
        return "1 time"
    return f"{count} times"


def format_amount(amount: ParsedAmount) -> str:
    """Render either variant for display."""
    if isinstance(amount, Count):
        return format_count(amount.n)
    return format_duration(amount)


def to_log_fields(amount: ParsedAmount) -> tuple[str, int]:
    """
    Split a parsed amount into the (duration, count) pair stored on a log entry.

    Duration entries carry a normalized duration string and a zero count;
    count entries carry an empty duration string.
    """
    if isinstance(amount, Count):
        return "", amount.n
    return format_duration(amount), 0
