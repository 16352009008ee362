"""Duration parsing for configuration values such as the shutdown timeout."""

import re


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""


_ISO8601_PATTERN = re.compile(
    r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$"
)
_HUMAN_PATTERN = re.compile(r"(\d+)\s*([smhd])")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(duration_str: str) -> int:
    """
    Parse a duration string to whole seconds.

    Accepts human-readable values ("30s", "1m30s", "2h") and ISO-8601
    durations ("PT30S", "PT1M30S", "P1D").

    Raises:
        DurationParseError: If the string is empty, malformed or zero

    Examples:
        >>> parse_duration("30s")
        30
        >>> parse_duration("PT1M30S")
        90
    """
    if not isinstance(duration_str, str):
        raise DurationParseError(f"Duration must be a string, got {type(duration_str).__name__}")

    duration_str = duration_str.strip()
    if not duration_str:
        raise DurationParseError("Duration string cannot be empty")

    if duration_str.upper().startswith("P"):
        total = _parse_iso8601(duration_str.upper())
    else:
        total = _parse_human_readable(duration_str.lower())

    if total == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return total


def _parse_iso8601(duration_str: str) -> int:
    match = _ISO8601_PATTERN.match(duration_str)
    if not match or duration_str in ("P", "PT"):
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{duration_str}'. "
            "Expected format like 'PT30S', 'PT1M30S' or 'P1D'"
        )

    days, hours, minutes, seconds = match.groups()
    return (
        int(days or 0) * _UNIT_SECONDS["d"]
        + int(hours or 0) * _UNIT_SECONDS["h"]
        + int(minutes or 0) * _UNIT_SECONDS["m"]
        + int(float(seconds or 0))
    )


def _parse_human_readable(duration_str: str) -> int:
    matches = _HUMAN_PATTERN.findall(duration_str)
    if not matches:
        raise DurationParseError(
            f"Invalid duration format: '{duration_str}'. "
            "Expected format like '30s', '5m', '1h' or combinations like '1m30s'"
        )

    # Reject leftovers such as "10x" or "5m!"
    parsed = "".join(f"{num}{unit}" for num, unit in matches)
    if parsed != re.sub(r"\s+", "", duration_str):
        raise DurationParseError(
            f"Invalid characters in duration: '{duration_str}'. "
            "Use only digits and units: s, m, h, d"
        )

    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in matches)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = 1,
    max_seconds: int = 3600,
    label: str = "Duration",
) -> None:
    """
    Check that a parsed duration lies within [min_seconds, max_seconds].

    Raises:
        DurationParseError: If duration is outside the valid range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"{label} too short: {_humanize(duration_seconds)}. "
            f"Minimum is {_humanize(min_seconds)}."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"{label} too long: {_humanize(duration_seconds)}. "
            f"Maximum is {_humanize(max_seconds)}."
        )


def _humanize(seconds: int) -> str:
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return f"{seconds} second{'s' if seconds != 1 else ''}"
