"""Parsing of human-readable duration strings.

Token lifetimes are configured with short strings such as ``"15m"`` or
``"7d"``. This module turns them into :class:`datetime.timedelta` values.
"""

import re
from datetime import timedelta

_DURATION_PATTERN = re.compile(r"^(?P<amount>\d+)\s*(?P<unit>ms|s|m|h|d|w)?$", re.IGNORECASE)

_UNIT_SECONDS: dict[str, float] = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
}


def parse_duration(value: str | int) -> timedelta:
    """Parse a duration string into a timedelta.

    Accepted forms are an integer amount followed by one of the units
    ``ms``, ``s``, ``m``, ``h``, ``d`` or ``w``. A bare integer (string or
    int) is interpreted as seconds.

    Args:
        value: The duration to parse, e.g. ``"7d"``, ``"90m"`` or ``3600``.

    Returns:
        The parsed duration.

    Raises:
        ValueError: If the value is malformed, zero or negative.

    Example:
        >>> parse_duration("7d")
        datetime.timedelta(days=7)
        >>> parse_duration("90m")
        datetime.timedelta(seconds=5400)
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")

    if isinstance(value, int):
        if value <= 0:
            raise ValueError(f"Duration must be positive, got {value}")
        return timedelta(seconds=value)

    match = _DURATION_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")

    amount = int(match.group("amount"))
    unit = (match.group("unit") or "s").lower()
    if amount <= 0:
        raise ValueError(f"Duration must be positive, got {value!r}")

    try:
        return timedelta(seconds=amount * _UNIT_SECONDS[unit])
    except OverflowError as e:
        raise ValueError(f"Duration is too large: {value!r}") from e
