"""Parse and format durations as they appear on certificate resources.

Certificate resources express duration and renewBefore as Go-style duration
strings such as ``2160h`` or ``1h30m``. A ``d`` unit is accepted as well
since operators commonly think of certificate lifetimes in days.
"""

import re
from datetime import timedelta

_UNITS = {
    "d": timedelta(days=1),
    "h": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
    "ms": timedelta(milliseconds=1),
    "us": timedelta(microseconds=1),
    "µs": timedelta(microseconds=1),
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|us|µs|d|h|m|s)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration string like '2160h', '90d', '1h30m' or '1.5s'.

    Args:
        text: Duration string, optionally signed; '0' alone means zero

    Returns:
        Parsed timedelta

    Raises:
        ValueError: If the string is empty, contains unknown units or is out of range
    """
    value = text.strip()
    if not value:
        raise ValueError("Cannot parse empty duration")

    sign = 1
    if value[0] in "+-":
        sign = -1 if value[0] == "-" else 1
        value = value[1:]

    if value == "0":
        return timedelta(0)

    total = timedelta(0)
    position = 0
    try:
        while position < len(value):
            match = _COMPONENT.match(value, position)
            if not match:
                raise ValueError(f"Cannot parse duration: {text!r}")
            amount, unit = match.groups()
            total += _UNITS[unit] * float(amount)
            position = match.end()
    except OverflowError as e:
        raise ValueError(f"Duration out of range: {text!r}") from e

    if position == 0:
        raise ValueError(f"Cannot parse duration: {text!r}")

    return total * sign


def format_duration(delta: timedelta) -> str:
    """Render a timedelta the way Go prints time.Duration (e.g. '2160h0m0s', '40m0s')."""
    if delta == timedelta(0):
        return "0s"

    sign = "-" if delta < timedelta(0) else ""
    micros = abs(delta) // timedelta(microseconds=1)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim(micros, 1_000)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = _trim(rest, 1_000_000)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim(value: int, unit: int) -> str:
    """Format value/unit as a decimal without trailing zeros."""
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")
