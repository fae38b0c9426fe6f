"""Utility constants and helpers for workhours.

Time unit constants represent durations in seconds.
These are used throughout the API for consistent time representation.
"""

import math

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400


def format_duration(seconds: float) -> str:
    """Format a duration as ``"<H>h <M>m"``.

    Both components are floored. Any non-positive duration renders as
    ``"0h 0m"``.

    Example:
        >>> format_duration(5400)
        '1h 30m'
    """
    if not seconds > 0:
        return "0h 0m"
    hours = math.floor(seconds / HOUR)
    minutes = math.floor((seconds % HOUR) / MINUTE)
    return f"{hours}h {minutes}m"


def format_hours(seconds: float) -> str:
    """Compact hour count for status text (1800 -> "0.5h", 18000 -> "5h")."""
    return f"{seconds / HOUR:g}h"
