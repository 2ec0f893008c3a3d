"""
Reading-time estimates.

Catalog books carry a free-text ``reading_time`` such as ``"4-6 hours"`` or
``"< 1 hour"``; the time-based filters need a number of hours from it.
"""

import re
from typing import Dict

WORDS_PER_PAGE = 250
DEFAULT_HOURS = 4.0

WPM: Dict[str, int] = {
    "slow": 150,
    "average": 250,
    "fast": 400,
}

_LESS_THAN_RE = re.compile(r"<\s*(\d+)\s*hour", re.IGNORECASE)
_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)\s*hour", re.IGNORECASE)
_SINGLE_RE = re.compile(r"(\d+)\+?\s*hour", re.IGNORECASE)


def estimate_hours_from_string(reading_time: str) -> float:
    """Turn a reading-time label into a representative number of hours."""
    text = reading_time or ""

    match = _LESS_THAN_RE.search(text)
    if match:
        return max(0.5, int(match.group(1)) - 0.5)

    match = _RANGE_RE.search(text)
    if match:
        return (int(match.group(1)) + int(match.group(2))) / 2

    match = _SINGLE_RE.search(text)
    if match:
        return float(match.group(1))

    return DEFAULT_HOURS


def estimate_reading_time(pages: int, speed: str = "average") -> str:
    """Bucket a page count into the label format used by the catalog."""
    minutes = pages * WORDS_PER_PAGE / WPM.get(speed, WPM["average"])
    hours = -(-minutes // 60)  # ceil
    if hours < 1:
        return "< 1 hour"
    if hours < 2:
        return "1-2 hours"
    if hours < 4:
        return "2-4 hours"
    if hours < 6:
        return "4-6 hours"
    if hours < 8:
        return "6-8 hours"
    if hours < 12:
        return "8-12 hours"
    return "12+ hours"