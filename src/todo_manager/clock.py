"""Time-of-day greeting and 12-hour clock display.

All functions here are pure; the controller decides when to call them.

Example:
    >>> state = compute_clock(datetime(2020, 8, 20, 20, 5))
    >>> state.time_text
    '8:05 PM'
    >>> state.greeting
    'Good Evening'
"""

from dataclasses import dataclass
from datetime import datetime

CLOCK_INTERVAL_SECONDS = 60.0

# Shown by renderers until the first tick.
PLACEHOLDER_TIME_TEXT = "8:88 PM"
PLACEHOLDER_GREETING = "Good Evening"

MORNING = "Good Morning"
AFTERNOON = "Good Afternoon"
EVENING = "Good Evening"


@dataclass(frozen=True)
class ClockState:
    """Display values derived from the wall clock."""

    hour12: int
    minute: int
    meridiem: str
    greeting: str

    @property
    def minute_text(self) -> str:
        return double_digit(self.minute)

    @property
    def time_text(self) -> str:
        return f"{self.hour12}:{self.minute_text} {self.meridiem}"


def to_hour12(hour: int) -> int:
    """Convert a 0-23 hour into 12-hour format (0 -> 12, 13 -> 1)."""
    if hour == 0:
        return 12
    if hour > 12:
        return hour - 12
    return hour


def meridiem(hour: int) -> str:
    return "PM" if hour >= 12 else "AM"


def double_digit(value: int) -> str:
    """Zero-pad a value below 10, so 5 -> "05"."""
    return f"0{value}" if value < 10 else str(value)


def greeting_for(hour: int) -> str:
    """Pick the greeting for a 0-23 hour."""
    if hour < 12:
        return MORNING
    elif 12 <= hour < 17:
        return AFTERNOON
    return EVENING


def compute_clock(now: datetime) -> ClockState:
    """Derive the clock display for a point in time."""
    return ClockState(
        hour12=to_hour12(now.hour),
        minute=now.minute,
        meridiem=meridiem(now.hour),
        greeting=greeting_for(now.hour),
    )
