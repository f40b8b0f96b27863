"""
Weekly meeting blocks and the overlap predicate shared by every scheduler.

Times are kept as decimal hours from midnight (13.5 is 1:30 PM) so that two
blocks can be compared with plain float arithmetic. A block without a fixed
time (online / asynchronous meetings come back from the catalog with empty
clock strings) gets NO_FIXED_TIME for both ends and never conflicts.

Day strings are tokenised against a fixed set of codes instead of checked
with substring containment: "Th" contains "T", and "Sa"/"Su" both start with
"S", so `"T" in "Th"` style checks report days that are not there.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable

NO_FIXED_TIME = math.inf


class Weekday(Enum):
    MONDAY = "M"
    TUESDAY = "Tu"
    WEDNESDAY = "W"
    THURSDAY = "Th"
    FRIDAY = "F"
    SATURDAY = "Sa"
    SUNDAY = "Su"

    @property
    def index(self) -> int:
        """0 for Monday through 6 for Sunday, matching date.weekday()."""
        return list(Weekday).index(self)


# Two-letter codes first so "Tu" is never read as "T" + "u".
_DAY_TOKEN = re.compile(r"Tu|Th|Sa|Su|M|W|F|T|S")

# Lone "T" and "S" show up in hand-entered data for Tuesday and Saturday.
_DAY_ALIASES = {"T": Weekday.TUESDAY, "S": Weekday.SATURDAY}

_CLOCK = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([ap]m)\s*$", re.IGNORECASE)


def parse_days(days: str) -> FrozenSet[Weekday]:
    """
    Converts a compact day string such as "MWF" or "TuTh" into weekdays.
    Args:
        days (str): Concatenated day codes. An empty string means no days.
    Returns:
        frozenset: The weekdays the block recurs on.
    Raises:
        ValueError: If the string contains anything that is not a day code.
    """
    parsed = set()
    pos = 0
    text = days.replace(" ", "")
    while pos < len(text):
        match = _DAY_TOKEN.match(text, pos)
        if match is None:
            raise ValueError(f"Unrecognised day code in {days!r} at position {pos}")
        token = match.group(0)
        parsed.add(_DAY_ALIASES.get(token) or Weekday(token))
        pos = match.end()
    return frozenset(parsed)


def parse_clock(time_str: str) -> float:
    """
    Converts a clock string in "H:MMam" / "H:MMpm" format to decimal hours.
    A 12 on the am side stays 12 and any pm hour below 12 gains 12, so
    "12:30pm" is 12.5 and "1:30pm" is 13.5.
    Args:
        time_str (str): Clock string (e.g., "9:00am"). Empty means no fixed time.
    Returns:
        float: Hours since midnight, or NO_FIXED_TIME for an empty string.
    """
    if not time_str or not time_str.strip():
        return NO_FIXED_TIME

    match = _CLOCK.match(time_str)
    if match is None:
        raise ValueError(f"Expected a time like '9:00am', got {time_str!r}")

    hours, minutes, meridiem = int(match.group(1)), int(match.group(2)), match.group(3).lower()
    if hours > 12 or minutes > 59:
        raise ValueError(f"Clock value out of range: {time_str!r}")
    if meridiem == "pm" and hours < 12:
        hours += 12
    return hours + minutes / 60


@dataclass(frozen=True)
class MeetingBlock:
    days: FrozenSet[Weekday]
    start: float
    end: float
    start_time: str = ""
    end_time: str = ""
    room: str = ""
    building: str = ""
    classtype: str = ""

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(
                f"Meeting starts after it ends ({self.start_time or self.start} > "
                f"{self.end_time or self.end})"
            )

    @classmethod
    def from_times(cls, days: str, start_time: str, end_time: str, **extra) -> "MeetingBlock":
        """Builds a block from catalog text. Either clock empty makes the whole block unscheduled."""
        start = parse_clock(start_time)
        end = parse_clock(end_time)
        if math.isinf(start) or math.isinf(end):
            start = end = NO_FIXED_TIME
        return cls(
            days=parse_days(days),
            start=start,
            end=end,
            start_time=start_time,
            end_time=end_time,
            **extra,
        )

    @property
    def has_fixed_time(self) -> bool:
        return not (math.isinf(self.start) or math.isinf(self.end))

    def shares_day(self, other: "MeetingBlock") -> bool:
        return not self.days.isdisjoint(other.days)

    def shared_days(self, other: "MeetingBlock") -> FrozenSet[Weekday]:
        return self.days & other.days


def overlaps(a: MeetingBlock, b: MeetingBlock) -> bool:
    """
    Checks whether two blocks collide: at least one common weekday and
    intersecting time ranges. Ranges that only touch at an endpoint count as
    overlapping, so a class ending at 10:00 and one starting at 10:00 on the
    same day conflict.
    """
    if not a.has_fixed_time or not b.has_fixed_time:
        return False
    if not a.shares_day(b):
        return False
    return a.start <= b.end and b.start <= a.end


def day_codes(days: Iterable[Weekday]) -> str:
    """Inverse of parse_days, in Monday-first order."""
    return "".join(day.value for day in sorted(days, key=lambda d: d.index))
