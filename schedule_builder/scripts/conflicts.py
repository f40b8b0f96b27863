import itertools
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from schedule_builder.models import Section
from schedule_builder.scripts.meeting_time import MeetingBlock, Weekday, overlaps


@dataclass(frozen=True)
class Conflict:
    first: Section
    second: Section
    day: Weekday
    first_meeting: MeetingBlock
    second_meeting: MeetingBlock


def _overlapping_meetings(
    sections: Sequence[Section],
) -> Iterator[Tuple[Section, Section, MeetingBlock, MeetingBlock]]:
    # Every unordered pair of sections, then every pair of their meetings
    for first, second in itertools.combinations(sections, 2):
        for a in first.meetings:
            for b in second.meetings:
                if overlaps(a, b):
                    yield first, second, a, b


def has_conflict(sections: Sequence[Section]) -> bool:
    """
    Checks whether any two sections in a candidate schedule meet at the same
    time on a shared weekday. Stops at the first overlapping pair.
    Args:
        sections (list): One section per course, in course order.
    Returns:
        bool: True if the candidate has a time conflict.
    """
    return next(_overlapping_meetings(sections), None) is not None


def find_conflicts(sections: Sequence[Section]) -> List[Conflict]:
    """
    Lists every conflict in a set of sections, one entry per shared weekday.
    Used to explain why a hand-picked schedule is invalid.
    """
    conflicts = []
    for first, second, a, b in _overlapping_meetings(sections):
        for day in sorted(a.shared_days(b), key=lambda d: d.index):
            conflicts.append(Conflict(first, second, day, a, b))
    return conflicts
