# Domain types shared by the schedulers, the selection store and the API
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from schedule_builder.scripts.meeting_time import MeetingBlock

# Neutral assumption used whenever a rating or GPA lookup comes back empty
DEFAULT_INSTRUCTOR_RATING = 3.0
DEFAULT_AVG_GPA = 3.0

# More selected courses than this and the section product gets too large to enumerate
MAX_COURSES = 5

UNRANKED = 0


class SchedulerError(Exception):
    """Base class for errors raised by the schedule builder."""


class CourseNotFound(SchedulerError):
    def __init__(self, course_id: str):
        super().__init__(f"Course {course_id!r} not found")
        self.course_id = course_id


class EmptySectionList(SchedulerError):
    def __init__(self, course_id: str):
        super().__init__(f"Course {course_id!r} has no sections")
        self.course_id = course_id


class AddResult(Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    LIMIT_REACHED = "limit_reached"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, eq=False)
class Section:
    section_id: str
    course_id: str
    course_name: str = ""
    number: str = ""
    instructors: Tuple[str, ...] = ()
    instructor_rating: float = DEFAULT_INSTRUCTOR_RATING
    avg_gpa: float = DEFAULT_AVG_GPA
    open_seats: int = 0
    waitlist: int = 0
    credits: int = 0
    meetings: Tuple[MeetingBlock, ...] = ()

    def __post_init__(self):
        if self.credits < 0:
            raise ValueError(f"Section {self.section_id} has negative credits")
        # Lists are accepted for convenience but stored as tuples to keep the section immutable
        object.__setattr__(self, "instructors", tuple(self.instructors))
        object.__setattr__(self, "meetings", tuple(self.meetings))

    def __eq__(self, other):
        if not isinstance(other, Section):
            return NotImplemented
        return self.section_id == other.section_id

    def __hash__(self):
        return hash(self.section_id)


@dataclass(eq=False)
class Course:
    course_id: str
    sections: List[Section]
    course_name: str = ""

    def __post_init__(self):
        if not self.sections:
            raise EmptySectionList(self.course_id)

    def __eq__(self, other):
        if not isinstance(other, Course):
            return NotImplemented
        return self.course_id == other.course_id

    def __hash__(self):
        return hash(self.course_id)


@dataclass(frozen=True, order=True)
class Score:
    """
    Quality score of a schedule. A schedule whose sections carry no credits
    cannot be scored; it gets UNRATED, which orders below every rated score.
    """
    is_rated: bool
    value: float = 0.0

    @classmethod
    def rated(cls, value: float) -> "Score":
        return cls(is_rated=True, value=value)

    def as_float(self) -> Optional[float]:
        return self.value if self.is_rated else None


UNRATED = Score(is_rated=False)


@dataclass(eq=False)
class Schedule:
    sections: List[Section]
    score: Score = UNRATED
    rank: int = UNRANKED
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __eq__(self, other):
        if not isinstance(other, Schedule):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def is_ranked(self) -> bool:
        return self.rank != UNRANKED

    @property
    def section_ids(self) -> List[str]:
        return [section.section_id for section in self.sections]
