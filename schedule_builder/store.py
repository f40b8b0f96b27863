# Ordered, de-duplicated list of the courses a student has picked
from typing import List

from schedule_builder.models import MAX_COURSES, AddResult, Course


def normalize_course_id(course_id: str) -> str:
    """Course ids are compared in their canonical uppercase form (e.g. "cmsc131" -> "CMSC131")."""
    return course_id.strip().upper()


class CourseSelectionStore:
    def __init__(self, max_courses: int = MAX_COURSES):
        # the scheduler never enumerates more than MAX_COURSES courses
        self.max_courses = min(max_courses, MAX_COURSES)
        self._courses: List[Course] = []

    @property
    def courses(self) -> List[Course]:
        """A copy of the selection in insertion order."""
        return list(self._courses)

    def __len__(self):
        return len(self._courses)

    def __contains__(self, course_id) -> bool:
        wanted = normalize_course_id(course_id)
        return any(normalize_course_id(c.course_id) == wanted for c in self._courses)

    @property
    def is_full(self) -> bool:
        return len(self._courses) >= self.max_courses

    def add(self, course: Course) -> AddResult:
        """
        Appends a course unless it is already selected or the store is full.
        A duplicate is reported as ALREADY_PRESENT even when the store is also full.
        """
        if course.course_id in self:
            return AddResult.ALREADY_PRESENT
        if self.is_full:
            return AddResult.LIMIT_REACHED
        self._courses.append(course)
        return AddResult.ADDED

    def remove(self, course_id: str) -> bool:
        """Removes the course if selected. Returns False (not an error) when it was not."""
        wanted = normalize_course_id(course_id)
        before = len(self._courses)
        self._courses = [c for c in self._courses if normalize_course_id(c.course_id) != wanted]
        return len(self._courses) != before

    def reset(self):
        self._courses = []
