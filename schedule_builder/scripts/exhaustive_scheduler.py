import itertools
from typing import List, Sequence

from schedule_builder.models import MAX_COURSES, Course, Schedule
from schedule_builder.scripts.conflicts import has_conflict
from schedule_builder.scripts.ranking import rank_schedules
from schedule_builder.scripts.scoring import score_schedule

"""
Exhaustive schedule generation.

With 5 courses of 5 sections each there are 5^5 = 3125 combinations, which is
small enough to enumerate completely. Past MAX_COURSES courses the product
grows too fast, so generation returns nothing at all instead of a partial
result.

Uses itertools.product to walk every combination of one section per course,
in course order and, within a course, in the catalog's section order. That
order is also the tie-break order of equally scored schedules once ranked.
Each combination is checked pairwise for time conflicts (see conflicts.py);
survivors are scored (see scoring.py) and emitted unranked.
"""


def generate_schedules(courses: Sequence[Course]) -> List[Schedule]:
    """
    Generates every conflict-free schedule for the selected courses.
    Args:
        courses (list): Selected courses, each with at least one section.
    Returns:
        list: Unranked schedules in enumeration order. Empty when no courses
        are selected or when more than MAX_COURSES are.
    """
    if not courses or len(courses) > MAX_COURSES:
        return []

    # A single course cannot conflict with itself: every section is a schedule
    if len(courses) == 1:
        return [
            Schedule(sections=[section], score=score_schedule([section]))
            for section in courses[0].sections
        ]

    schedules = []
    course_sections = [course.sections for course in courses]
    for combination in itertools.product(*course_sections):
        sections = list(combination)
        if has_conflict(sections):
            continue
        schedules.append(Schedule(sections=sections, score=score_schedule(sections)))

    return schedules


def build_ranked_schedules(courses: Sequence[Course]) -> List[Schedule]:
    """Generates and ranks in one step; the result is what gets shown to the student."""
    return rank_schedules(generate_schedules(courses))
