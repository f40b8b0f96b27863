"""Tests for the course selection store and domain identity rules."""
import pytest

from schedule_builder.models import MAX_COURSES, AddResult, Course, EmptySectionList, Section
from schedule_builder.store import CourseSelectionStore, normalize_course_id


def _course(course_id: str) -> Course:
    return Course(course_id=course_id, sections=[Section(section_id=f"{course_id}-0101", course_id=course_id)])


def _full_store() -> CourseSelectionStore:
    store = CourseSelectionStore()
    for i in range(MAX_COURSES):
        assert store.add(_course(f"CMSC13{i}")) is AddResult.ADDED
    return store


def test_add_appends_in_order() -> None:
    store = CourseSelectionStore()
    store.add(_course("MATH140"))
    store.add(_course("CMSC131"))
    assert [c.course_id for c in store.courses] == ["MATH140", "CMSC131"]


def test_duplicate_add_rejected() -> None:
    store = CourseSelectionStore()
    assert store.add(_course("CMSC131")) is AddResult.ADDED
    assert store.add(_course("CMSC131")) is AddResult.ALREADY_PRESENT
    assert len(store) == 1


def test_duplicate_match_ignores_case() -> None:
    store = CourseSelectionStore()
    store.add(_course("CMSC131"))
    assert store.add(_course("cmsc131")) is AddResult.ALREADY_PRESENT
    assert "cmsc131" in store


def test_limit_reached_leaves_store_unchanged() -> None:
    store = _full_store()
    before = [c.course_id for c in store.courses]
    assert store.add(_course("ENGL101")) is AddResult.LIMIT_REACHED
    assert [c.course_id for c in store.courses] == before
    assert store.is_full


def test_duplicate_reported_before_limit() -> None:
    store = _full_store()
    assert store.add(_course("CMSC130")) is AddResult.ALREADY_PRESENT


def test_remove_present_course() -> None:
    store = CourseSelectionStore()
    store.add(_course("CMSC131"))
    store.add(_course("MATH140"))
    assert store.remove("cmsc131")
    assert [c.course_id for c in store.courses] == ["MATH140"]


def test_remove_absent_course_is_noop() -> None:
    store = CourseSelectionStore()
    store.add(_course("CMSC131"))
    assert not store.remove("HIST200")
    assert len(store) == 1


def test_reset_clears() -> None:
    store = _full_store()
    store.reset()
    assert len(store) == 0
    assert store.add(_course("CMSC131")) is AddResult.ADDED


def test_courses_property_is_a_copy() -> None:
    store = CourseSelectionStore()
    store.add(_course("CMSC131"))
    store.courses.clear()
    assert len(store) == 1


def test_normalize_course_id() -> None:
    assert normalize_course_id("  cmsc131 ") == "CMSC131"


def test_section_identity_is_section_id() -> None:
    a = Section(section_id="CMSC131-0101", course_id="CMSC131", open_seats=3)
    b = Section(section_id="CMSC131-0101", course_id="CMSC131", open_seats=10)
    assert a == b
    assert len({a, b}) == 1


def test_course_identity_is_course_id() -> None:
    a = _course("CMSC131")
    b = Course(course_id="CMSC131", course_name="Renamed", sections=[Section(section_id="x", course_id="CMSC131")])
    assert a == b


def test_course_without_sections_rejected() -> None:
    with pytest.raises(EmptySectionList):
        Course(course_id="CMSC999", sections=[])


def test_negative_credits_rejected() -> None:
    with pytest.raises(ValueError):
        Section(section_id="X-01", course_id="X", credits=-1)


def test_limit_cannot_exceed_max_courses() -> None:
    store = CourseSelectionStore(max_courses=MAX_COURSES + 3)
    assert store.max_courses == MAX_COURSES
    for i in range(MAX_COURSES):
        assert store.add(_course(f"CMSC13{i}")) is AddResult.ADDED
    assert store.add(_course("MATH140")) is AddResult.LIMIT_REACHED
    assert len(store) == MAX_COURSES


def test_smaller_limit_is_kept() -> None:
    store = CourseSelectionStore(max_courses=2)
    store.add(_course("CMSC131"))
    store.add(_course("CMSC132"))
    assert store.is_full
    assert store.add(_course("MATH140")) is AddResult.LIMIT_REACHED
