"""Tests for the pairwise conflict detector."""
from schedule_builder.models import Section
from schedule_builder.scripts.conflicts import find_conflicts, has_conflict
from schedule_builder.scripts.meeting_time import MeetingBlock, Weekday


def _section(section_id: str, *meetings) -> Section:
    return Section(
        section_id=section_id,
        course_id=section_id.split("-")[0],
        credits=3,
        meetings=[MeetingBlock.from_times(*m) for m in meetings],
    )


def test_no_sections_no_conflict() -> None:
    assert not has_conflict([])


def test_single_section_never_conflicts() -> None:
    # Two meetings of the same section on the same slot are not checked against each other
    sec = _section("A-01", ("M", "9:00am", "9:50am"), ("M", "9:00am", "9:50am"))
    assert not has_conflict([sec])


def test_overlap_on_shared_day() -> None:
    a = _section("X-01", ("MWF", "9:00am", "9:50am"))
    b = _section("Y-01", ("M", "9:30am", "10:00am"))
    assert has_conflict([a, b])


def test_same_time_different_days() -> None:
    a = _section("X-01", ("MWF", "9:00am", "9:50am"))
    b = _section("Y-01", ("TuTh", "9:00am", "9:50am"))
    assert not has_conflict([a, b])


def test_back_to_back_classes_conflict() -> None:
    a = _section("X-01", ("M", "9:00am", "10:00am"))
    b = _section("Y-01", ("M", "10:00am", "10:50am"))
    assert has_conflict([a, b])


def test_conflict_found_in_second_meeting() -> None:
    a = _section("X-01", ("MWF", "9:00am", "9:50am"), ("Tu", "2:00pm", "2:50pm"))
    b = _section("Y-01", ("TuTh", "2:30pm", "3:45pm"))
    assert has_conflict([a, b])


def test_conflict_between_first_and_last_of_three() -> None:
    a = _section("X-01", ("M", "9:00am", "9:50am"))
    b = _section("Y-01", ("Tu", "9:00am", "9:50am"))
    c = _section("Z-01", ("M", "9:15am", "9:45am"))
    assert has_conflict([a, b, c])
    assert not has_conflict([a, b])
    assert not has_conflict([b, c])


def test_conflict_symmetry() -> None:
    cases = [
        (_section("X-01", ("MWF", "9:00am", "9:50am")), _section("Y-01", ("W", "9:45am", "10:30am"))),
        (_section("X-01", ("MWF", "9:00am", "9:50am")), _section("Y-01", ("TuTh", "9:00am", "9:50am"))),
        (_section("X-01", ("", "", "")), _section("Y-01", ("M", "9:00am", "9:50am"))),
    ]
    for a, b in cases:
        assert has_conflict([a, b]) == has_conflict([b, a])


def test_online_section_never_conflicts() -> None:
    online = _section("X-ESG1", ("", "", ""))
    busy = _section("Y-01", ("MTuWThF", "8:00am", "6:00pm"))
    assert not has_conflict([online, busy])


def test_find_conflicts_lists_each_shared_day() -> None:
    a = _section("X-01", ("MWF", "9:00am", "9:50am"))
    b = _section("Y-01", ("MW", "9:30am", "10:00am"))
    conflicts = find_conflicts([a, b])
    assert [c.day for c in conflicts] == [Weekday.MONDAY, Weekday.WEDNESDAY]
    assert all(c.first == a and c.second == b for c in conflicts)


def test_find_conflicts_empty_when_valid() -> None:
    a = _section("X-01", ("MWF", "9:00am", "9:50am"))
    b = _section("Y-01", ("MWF", "11:00am", "11:50am"))
    assert find_conflicts([a, b]) == []
