"""Tests for schedule scoring."""
import pytest

from schedule_builder.models import UNRATED, Score, Section
from schedule_builder.scripts.scoring import score_schedule


def _section(section_id: str, gpa: float, rating: float, credits: int) -> Section:
    return Section(
        section_id=section_id,
        course_id=section_id,
        avg_gpa=gpa,
        instructor_rating=rating,
        credits=credits,
    )


def test_single_section_score() -> None:
    assert score_schedule([_section("A", 3.0, 4.0, 3)]) == Score.rated(12.0)


def test_credit_weighted_average() -> None:
    sections = [_section("A", 3.0, 4.0, 4), _section("B", 2.0, 3.0, 2)]
    # (12*4 + 6*2) / 6 = 10
    assert score_schedule(sections).value == pytest.approx(10.0)


def test_zero_gpa_and_rating_score_zero_not_unrated() -> None:
    sections = [_section(sid, 0.0, 0.0, 3) for sid in ("A", "B", "C")]
    result = score_schedule(sections)
    assert result.is_rated
    assert result.value == 0.0


def test_zero_credits_is_unrated() -> None:
    sections = [_section("A", 3.5, 4.5, 0), _section("B", 2.0, 3.0, 0)]
    assert score_schedule(sections) == UNRATED


def test_empty_schedule_is_unrated() -> None:
    assert score_schedule([]) == UNRATED


def test_zero_credit_section_does_not_count() -> None:
    sections = [_section("A", 3.0, 4.0, 3), _section("LAB", 1.0, 1.0, 0)]
    assert score_schedule(sections).value == pytest.approx(12.0)


def test_unrated_orders_below_any_rated_score() -> None:
    assert UNRATED < Score.rated(0.0)
    assert Score.rated(-1.0) > UNRATED
    assert Score.rated(1.0) < Score.rated(2.0)


def test_as_float() -> None:
    assert Score.rated(2.5).as_float() == 2.5
    assert UNRATED.as_float() is None
