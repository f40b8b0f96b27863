from typing import Sequence

from schedule_builder.models import UNRATED, Score, Section


def score_schedule(sections: Sequence[Section]) -> Score:
    """
    Scores a schedule by the credit-weighted mean of avg_gpa * instructor_rating
    across its sections. Higher is better.
    Args:
        sections (list): The sections making up the schedule.
    Returns:
        Score: The rated score, or UNRATED when the sections carry no credits.
    """
    total_credits = sum(section.credits for section in sections)
    if total_credits == 0:
        return UNRATED

    weighted = sum(
        section.avg_gpa * section.instructor_rating * section.credits
        for section in sections
    )
    return Score.rated(weighted / total_credits)
