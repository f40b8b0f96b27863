from typing import List, Sequence

from schedule_builder.models import Schedule


def rank_schedules(schedules: Sequence[Schedule]) -> List[Schedule]:
    """
    Orders schedules best first and numbers them 1, 2, 3, ...
    The sort is stable, so schedules with equal scores keep the order the
    enumerator produced them in. Unrated schedules end up last.
    """
    # sorted() keeps equal elements in input order even with reverse=True
    ranked = sorted(schedules, key=lambda schedule: schedule.score, reverse=True)
    for index, schedule in enumerate(ranked):
        schedule.rank = index + 1
    return ranked
