from typing import Iterable

from livequiz.models import AnswerRecord

MAX_POINTS = 10


def points_for_answer(previous: Iterable[AnswerRecord], correct: bool, max_points: int = MAX_POINTS) -> int:
    """Points earned by an answer arriving after ``previous``.

    The first correct answer of a question earns ``max_points``, each later
    correct answer one point less, never below zero. Wrong answers earn
    nothing. ``previous`` must not include the answer being scored.
    """
    if not correct:
        return 0
    rank = sum(1 for a in previous if a.correct)
    return max(max_points - rank, 0)
