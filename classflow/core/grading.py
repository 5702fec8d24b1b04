"""
Synthetic grade generation and grade aggregation.
"""

import random
from typing import Iterable, Optional

from .config import MAX_GRADE, MIN_GRADE
from .exceptions import ValidationError
from .interfaces import GradeSource


class RandomGradeSource(GradeSource):
    """Draws uniformly distributed integer grades, inclusive on both ends."""

    def __init__(self, seed: Optional[int] = None, min_grade: int = MIN_GRADE, max_grade: int = MAX_GRADE):
        if min_grade > max_grade:
            raise ValidationError(f"min_grade {min_grade} exceeds max_grade {max_grade}")
        self._random = random.Random(seed)
        self._min_grade = min_grade
        self._max_grade = max_grade

    def draw(self) -> int:
        return self._random.randint(self._min_grade, self._max_grade)


def average_grade(grades: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None when there is nothing to average."""
    grades = list(grades)
    if not grades:
        return None
    return sum(grades) / len(grades)
