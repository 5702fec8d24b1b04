import itertools

import pytest

from classflow.core.entities import Student
from classflow.core.interfaces import GradeSource
from classflow.core.scheduler import VirtualScheduler
from classflow.services import ClassList, MemorySink, RecordingObserver


class FixedGradeSource(GradeSource):
    """Hands out the given grades in order, repeating the last one."""

    def __init__(self, *grades):
        self._grades = itertools.chain(grades, itertools.repeat(grades[-1]))
        self.draws = 0

    def draw(self) -> int:
        self.draws += 1
        return next(self._grades)


@pytest.fixture()
def scheduler():
    return VirtualScheduler()


@pytest.fixture()
def grades():
    return FixedGradeSource(80)


@pytest.fixture()
def recorder():
    return RecordingObserver()


@pytest.fixture()
def make_student(scheduler, grades, recorder):
    def _make(full_name="Ada", email="ada@example.com", observer=recorder):
        return Student(full_name, email, observer, scheduler=scheduler, grade_source=grades)
    return _make


@pytest.fixture()
def roster_sink():
    return MemorySink()


@pytest.fixture()
def class_list(recorder, roster_sink):
    return ClassList(recorder, sink=roster_sink)
