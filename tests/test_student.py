import asyncio
from fractions import Fraction

import pytest

from classflow.core.config import Settings
from classflow.core.entities import Student
from classflow.core.enums import AssignmentStatus
from classflow.core.exceptions import SchedulingError
from classflow.core.grading import RandomGradeSource
from tests.conftest import FixedGradeSource

RELEASED = AssignmentStatus.RELEASED
WORKING = AssignmentStatus.WORKING
SUBMITTED = AssignmentStatus.SUBMITTED
PASS = AssignmentStatus.PASS
FAIL = AssignmentStatus.FAIL


def assert_grade_invariant(student):
    for a in student.assignments:
        assert (a.status in (PASS, FAIL)) == (a.grade is not None)
        if a.grade is not None:
            assert (a.status == PASS) == (a.grade > 50)


def test_unknown_assignment_returns_sentinel_without_creating(make_student, recorder):
    ada = make_student()
    assert ada.get_assignment_status("HW9") == AssignmentStatus.NOT_ASSIGNED
    assert ada.assignments == ()
    assert recorder.notifications == []


def test_update_without_grade_only_releases(make_student, recorder):
    ada = make_student()
    ada.update_assignment_status("HW1")
    ada.update_assignment_status("HW1")

    assert ada.get_assignment_status("HW1") == RELEASED
    assert recorder.messages == ["Observer → Ada, HW1 has been released."]


def test_scenario_b_grade_on_fresh_student(make_student, recorder):
    ada = make_student()
    ada.update_assignment_status("HW2", 75)

    assert recorder.statuses("Ada", "HW2") == [RELEASED, PASS]
    assert ada.get_assignment_status("HW2") == PASS
    assert ada.get_grade() == 75


@pytest.mark.parametrize("bad_grade", ["75", True, float("nan"), [75], {"grade": 75}])
def test_non_numeric_grade_is_ignored(make_student, bad_grade):
    ada = make_student()
    ada.update_assignment_status("HW1", bad_grade)

    assert ada.get_assignment_status("HW1") == RELEASED
    assert ada.get_grade() is None


def test_other_real_numbers_are_accepted(make_student):
    ada = make_student()
    ada.update_assignment_status("HW1", Fraction(101, 2))
    assert ada.get_assignment_status("HW1") == PASS


def test_scenario_a_work_then_auto_submit_then_auto_grade(make_student, recorder, scheduler):
    ada = make_student()
    ada.start_working("HW1")

    assert recorder.statuses("Ada", "HW1") == [RELEASED, WORKING]

    scheduler.advance(499)
    assert ada.get_assignment_status("HW1") == WORKING

    scheduler.advance(1)
    assert ada.get_assignment_status("HW1") == SUBMITTED

    scheduler.advance(500)
    assert recorder.statuses("Ada", "HW1") == [RELEASED, WORKING, SUBMITTED, PASS]
    assert ada.get_grade() == 80
    assert_grade_invariant(ada)


def test_auto_grade_uses_real_random_source_within_range(scheduler, recorder):
    ada = Student("Ada", "ada@example.com", recorder, scheduler=scheduler,
                  grade_source=RandomGradeSource(seed=7))
    for name in ("HW1", "HW2", "HW3", "HW4"):
        ada.start_working(name)
    scheduler.run_until_idle()

    for a in ada.assignments:
        assert 0 <= a.grade <= 100
        assert isinstance(a.grade, int)
    assert_grade_invariant(ada)


def test_restart_working_replaces_pending_timer(make_student, scheduler):
    ada = make_student()
    ada.start_working("HW1")
    scheduler.advance(400)
    ada.start_working("HW1")

    scheduler.advance(400)
    assert ada.get_assignment_status("HW1") == WORKING
    assert scheduler.pending_count == 1

    scheduler.advance(100)
    assert ada.get_assignment_status("HW1") == SUBMITTED


def test_manual_submit_cancels_auto_submit(make_student, recorder, scheduler):
    ada = make_student()
    ada.start_working("HW1")
    ada.submit_assignment("HW1")

    assert scheduler.pending_labels() == ["auto-grade:Ada:HW1"]
    scheduler.run_until_idle()
    assert recorder.statuses("Ada", "HW1") == [RELEASED, WORKING, SUBMITTED, PASS]


def test_submit_is_noop_once_submitted_or_graded(make_student, recorder, scheduler, grades):
    ada = make_student()
    ada.submit_assignment("HW1")
    ada.submit_assignment("HW1")
    assert scheduler.pending_count == 1
    assert recorder.statuses("Ada", "HW1") == [RELEASED, SUBMITTED]

    scheduler.run_until_idle()
    ada.submit_assignment("HW1")
    assert scheduler.pending_count == 0
    assert ada.get_assignment_status("HW1") == PASS
    assert grades.draws == 1


def test_explicit_grade_beats_pending_auto_grade(make_student, scheduler, grades):
    ada = make_student()
    ada.submit_assignment("HW1")
    ada.update_assignment_status("HW1", 30)

    scheduler.run_until_idle()
    assert ada.get_assignment_status("HW1") == FAIL
    assert ada.get_grade() == 30
    assert grades.draws == 0


def test_start_working_does_not_reopen_graded_assignment(make_student, recorder, scheduler):
    ada = make_student()
    ada.update_assignment_status("HW1", 90)
    ada.start_working("HW1")

    assert ada.get_assignment_status("HW1") == PASS
    assert scheduler.pending_count == 0
    assert recorder.statuses("Ada", "HW1") == [RELEASED, PASS]


def test_start_working_after_submit_restarts_the_cycle(make_student, scheduler):
    ada = make_student()
    ada.submit_assignment("HW1")
    ada.start_working("HW1")

    assert scheduler.pending_labels() == ["auto-submit:Ada:HW1"]
    scheduler.run_until_idle()
    assert ada.get_assignment_status("HW1") == PASS


def test_get_grade_is_mean_of_graded_only(scheduler, recorder):
    ada = Student("Ada", observer=recorder, scheduler=scheduler,
                  grade_source=FixedGradeSource(40))
    assert ada.get_grade() is None

    ada.update_assignment_status("HW1", 90)
    ada.update_assignment_status("HW2", 60)
    ada.update_assignment_status("HW3")
    ada.start_working("HW4")
    assert ada.get_grade() == 75

    scheduler.run_until_idle()
    assert ada.get_grade() == pytest.approx((90 + 60 + 40) / 3)
    assert ada.overall_grade == ada.get_grade()
    assert_grade_invariant(ada)


def test_assignments_keep_first_touched_order(make_student):
    ada = make_student()
    ada.submit_assignment("B")
    ada.update_assignment_status("A")
    ada.start_working("C")
    ada.update_assignment_status("B", 10)
    assert [a.name for a in ada.assignments] == ["B", "A", "C"]


def test_student_without_observer_still_transitions(scheduler, grades):
    ada = Student("Ada", scheduler=scheduler, grade_source=grades)
    ada.start_working("HW1")
    scheduler.run_until_idle()
    assert ada.get_assignment_status("HW1") == PASS


def test_mark_final_reminder_cancels_timer_without_notifying(make_student, recorder, scheduler):
    ada = make_student()
    ada.start_working("HW1")
    recorder.clear()

    assignment = ada.mark_final_reminder("HW1")
    assert assignment.status == AssignmentStatus.FINAL_REMINDER
    assert scheduler.pending_count == 0
    assert recorder.notifications == []


def test_custom_delays_and_threshold(scheduler, recorder):
    settings = Settings(auto_submit_delay=10, auto_grade_delay=20, pass_threshold=70)
    ada = Student("Ada", observer=recorder, scheduler=scheduler,
                  grade_source=FixedGradeSource(70), settings=settings)
    ada.start_working("HW1")

    scheduler.advance(10)
    assert ada.get_assignment_status("HW1") == SUBMITTED
    scheduler.advance(20)
    assert ada.get_assignment_status("HW1") == FAIL


def test_setters_update_identity_fields(make_student):
    ada = make_student()
    ada.set_full_name("Ada Lovelace")
    ada.set_email("countess@example.com")
    assert ada.full_name == "Ada Lovelace"
    assert ada.email == "countess@example.com"


def test_default_scheduler_failure_leaves_state_untouched(recorder):
    settings = Settings(auto_submit_delay=5, auto_grade_delay=5)
    ada = Student("Ada", "ada@example.com", recorder,
                  grade_source=FixedGradeSource(65), settings=settings)

    with pytest.raises(SchedulingError):
        ada.start_working("HW1")
    with pytest.raises(SchedulingError):
        ada.submit_assignment("HW1")

    assignment = ada.get_assignment("HW1")
    assert assignment.status == RELEASED
    assert assignment.has_pending_timer is False
    assert recorder.statuses("Ada", "HW1") == [RELEASED]

    async def submit_on_loop():
        ada.submit_assignment("HW1")
        await asyncio.sleep(0.05)

    asyncio.run(submit_on_loop())
    assert ada.get_assignment_status("HW1") == PASS


def test_to_dict_snapshot(make_student):
    ada = make_student()
    ada.update_assignment_status("HW1", 60)
    data = ada.to_dict()
    assert data['full_name'] == "Ada"
    assert data['overall_grade'] == 60
    assert [a['status'] for a in data['assignments']] == ["pass"]


@pytest.mark.parametrize("grade", [None, 90])
def test_mark_final_reminder_leaves_closed_assignments_alone(make_student, scheduler, grade):
    ada = make_student()
    ada.submit_assignment("HW1")
    if grade is not None:
        ada.update_assignment_status("HW1", grade)
    before = ada.get_assignment_status("HW1")

    assert ada.mark_final_reminder("HW1") is None
    assert ada.get_assignment_status("HW1") == before
    assert scheduler.pending_count == (1 if grade is None else 0)
