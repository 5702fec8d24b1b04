"""
Main entry point for the Classflow demo.
"""

import argparse
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from .core.config import Settings, load_settings
from .core.entities import Student
from .core.grading import RandomGradeSource
from .core.scheduler import AsyncioScheduler
from .services import ClassList, ConsoleSink, Observer

logger = logging.getLogger(__name__)

DEMO_STUDENTS = [
    ("Ada Lovelace", "ada@school.edu"),
    ("Alan Turing", "alan@school.edu"),
    ("Grace Hopper", "grace@school.edu"),
]


class ClassroomSimulation:
    """Wires a roster, observer, scheduler and grade source together."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()
        self._observer = Observer(ConsoleSink())
        self._scheduler = AsyncioScheduler(self._settings.time_unit_seconds)
        self._grade_source = RandomGradeSource(
            self._settings.random_seed, self._settings.min_grade, self._settings.max_grade
        )
        self._class_list = ClassList(self._observer)

    @property
    def class_list(self) -> ClassList:
        return self._class_list

    def enroll(self, full_name: str, email: str) -> Student:
        student = Student(full_name, email, self._observer,
                          scheduler=self._scheduler,
                          grade_source=self._grade_source,
                          settings=self._settings)
        self._class_list.add_student(student)
        return student

    def _settle_seconds(self) -> float:
        # long enough for a full work -> submit -> grade chain
        units = self._settings.auto_submit_delay + self._settings.auto_grade_delay
        return units * self._settings.time_unit_seconds * 2

    async def run_demo(self) -> Dict[str, Any]:
        for full_name, email in DEMO_STUDENTS:
            self.enroll(full_name, email)

        await self._class_list.release_assignments_parallel(["HW1", "HW2"])

        ada, alan, grace = self._class_list.students
        ada.start_working("HW1")
        alan.update_assignment_status("HW1", 75)
        grace.submit_assignment("HW2")

        logger.info("Outstanding HW2: %s", self._class_list.find_outstanding_assignments("HW2"))
        self._class_list.send_reminder("HW2")

        await asyncio.sleep(self._settle_seconds())
        return self._class_list.to_dict()


def summarize(snapshot: Dict[str, Any]) -> List[str]:
    lines = []
    for student in snapshot['students']:
        statuses = ", ".join(f"{a['name']}={a['status']}" for a in student['assignments'])
        grade = student['overall_grade']
        grade_text = f"{grade:.1f}" if grade is not None else "n/a"
        lines.append(f"{student['full_name']}: {statuses} (overall {grade_text})")
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Classroom assignment lifecycle demo")
    parser.add_argument("--config", type=str, help="Configuration file path")
    parser.add_argument("--seed", type=int, help="Seed for synthetic grades")
    parser.add_argument("--json", action="store_true", help="Print the final roster as JSON")

    args = parser.parse_args(argv)

    settings = load_settings(args.config, {'random_seed': args.seed})
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    simulation = ClassroomSimulation(settings)
    snapshot = asyncio.run(simulation.run_demo())

    if args.json:
        print(json.dumps(snapshot, indent=2))
    else:
        print("\n=== Final roster ===")
        for line in summarize(snapshot):
            print(line)


if __name__ == "__main__":
    main()
