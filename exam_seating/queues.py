"""Per-department queues of students still waiting for a seat."""

from collections import deque
from typing import Dict, Iterable, List, Optional

from exam_seating.config import UNKNOWN_DEPARTMENT
from exam_seating.models import Student


class DepartmentQueuePool:
    """FIFO queue of students per department.

    Queues keep the relative order of the input, so callers should pass
    students already sorted by department, batch and roll number. Emptied
    queues stay in the pool with length 0.
    """

    def __init__(self, queues: Dict[str, deque]):
        self._queues = queues
        # sorted once: every lookup below walks departments in this order
        self._order = sorted(queues)
        self.initial_size = self.remaining_count()

    @classmethod
    def build(cls, students: Iterable[Student]) -> "DepartmentQueuePool":
        queues: Dict[str, deque] = {}
        for student in students:
            dept = student.department or UNKNOWN_DEPARTMENT
            queues.setdefault(dept, deque()).append(student)
        return cls(queues)

    @property
    def departments(self) -> List[str]:
        return list(self._order)

    def _pick(self, exclude: Optional[str] = None) -> Optional[str]:
        best = None
        best_len = 0
        for dept in self._order:
            if dept == exclude:
                continue
            size = len(self._queues[dept])
            # strict comparison keeps the lexically smallest name on ties
            if size > best_len:
                best = dept
                best_len = size
        return best

    def largest(self) -> Optional[str]:
        return self._pick()

    def largest_excluding(self, exclude: str) -> Optional[str]:
        return self._pick(exclude=exclude)

    def draw(self, department: str) -> Student:
        return self._queues[department].popleft()

    def remaining_count(self) -> int:
        return sum(len(q) for q in self._queues.values())

    def remaining_by_department(self) -> Dict[str, int]:
        return {dept: len(self._queues[dept]) for dept in self._order}

    def __len__(self):
        return self.remaining_count()
