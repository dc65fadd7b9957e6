"""Exam seating: department-diverse bench allocation across exam rooms."""

from exam_seating.allocator import allocate_students
from exam_seating.queues import DepartmentQueuePool

__all__ = ["allocate_students", "DepartmentQueuePool"]
