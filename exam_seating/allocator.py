"""Greedy bench allocation that never seats two students of one department together."""

import logging
from typing import List, Sequence

from exam_seating.config import UNKNOWN_DEPARTMENT
from exam_seating.errors import (
    HomogeneousSelection,
    InvalidSelection,
    NoSeatsAssigned,
    SeatingError,
    UnpairableDepartment,
)
from exam_seating.layouts import generate_benches
from exam_seating.models import Room, RoomPlan, SeatAssignment, SeatingPlan, Student
from exam_seating.queues import DepartmentQueuePool

logger = logging.getLogger(__name__)


def check_selection(students: Sequence[Student], rooms: Sequence[Room]) -> None:
    if not rooms:
        raise InvalidSelection("No rooms selected.")
    if not students:
        raise InvalidSelection("No students selected.")

    departments = sorted({s.department or UNKNOWN_DEPARTMENT for s in students})
    if len(departments) < 2:
        raise HomogeneousSelection(departments)

    if not any(room.capacity > 0 for room in rooms):
        raise NoSeatsAssigned("None of the selected rooms has any seats.")


def fill_room(room: Room, pool: DepartmentQueuePool) -> List[SeatAssignment]:
    """Fill one room bench by bench, drawing from the two largest distinct departments.

    Stops early when the pool runs dry. Raises UnpairableDepartment when a
    bench's first student has nobody from another department to sit with.
    """
    seats = []
    for bench in generate_benches(room):
        if bench.is_single:
            dept = pool.largest()
            if dept is not None:
                seats.append(
                    SeatAssignment.for_student(room, bench.seat_numbers[0], pool.draw(dept))
                )
            break

        first_dept = pool.largest()
        if first_dept is None:
            break
        first = pool.draw(first_dept)

        low, high = bench.seat_numbers
        second_dept = pool.largest_excluding(first_dept)
        if second_dept is None:
            if pool.remaining_count() == 0:
                # last student of the whole pool sits alone; the bench stays diverse
                seats.append(SeatAssignment.for_student(room, low, first))
                break
            raise UnpairableDepartment(room.name, first_dept, pool.remaining_by_department())
        second = pool.draw(second_dept)

        seats.append(SeatAssignment.for_student(room, low, first))
        seats.append(SeatAssignment.for_student(room, high, second))

    return seats


def allocate_students(students: Sequence[Student], rooms: Sequence[Room]) -> SeatingPlan:
    """Seat students room by room in the given room order.

    ``students`` must already be ordered by department, batch and roll number.
    Rooms after the one that seats the last student are left out of the plan.
    """
    try:
        check_selection(students, rooms)
        pool = DepartmentQueuePool.build(students)
        plan = SeatingPlan(total_students_available=pool.initial_size)

        for room in rooms:
            seats = fill_room(room, pool)
            plan.rooms.append(RoomPlan(room=room, seats=seats))
            logger.debug(
                "Room %s: %d of %d seats filled, %d students left",
                room.name, len(seats), max(room.capacity, 0), pool.remaining_count(),
            )
            if pool.remaining_count() == 0:
                break

        if plan.assigned_students == 0:
            raise NoSeatsAssigned()
    except SeatingError as exc:
        logger.warning("Seating allocation failed (%s): %s", exc.kind, exc.message)
        raise

    logger.info(
        "Seated %d of %d students across %d rooms",
        plan.assigned_students, plan.total_students_available, len(plan.rooms),
    )
    return plan
