"""Tests for the room filler."""

import pytest

from exam_seating.allocator import allocate_students, fill_room
from exam_seating.errors import (
    HomogeneousSelection,
    InvalidSelection,
    NoSeatsAssigned,
    UnpairableDepartment,
)
from exam_seating.models import Student
from exam_seating.queues import DepartmentQueuePool

from factories import make_rooms, make_students


def bench_pairs(seats):
    by_no = {s.seat_no: s for s in seats}
    for low in range(1, max(by_no, default=0) + 1, 2):
        if low in by_no and low + 1 in by_no:
            yield by_no[low], by_no[low + 1]


class TestScenarios:
    def test_even_split_single_room(self):
        plan = allocate_students(make_students({"X": 3, "Y": 3}), make_rooms(6))

        assert len(plan.rooms) == 1
        seats = plan.rooms[0].seats
        assert [s.seat_no for s in seats] == [1, 2, 3, 4, 5, 6]
        assert [s.department for s in seats] == ["X", "Y", "X", "Y", "X", "Y"]
        assert plan.assigned_students == 6

    def test_stranded_department_aborts_run(self):
        with pytest.raises(UnpairableDepartment) as exc_info:
            allocate_students(make_students({"X": 5, "Y": 1}), make_rooms(10))

        err = exc_info.value
        assert err.room == "R101"
        assert err.department == "X"
        assert err.remaining == {"X": 3, "Y": 0}
        assert err.to_dict()["kind"] == "UnpairableDepartment"

    def test_odd_capacity_last_student(self):
        plan = allocate_students(make_students({"X": 2, "Y": 1}), make_rooms(5))

        seats = plan.rooms[0].seats
        assert [s.seat_no for s in seats] == [1, 2, 3]
        assert [s.department for s in seats] == ["X", "Y", "X"]
        assert plan.assigned_students == 3

    def test_even_capacity_last_student(self):
        plan = allocate_students(make_students({"X": 2, "Y": 1}), make_rooms(4))

        seats = plan.rooms[0].seats
        assert [(s.seat_no, s.department) for s in seats] == [(1, "X"), (2, "Y"), (3, "X")]
        assert plan.assigned_students == 3

    def test_later_rooms_omitted_once_everyone_is_seated(self):
        plan = allocate_students(make_students({"X": 2, "Y": 2}), make_rooms(4, 100))

        assert [r.room.name for r in plan.rooms] == ["R101"]
        assert len(plan.rooms[0].seats) == 4

    def test_later_room_failure_rejects_whole_plan(self):
        with pytest.raises(UnpairableDepartment) as exc_info:
            allocate_students(make_students({"X": 6, "Y": 2}), make_rooms(4, 10))

        err = exc_info.value
        assert err.room == "R102"
        assert err.department == "X"
        assert err.remaining == {"X": 3, "Y": 0}

    def test_no_rooms(self):
        with pytest.raises(InvalidSelection):
            allocate_students(make_students({"X": 2, "Y": 2}), [])

    def test_no_students(self):
        with pytest.raises(InvalidSelection):
            allocate_students([], make_rooms(10))


class TestPreconditions:
    def test_single_department(self):
        with pytest.raises(HomogeneousSelection) as exc_info:
            allocate_students(make_students({"CS": 8}), make_rooms(10))
        assert exc_info.value.departments == ["CS"]
        assert exc_info.value.to_dict()["departments"] == ["CS"]

    def test_missing_departments_count_as_one(self):
        students = [
            Student(1, "A", "R1", None, "B", "S"),
            Student(2, "B", "R2", "", "B", "S"),
        ]
        with pytest.raises(HomogeneousSelection) as exc_info:
            allocate_students(students, make_rooms(4))
        assert exc_info.value.departments == ["UNKNOWN"]

    def test_all_rooms_without_seats(self):
        with pytest.raises(NoSeatsAssigned):
            allocate_students(make_students({"X": 2, "Y": 2}), make_rooms(0, -1))


class TestRoomFilling:
    def test_zero_capacity_room_kept_empty(self):
        plan = allocate_students(make_students({"X": 2, "Y": 2}), make_rooms(0, 4))

        assert [len(r.seats) for r in plan.rooms] == [0, 4]

    def test_trailing_seat_takes_largest_remaining(self):
        plan = allocate_students(make_students({"A": 3, "B": 3, "C": 2}), make_rooms(5, 5))

        first, second = plan.rooms
        assert [s.department for s in first.seats] == ["A", "B", "A", "B", "C"]
        assert [s.seat_no for s in second.seats] == [1, 2, 3]
        assert plan.assigned_students == 8

    def test_capacity_one_room(self):
        plan = allocate_students(make_students({"A": 1, "B": 1}), make_rooms(1, 2))

        assert [s.department for s in plan.rooms[0].seats] == ["A"]
        assert [s.department for s in plan.rooms[1].seats] == ["B"]

    def test_fill_room_stops_when_pool_empty(self):
        pool = DepartmentQueuePool.build(make_students({"A": 1, "B": 1}))
        seats = fill_room(make_rooms(10)[0], pool)

        assert len(seats) == 2
        assert pool.remaining_count() == 0

    def test_students_beyond_capacity_are_left_over(self):
        plan = allocate_students(make_students({"A": 10, "B": 10}), make_rooms(4, 6))

        assert plan.assigned_students == 10
        assert plan.total_students_available == 20
        assert plan.to_dict()["assignedStudents"] == 10

    def test_seat_snapshot(self):
        plan = allocate_students(make_students({"X": 1, "Y": 1}), make_rooms(2))

        assert plan.rooms[0].seats[0].to_dict() == {
            "seatNo": 1,
            "student": "X Student 1",
            "rollNo": "X-001",
            "department": "X",
            "batch": "B-24",
            "semester": "Fall 2024",
        }
        assert plan.to_dict()["plan"][0]["room"] == "R101"
        assert plan.to_dict()["plan"][0]["roomId"] == 1


class TestProperties:
    COUNTS = {"Artificial Intelligence": 9, "Civil Engineering": 14, "Computer Science": 12}

    def test_deterministic(self):
        students = make_students(self.COUNTS)
        rooms = make_rooms(11, 8, 20)

        assert allocate_students(students, rooms).to_dict() == allocate_students(students, rooms).to_dict()

    def test_conservation_and_capacity(self):
        rooms = make_rooms(11, 8, 20)
        plan = allocate_students(make_students(self.COUNTS), rooms)

        assert plan.assigned_students == sum(len(r.seats) for r in plan.rooms)
        assert plan.assigned_students <= plan.total_students_available
        for room_plan in plan.rooms:
            cap = room_plan.room.capacity
            assert len(room_plan.seats) <= cap
            assert len(room_plan.seats) <= 2 * (cap // 2) + cap % 2

    def test_benches_are_diverse(self):
        plan = allocate_students(make_students(self.COUNTS), make_rooms(11, 8, 20))

        for room_plan in plan.rooms:
            for left, right in bench_pairs(room_plan.seats):
                assert left.department != right.department

    def test_balanced_departments_all_seated(self):
        plan = allocate_students(make_students(self.COUNTS), make_rooms(11, 8, 20))

        assert plan.assigned_students == 35
        seated = {s.roll_no for r in plan.rooms for s in r.seats}
        assert len(seated) == 35

    def test_seat_numbers_contiguous(self):
        plan = allocate_students(make_students(self.COUNTS), make_rooms(11, 8, 20))

        for room_plan in plan.rooms:
            assert [s.seat_no for s in room_plan.seats] == list(range(1, len(room_plan.seats) + 1))
