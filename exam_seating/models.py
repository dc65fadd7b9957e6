from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Student:
    stu_id: int
    name: str
    roll_no: str
    department: Optional[str]
    batch: str
    semester: str


@dataclass(frozen=True)
class Room:
    room_id: int
    name: str
    capacity: int


@dataclass(frozen=True)
class Bench:
    room_id: int
    bench_no: int
    seat_numbers: Tuple[int, ...]  # (2k+1, 2k+2), or a single trailing seat

    @property
    def is_single(self) -> bool:
        return len(self.seat_numbers) == 1


@dataclass(frozen=True)
class SeatAssignment:
    room_id: int
    room_name: str
    seat_no: int
    student: str
    roll_no: str
    department: Optional[str]
    batch: str
    semester: str

    @classmethod
    def for_student(cls, room: Room, seat_no: int, student: Student) -> "SeatAssignment":
        return cls(
            room_id=room.room_id,
            room_name=room.name,
            seat_no=seat_no,
            student=student.name,
            roll_no=student.roll_no,
            department=student.department,
            batch=student.batch,
            semester=student.semester,
        )

    def to_dict(self) -> dict:
        return {
            "seatNo": self.seat_no,
            "student": self.student,
            "rollNo": self.roll_no,
            "department": self.department,
            "batch": self.batch,
            "semester": self.semester,
        }


@dataclass
class RoomPlan:
    room: Room
    seats: List[SeatAssignment] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "room": self.room.name,
            "roomId": self.room.room_id,
            "seats": [s.to_dict() for s in self.seats],
        }


@dataclass
class SeatingPlan:
    total_students_available: int
    rooms: List[RoomPlan] = field(default_factory=list)

    @property
    def assigned_students(self) -> int:
        return sum(len(r.seats) for r in self.rooms)

    def to_dict(self) -> dict:
        return {
            "totalStudentsAvailable": self.total_students_available,
            "assignedStudents": self.assigned_students,
            "plan": [r.to_dict() for r in self.rooms],
        }


def sort_students(students):
    """Order students the way the queue pool expects: department, batch, roll number."""
    return sorted(
        students,
        key=lambda s: (s.department or "", s.batch or "", s.roll_no or ""),
    )
