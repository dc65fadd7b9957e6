"""Database reads feeding the allocator and the atomic write-back of its plan."""

import logging
from contextlib import contextmanager
from typing import List, Optional, Sequence

from sqlalchemy import Integer, cast
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exam_seating.db_models import RoomDB, SeatingPlanDB, SemesterDB, StudentDB
from exam_seating.errors import PersistenceFailure, SelectionNotFound
from exam_seating.models import Room, SeatingPlan, Student

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session):
    """Commit on a clean exit, roll back on any exception and re-raise it."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def load_rooms(db: Session, room_ids: Sequence[int]) -> List[Room]:
    rows = db.query(RoomDB).filter(RoomDB.id.in_(list(room_ids))).order_by(RoomDB.id).all()
    if not rows:
        raise SelectionNotFound("Selected rooms not found.")
    return [Room(room_id=r.id, name=r.name, capacity=r.capacity or 0) for r in rows]


def resolve_semesters(db: Session, titles: Sequence[str]) -> List[int]:
    rows = db.query(SemesterDB.id).filter(SemesterDB.title.in_(list(titles))).all()
    if not rows:
        raise SelectionNotFound("Selected semester batch titles do not exist.")
    return [r.id for r in rows]


def load_students(db: Session, semester_ids: Sequence[int]) -> List[Student]:
    rows = (
        db.query(StudentDB, SemesterDB.title)
        .join(SemesterDB, StudentDB.semester_id == SemesterDB.id)
        .filter(StudentDB.semester_id.in_(list(semester_ids)))
        .order_by(StudentDB.department, StudentDB.batch, StudentDB.roll_no)
        .all()
    )
    if not rows:
        raise SelectionNotFound("No students found for selected batches/semesters.")

    return [
        Student(
            stu_id=s.id,
            name=s.full_name,
            roll_no=s.roll_no,
            department=s.department,
            batch=s.batch,
            semester=title,
        )
        for s, title in rows
    ]


def replace_seating_plan(db: Session, plan: SeatingPlan) -> int:
    """Swap in the plan's rows for every room it names; nothing changes if any write fails."""
    room_names = [r.room.name for r in plan.rooms if r.room.name]
    inserted = 0

    try:
        with transaction(db):
            if room_names:
                (
                    db.query(SeatingPlanDB)
                    .filter(SeatingPlanDB.room.in_(room_names))
                    .delete(synchronize_session=False)
                )

            for room_plan in plan.rooms:
                for seat in room_plan.seats:
                    db.add(
                        SeatingPlanDB(
                            room=room_plan.room.name,
                            seat_no=str(seat.seat_no),
                            student=seat.student,
                            roll_no=seat.roll_no,
                            department=seat.department,
                            batch=seat.batch,
                            semester=seat.semester,
                        )
                    )
                    inserted += 1
            db.flush()
    except SQLAlchemyError as exc:
        logger.exception("Persisting seating plan for rooms %s failed", room_names)
        raise PersistenceFailure(str(exc)) from exc

    logger.info("Stored %d seats for rooms %s", inserted, room_names)
    return inserted


def fetch_seating_plan(db: Session, room: Optional[str] = None) -> List[SeatingPlanDB]:
    query = db.query(SeatingPlanDB)
    if room:
        query = query.filter(SeatingPlanDB.room == room)
    return query.order_by(SeatingPlanDB.room, cast(SeatingPlanDB.seat_no, Integer)).all()


def find_seat(db: Session, roll_no: str) -> Optional[SeatingPlanDB]:
    return db.query(SeatingPlanDB).filter(SeatingPlanDB.roll_no == roll_no).first()


def seat_row_to_dict(row: SeatingPlanDB) -> dict:
    return {
        "id": row.id,
        "room": row.room,
        "seatNo": row.seat_no,
        "student": row.student,
        "rollNo": row.roll_no,
        "department": row.department,
        "batch": row.batch,
        "semester": row.semester,
    }
