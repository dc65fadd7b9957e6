import logging
import threading
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from exam_seating import config
from exam_seating.allocator import allocate_students
from exam_seating.database import Base, engine, SessionLocal
from exam_seating.db_models import RoomDB, SemesterDB, StudentDB
from exam_seating.errors import InvalidSelection, SeatingError
from exam_seating.exports import export_plan_excel, export_plan_pdf
from exam_seating.storage import (
    fetch_seating_plan,
    find_seat,
    load_rooms,
    load_students,
    replace_seating_plan,
    resolve_semesters,
    seat_row_to_dict,
    transaction,
)
from exam_seating.student_import import read_student_sheet

config.configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Exam Seating API")

Base.metadata.create_all(bind=engine)

# serializes generate-and-persist runs across worker threads
plan_lock = threading.Lock()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def raise_http(exc: SeatingError):
    raise HTTPException(status_code=exc.status_code, detail=exc.to_dict())


@app.get("/")
def root():
    return {"message": "Exam Seating API is running !"}


@app.get("/rooms")
def get_rooms(db: Session = Depends(get_db)):
    rooms = db.query(RoomDB).order_by(RoomDB.id).all()
    return [{"id": r.id, "name": r.name, "capacity": r.capacity} for r in rooms]


class RoomCreate(BaseModel):
    name: str = Field(..., min_length=1)
    capacity: int = Field(..., ge=0)


@app.post("/rooms")
def create_room(room: RoomCreate, db: Session = Depends(get_db)):
    existing = db.query(RoomDB).filter(RoomDB.name == room.name).first()
    if existing:
        return {"message": f"Room {room.name} already exists", "id": existing.id}

    with transaction(db):
        db_room = RoomDB(name=room.name, capacity=room.capacity)
        db.add(db_room)
    db.refresh(db_room)

    return {
        "message": "Room created ✅",
        "id": db_room.id,
        "name": db_room.name,
        "capacity": db_room.capacity,
    }


@app.get("/semesters")
def get_semesters(db: Session = Depends(get_db)):
    semesters = db.query(SemesterDB).order_by(SemesterDB.id).all()
    return [{"id": s.id, "title": s.title} for s in semesters]


@app.get("/students")
def get_students(db: Session = Depends(get_db)):
    rows = (
        db.query(StudentDB, SemesterDB.title)
        .join(SemesterDB, StudentDB.semester_id == SemesterDB.id)
        .order_by(StudentDB.department, StudentDB.batch, StudentDB.roll_no)
        .all()
    )
    return [
        {
            "id": s.id,
            "full_name": s.full_name,
            "roll_no": s.roll_no,
            "department": s.department,
            "batch": s.batch,
            "semester": title,
        }
        for s, title in rows
    ]


@app.post("/students/import")
def import_students(db: Session = Depends(get_db)):
    file_path = config.STUDENTS_FILE

    try:
        df = read_student_sheet(file_path)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Reading student spreadsheet %s failed", file_path)
        raise HTTPException(status_code=400, detail="Student spreadsheet could not be read.")

    inserted = 0
    skipped = 0
    semesters = {s.title: s for s in db.query(SemesterDB).all()}
    seen = {roll for (roll,) in db.query(StudentDB.roll_no).all()}

    with transaction(db):
        for row in df.itertuples(index=False):
            if row.roll_no in seen:
                skipped += 1
                continue

            semester = semesters.get(row.semester)
            if semester is None:
                semester = SemesterDB(title=row.semester)
                db.add(semester)
                db.flush()
                semesters[row.semester] = semester

            db.add(
                StudentDB(
                    full_name=row.full_name,
                    roll_no=row.roll_no,
                    department=row.department or None,
                    batch=row.batch,
                    semester_id=semester.id,
                )
            )
            seen.add(row.roll_no)
            inserted += 1

    logger.info("Imported %d students from %s (%d skipped)", inserted, file_path, skipped)

    return {
        "message": "Student import completed ✅",
        "inserted": inserted,
        "skipped_duplicates": skipped,
    }


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class GeneratePlanRequest(BaseModel):
    selectedRooms: List[int] = []
    selectedBatches: List[str] = []

    @field_validator("selectedRooms", mode="before")
    @classmethod
    def wrap_rooms(cls, value):
        ids = []
        for v in _as_list(value):
            try:
                ids.append(int(v))
            except (TypeError, ValueError):
                continue
        return ids

    @field_validator("selectedBatches", mode="before")
    @classmethod
    def wrap_batches(cls, value):
        titles = (str(v).strip() for v in _as_list(value) if v is not None)
        return [t for t in titles if t]


@app.post("/api/generate-plan")
def generate_plan(req: Optional[GeneratePlanRequest] = None, db: Session = Depends(get_db)):
    req = req or GeneratePlanRequest()
    try:
        if not req.selectedRooms:
            raise InvalidSelection("No rooms selected.")
        if not req.selectedBatches:
            raise InvalidSelection("No batches selected.")

        with plan_lock:
            rooms = load_rooms(db, req.selectedRooms)
            semester_ids = resolve_semesters(db, req.selectedBatches)
            students = load_students(db, semester_ids)
            plan = allocate_students(students, rooms)
            replace_seating_plan(db, plan)
    except SeatingError as exc:
        raise_http(exc)

    response = {"message": "Seating plan generated successfully"}
    response.update(plan.to_dict())
    return response


@app.get("/api/seating-plan")
def get_seating_plan(db: Session = Depends(get_db)):
    rows = fetch_seating_plan(db)
    return {"data": [seat_row_to_dict(r) for r in rows]}


@app.get("/public/seat-lookup")
def seat_lookup(roll_no: str, db: Session = Depends(get_db)):
    seat = find_seat(db, roll_no)
    if not seat:
        raise HTTPException(status_code=404, detail="Seat not allocated yet")
    return seat_row_to_dict(seat)


def _plan_rows_or_404(db, room):
    rows = [seat_row_to_dict(r) for r in fetch_seating_plan(db, room)]
    if not rows:
        raise HTTPException(
            status_code=404, detail="No seating plan found. Run /api/generate-plan first."
        )
    return rows


@app.get("/export/seating-plan/excel")
def export_seating_plan_excel(room: str = None, db: Session = Depends(get_db)):
    rows = _plan_rows_or_404(db, room)

    config.EXPORT_DIR.mkdir(parents=True, exist_ok=True)
    file_path = config.EXPORT_DIR / f"seating_plan_{room or 'all'}.xlsx"
    export_plan_excel(rows, file_path)

    return FileResponse(
        path=str(file_path),
        filename=file_path.name,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


@app.get("/export/seating-plan/pdf")
def export_seating_plan_pdf(room: str = None, db: Session = Depends(get_db)):
    rows = _plan_rows_or_404(db, room)

    config.EXPORT_DIR.mkdir(parents=True, exist_ok=True)
    file_path = config.EXPORT_DIR / f"seating_plan_{room or 'all'}.pdf"
    title = f"Seating Arrangement - Room {room}" if room else "Seating Arrangement"
    export_plan_pdf(rows, title, file_path)

    return FileResponse(path=str(file_path), filename=file_path.name, media_type="application/pdf")
