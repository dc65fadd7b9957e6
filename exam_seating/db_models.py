from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from exam_seating.database import Base


class RoomDB(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    capacity = Column(Integer, nullable=False, default=0)


class SemesterDB(Base):
    __tablename__ = "semesters"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, unique=True, index=True, nullable=False)

    students = relationship("StudentDB", back_populates="semester")


class StudentDB(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    roll_no = Column(String, unique=True, index=True, nullable=False)
    department = Column(String, nullable=True)
    batch = Column(String, nullable=False)

    semester_id = Column(Integer, ForeignKey("semesters.id"), nullable=False)
    semester = relationship("SemesterDB", back_populates="students")


class SeatingPlanDB(Base):
    __tablename__ = "seating_plan"

    id = Column(Integer, primary_key=True, index=True)
    room = Column(String, index=True, nullable=False)
    # stored as text; readers sort by CAST(seat_no AS INTEGER)
    seat_no = Column(String, nullable=False)
    student = Column(String, nullable=False)
    roll_no = Column(String, nullable=False)
    department = Column(String, nullable=True)
    batch = Column(String, nullable=True)
    semester = Column(String, nullable=True)
