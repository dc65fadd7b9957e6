from pathlib import Path

import pandas as pd

from exam_seating.models import Student, sort_students

REQUIRED_COLUMNS = {"full_name", "roll_no", "department", "batch", "semester"}


def read_student_sheet(file_path):
    """Load a student spreadsheet (.xlsx, .xls or .csv) and check its columns."""
    path = Path(file_path)
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=str)
    else:
        df = pd.read_excel(path, dtype=str)

    if not REQUIRED_COLUMNS.issubset(df.columns):
        missing = sorted(REQUIRED_COLUMNS - set(df.columns))
        raise ValueError(f"Missing columns: {missing}")

    df = df.dropna(subset=["full_name", "roll_no"]).copy()
    for col in REQUIRED_COLUMNS:
        df[col] = df[col].fillna("").astype(str).str.strip()
    return df


def students_from_file(file_path):
    df = read_student_sheet(file_path)

    students = []
    for i, row in enumerate(df.itertuples(index=False), start=1):
        students.append(
            Student(
                stu_id=i,
                name=row.full_name,
                roll_no=row.roll_no,
                department=row.department or None,
                batch=row.batch,
                semester=row.semester,
            )
        )

    return sort_students(students)
