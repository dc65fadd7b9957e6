"""Runtime configuration for the exam seating service."""

import logging
import os
from pathlib import Path

DATABASE_URL = os.environ.get("EXAM_SEATING_DATABASE_URL", "sqlite:///./exam_seating.db")

EXPORT_DIR = Path(
    os.environ.get("EXAM_SEATING_EXPORT_DIR", Path(__file__).resolve().parent / "exports")
)

# Spreadsheet read by POST /students/import when no path is given
STUDENTS_FILE = os.environ.get("EXAM_SEATING_STUDENTS_FILE", "students.xlsx")

LOG_LEVEL = os.environ.get("EXAM_SEATING_LOG_LEVEL", "INFO")

# Department label for students stored without one
UNKNOWN_DEPARTMENT = "UNKNOWN"


def configure_logging(level=None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
