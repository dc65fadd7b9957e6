"""Failure kinds raised while building or storing a seating plan."""

from typing import Dict, List, Optional


class SeatingError(Exception):
    kind = "SeatingError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def context(self) -> dict:
        return {}

    def to_dict(self) -> dict:
        payload = {"kind": self.kind, "error": self.message}
        payload.update(self.context())
        return payload


class InvalidSelection(SeatingError):
    kind = "InvalidSelection"


class SelectionNotFound(InvalidSelection):
    """The selected rooms, semesters or students do not exist in the store."""

    status_code = 404


class HomogeneousSelection(SeatingError):
    kind = "HomogeneousSelection"

    def __init__(self, departments: List[str]):
        super().__init__(
            "Selected batches contain students from only one department. "
            "Please select batches from at least two departments."
        )
        self.departments = departments

    def context(self) -> dict:
        return {"departments": list(self.departments)}


class UnpairableDepartment(SeatingError):
    kind = "UnpairableDepartment"

    def __init__(self, room: str, department: str, remaining: Dict[str, int]):
        super().__init__(
            f'Cannot form mixed pair for room "{room}". Not enough students '
            f'from other departments to pair with "{department}".'
        )
        self.room = room
        self.department = department
        self.remaining = remaining

    def context(self) -> dict:
        return {
            "room": self.room,
            "department": self.department,
            "remaining": dict(self.remaining),
        }


class NoSeatsAssigned(SeatingError):
    kind = "NoSeatsAssigned"

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "No seats were assigned (not enough students or capacity)."
        )


class PersistenceFailure(SeatingError):
    kind = "PersistenceFailure"
    status_code = 500

    def __init__(self, details: str):
        super().__init__("Failed to save seating plan")
        self.details = details

    def context(self) -> dict:
        return {"details": self.details}
