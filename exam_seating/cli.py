import argparse
import sys

from exam_seating import config
from exam_seating.allocator import allocate_students
from exam_seating.errors import SeatingError
from exam_seating.exports import export_plan_excel
from exam_seating.models import Room
from exam_seating.student_import import students_from_file


def parse_room(value):
    name, sep, capacity = value.rpartition(":")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME:CAPACITY, got {value!r}")
    try:
        return name, int(capacity)
    except ValueError:
        raise argparse.ArgumentTypeError(f"capacity must be an integer, got {capacity!r}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="exam-seating",
        description="Seat exam candidates so that no bench holds two students of one department.",
    )
    parser.add_argument("students_file", help="spreadsheet with full_name, roll_no, department, batch, semester")
    parser.add_argument(
        "--room", dest="rooms", action="append", type=parse_room, default=[],
        metavar="NAME:CAPACITY", help="room to fill, in filling order (repeatable)",
    )
    parser.add_argument("--excel", help="also write the plan to this .xlsx file")
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config.configure_logging(args.log_level)

    try:
        students = students_from_file(args.students_file)
    except (ValueError, OSError) as exc:
        print(f"\n❌ Could not read {args.students_file}: {exc}")
        return 1

    rooms = [Room(room_id=i, name=name, capacity=cap) for i, (name, cap) in enumerate(args.rooms, start=1)]

    try:
        plan = allocate_students(students, rooms)
    except SeatingError as exc:
        print(f"\n❌ {exc.kind}: {exc.message}")
        for key, value in exc.context().items():
            print(f"   {key}: {value}")
        return 1

    print("\n--- Seating Plan ---")
    for room_plan in plan.rooms:
        print(f"\nRoom {room_plan.room.name} ({len(room_plan.seats)}/{room_plan.room.capacity})")
        for seat in room_plan.seats:
            print(f"  Seat {seat.seat_no:>3} | {seat.roll_no} | {seat.student} | {seat.department}")

    print(f"\nAssigned {plan.assigned_students} of {plan.total_students_available} students")

    if args.excel:
        rows = [
            dict(seat.to_dict(), room=room_plan.room.name)
            for room_plan in plan.rooms
            for seat in room_plan.seats
        ]
        export_plan_excel(rows, args.excel)
        print(f"Plan written to {args.excel}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
