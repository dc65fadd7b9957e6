from typing import List

from exam_seating.models import Bench, Room


def generate_benches(room: Room) -> List[Bench]:
    """Split a room's capacity into two-seat benches plus a trailing single seat when odd."""
    benches = []
    if room.capacity <= 0:
        return benches

    for k in range(room.capacity // 2):
        first = 2 * k + 1
        benches.append(
            Bench(room_id=room.room_id, bench_no=k + 1, seat_numbers=(first, first + 1))
        )

    if room.capacity % 2:
        benches.append(
            Bench(
                room_id=room.room_id,
                bench_no=len(benches) + 1,
                seat_numbers=(room.capacity,),
            )
        )

    return benches
