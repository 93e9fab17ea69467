"""Shared helpers for topology tests: scripted RNGs and path builders."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from pyramid_dungeon.rng import TopologyRNG
from pyramid_dungeon.topology import DoorLink, Room, RoomGrid


class RecordingRNG(TopologyRNG):
    """Seeded RNG that remembers every weighted pick and 1-in-N roll."""

    def __post_init__(self) -> None:
        super().__post_init__()
        self.weighted_calls: List[List[Tuple[Room, float]]] = []
        self.one_in_calls: List[int] = []

    def weighted_choice(self, options):
        self.weighted_calls.append(list(options))
        return super().weighted_choice(options)

    def one_in(self, denominator: int) -> bool:
        self.one_in_calls.append(denominator)
        return super().one_in(denominator)


class ScriptedRNG(TopologyRNG):
    """RNG whose 1-in-N rolls follow a script (False once exhausted).

    Weighted picks always take the first option, which for both walks is the
    room below when it is eligible.
    """

    def __init__(self, rolls: Iterable[bool] = ()) -> None:
        super().__init__(seed=0)
        self._rolls = list(rolls)
        self.one_in_calls: List[int] = []

    def one_in(self, denominator: int) -> bool:
        if denominator < 1:
            raise ValueError(denominator)
        self.one_in_calls.append(denominator)
        if self._rolls:
            return self._rolls.pop(0)
        return False

    def weighted_choice(self, options):
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        return options[0][0]


def claim_path(grid: RoomGrid, coords: Sequence[Tuple[int, int]]) -> Tuple[Room, ...]:
    """Claim the given rooms in order and link doors between neighbors."""
    rooms = [grid.room_at(x, y) for x, y in coords]
    previous = None
    for room in rooms:
        grid.claim(room)
        if previous is not None:
            DoorLink.connect(previous, room)
        previous = room
    return tuple(rooms)


def coords(path: Iterable[Room]) -> List[Tuple[int, int]]:
    return [(room.grid_x, room.grid_y) for room in path]
