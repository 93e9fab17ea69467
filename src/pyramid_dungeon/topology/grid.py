from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from ..errors import GridSealedError, InvalidDimension, OutOfBounds
from .geometry import Point, Rect
from .room import Room

logger = logging.getLogger(__name__)


class RoomGrid:
    """A square, fully populated, bounds-checked table of rooms.

    The grid only knows about construction, neighbor queries and the
    ``visited`` bookkeeping; path logic lives in :mod:`.paths`. Rooms are
    stored rows-first (``rooms[y][x]``) and never resized.
    """

    __slots__ = ("_side", "_cell", "_padding", "_rooms", "_sealed")

    def __init__(self, side_length: int, room_cell_size: int, border_padding: int = 0) -> None:
        if side_length <= 0:
            raise InvalidDimension(f"Grid side length must be positive, got {side_length}")
        if room_cell_size <= 0:
            raise InvalidDimension(f"Room cell size must be positive, got {room_cell_size}")
        if border_padding < 0:
            raise InvalidDimension(f"Border padding cannot be negative, got {border_padding}")
        self._side = int(side_length)
        self._cell = int(room_cell_size)
        self._padding = int(border_padding)
        self._sealed = False
        self._rooms: List[List[Room]] = []
        for y in range(self._side):
            row: List[Room] = []
            for x in range(self._side):
                room = Room(x, y, self._region_for(x, y))
                room._grid = self
                row.append(room)
            self._rooms.append(row)
        logger.debug(
            "Initialized RoomGrid %dx%d (cell=%d, padding=%d)", self._side, self._side, self._cell, self._padding
        )

    @classmethod
    def build(cls, side_length: int, room_cell_size: int, border_padding: int = 0) -> "RoomGrid":
        return cls(side_length, room_cell_size, border_padding)

    def _region_for(self, x: int, y: int) -> Rect:
        return Rect(self._padding + x * self._cell, self._padding + y * self._cell, self._cell, self._cell)

    # ---- Dimensions --------------------------------------------------------
    @property
    def side_length(self) -> int:
        return self._side

    @property
    def room_cell_size(self) -> int:
        return self._cell

    @property
    def border_padding(self) -> int:
        return self._padding

    def __len__(self) -> int:
        return self._side * self._side

    # ---- Lookup ------------------------------------------------------------
    def is_within(self, x: int, y: int) -> bool:
        """Check if grid coordinates are inside the grid. Never raises."""
        return 0 <= x < self._side and 0 <= y < self._side

    def room_at(self, x: int, y: int) -> Room:
        if not self.is_within(x, y):
            raise OutOfBounds(f"Grid coordinates out of bounds: ({x}, {y}) for grid {self._side}x{self._side}")
        return self._rooms[y][x]

    def _safe_room(self, x: int, y: int) -> Optional[Room]:
        if not self.is_within(x, y):
            return None
        return self._rooms[y][x]

    def neighbor_below(self, room: Room) -> Optional[Room]:
        return self._safe_room(room.grid_x, room.grid_y + 1)

    def neighbor_left(self, room: Room) -> Optional[Room]:
        return self._safe_room(room.grid_x - 1, room.grid_y)

    def neighbor_right(self, room: Room) -> Optional[Room]:
        return self._safe_room(room.grid_x + 1, room.grid_y)

    def column(self, x: int) -> List[Room]:
        """All rooms with grid_x == x, ordered by grid_y ascending."""
        if not 0 <= x < self._side:
            raise OutOfBounds(f"Column out of bounds: {x} for grid {self._side}x{self._side}")
        return [self._rooms[y][x] for y in range(self._side)]

    def row(self, y: int) -> List[Room]:
        if not 0 <= y < self._side:
            raise OutOfBounds(f"Row out of bounds: {y} for grid {self._side}x{self._side}")
        return list(self._rooms[y])

    def rooms(self) -> Iterator[Room]:
        for row in self._rooms:
            yield from row

    def room_at_tile(self, point: Point) -> Optional[Room]:
        """Room whose region contains the given world tile, if any."""
        x = (point.x - self._padding) // self._cell
        y = (point.y - self._padding) // self._cell
        room = self._safe_room(x, y)
        if room is None or not room.region.contains(point):
            return None
        return room

    def visited_rooms(self) -> List[Room]:
        return [room for room in self.rooms() if room.visited]

    def unvisited_rooms(self) -> List[Room]:
        """Rooms no walk ever reached; the painter keeps these solid."""
        return [room for room in self.rooms() if not room.visited]

    # ---- Generation state --------------------------------------------------
    @property
    def sealed(self) -> bool:
        return self._sealed

    def claim(self, room: Room) -> None:
        """Mark a room visited. Only allowed while generation is running."""
        if self._sealed:
            raise GridSealedError("Cannot claim rooms after generation has finished")
        if room._grid is not self:
            raise ValueError(f"{room!r} does not belong to this grid")
        if room.visited:
            raise ValueError(f"{room!r} is already visited")
        room._visited = True

    def seal(self) -> None:
        self._sealed = True

    def __repr__(self) -> str:
        return f"RoomGrid(side_length={self._side}, room_cell_size={self._cell}, border_padding={self._padding})"
