"""
Rooms of the topology grid and the doors that connect them.

A door is one edge (:class:`DoorLink`) that owns both of its endpoints, so the
two rooms it joins always agree on where it leads. Rooms only hand out
read-only :class:`Door` views of those edges.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from ..errors import InvalidDimension
from .geometry import Point, Rect

if TYPE_CHECKING:  # pragma: no cover
    from .grid import RoomGrid


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @classmethod
    def between(cls, a: "Room", b: "Room") -> "Direction":
        """Direction of the step from room a to room b.

        Raises ValueError when the rooms are not orthogonally adjacent.
        """
        delta = (b.grid_x - a.grid_x, b.grid_y - a.grid_y)
        for direction in cls:
            if direction.value == delta:
                return direction
        raise ValueError(f"Rooms {a!r} and {b!r} are not grid-adjacent")


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def door_position(region: Rect, side: Direction) -> Point:
    """Tile on the region boundary at the middle of the given side."""
    center = region.center()
    if side is Direction.UP:
        return Point(center.x, region.y)
    if side is Direction.DOWN:
        return Point(center.x, region.bottom() - 1)
    if side is Direction.LEFT:
        return Point(region.x, center.y)
    return Point(region.right() - 1, center.y)


class Room:
    """A single cell (or multi-cell block) of the room grid.

    ``visited`` can only be changed through :meth:`RoomGrid.claim`, and only
    while the owning grid is still generating. ``materialized`` belongs to the
    painter and stays writable after generation.
    """

    __slots__ = (
        "_grid_x",
        "_grid_y",
        "_footprint_width",
        "_footprint_height",
        "_region",
        "_visited",
        "_materialized",
        "_doors",
        "_grid",
    )

    def __init__(
        self,
        grid_x: int,
        grid_y: int,
        region: Rect,
        footprint_width: int = 1,
        footprint_height: int = 1,
    ) -> None:
        if footprint_width < 1 or footprint_height < 1:
            raise InvalidDimension(
                f"Room footprint must be at least 1x1, got {footprint_width}x{footprint_height}"
            )
        self._grid_x = int(grid_x)
        self._grid_y = int(grid_y)
        self._footprint_width = int(footprint_width)
        self._footprint_height = int(footprint_height)
        self._region = region
        self._visited = False
        self._materialized = False
        self._doors: Dict[Direction, DoorLink] = {}
        self._grid: Optional["RoomGrid"] = None

    # ---- Identity / geometry ---------------------------------------------
    @property
    def grid_x(self) -> int:
        return self._grid_x

    @property
    def grid_y(self) -> int:
        return self._grid_y

    @property
    def footprint_width(self) -> int:
        return self._footprint_width

    @property
    def footprint_height(self) -> int:
        return self._footprint_height

    @property
    def region(self) -> Rect:
        return self._region

    @property
    def is_single_cell(self) -> bool:
        return self._footprint_width == 1 and self._footprint_height == 1

    # ---- Generation state ------------------------------------------------
    @property
    def visited(self) -> bool:
        return self._visited

    @property
    def materialized(self) -> bool:
        return self._materialized

    def mark_materialized(self) -> bool:
        """Flag the room as stamped by the painter.

        Returns False if it was already materialized, so repeated requests
        for the same room can be dropped.
        """
        if self._materialized:
            return False
        self._materialized = True
        return True

    # ---- Doors -----------------------------------------------------------
    def _door(self, side: Direction) -> Optional["Door"]:
        link = self._doors.get(side)
        if link is None:
            return None
        return link.endpoint(self)

    @property
    def up(self) -> Optional["Door"]:
        return self._door(Direction.UP)

    @property
    def down(self) -> Optional["Door"]:
        return self._door(Direction.DOWN)

    @property
    def left(self) -> Optional["Door"]:
        return self._door(Direction.LEFT)

    @property
    def right(self) -> Optional["Door"]:
        return self._door(Direction.RIGHT)

    def doors(self) -> Dict[Direction, "Door"]:
        # Ordered for deterministic traversal
        return {side: link.endpoint(self) for side, link in sorted(self._doors.items(), key=lambda kv: kv[0].name)}

    def door_at(self, position: Point) -> Optional["Door"]:
        for door in self.doors().values():
            if door.position == position:
                return door
        return None

    def __repr__(self) -> str:
        return f"Room(grid_x={self._grid_x}, grid_y={self._grid_y}, visited={self._visited})"


@dataclass(frozen=True, eq=False)
class DoorLink:
    """Edge between two adjacent rooms; ``second`` sits on ``first_side`` of ``first``."""

    first: Room
    first_side: Direction
    second: Room

    @classmethod
    def connect(cls, a: Room, b: Room) -> "DoorLink":
        """Create the door between two grid-adjacent rooms and register it on both."""
        side = Direction.between(a, b)
        if side in a._doors or side.opposite in b._doors:
            raise ValueError(f"Door already present between {a!r} and {b!r}")
        link = cls(a, side, b)
        a._doors[side] = link
        b._doors[side.opposite] = link
        return link

    @property
    def second_side(self) -> Direction:
        return self.first_side.opposite

    @property
    def rooms(self) -> Tuple[Room, Room]:
        return (self.first, self.second)

    def other(self, room: Room) -> Room:
        if room is self.first:
            return self.second
        if room is self.second:
            return self.first
        raise ValueError(f"{room!r} is not an endpoint of this door")

    def endpoint(self, room: Room) -> "Door":
        if room is self.first:
            return Door(room, self.first_side, self)
        if room is self.second:
            return Door(room, self.second_side, self)
        raise ValueError(f"{room!r} is not an endpoint of this door")


@dataclass(frozen=True)
class Door:
    """One side of a :class:`DoorLink`, as seen from ``room``."""

    room: Room
    side: Direction
    link: DoorLink

    @property
    def position(self) -> Point:
        return door_position(self.room.region, self.side)

    @property
    def leads_to(self) -> Room:
        return self.link.other(self.room)

    @property
    def linked_door(self) -> "Door":
        return self.link.endpoint(self.leads_to)

    @property
    def destination(self) -> Point:
        """Tile position of the door on the far side."""
        return self.linked_door.position
