"""
Plan which rooms the world painter should stamp with a prefab structure.

Nothing here touches tiles. The plan walks the correct path (without the boss
room, which gets its own arena) and then every decoy path, marking each room
materialized as it goes so a room shared by two requests is only stamped once.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .dungeon import DungeonTopology
from .geometry import Point
from .room import Room

logger = logging.getLogger(__name__)

DEFAULT_STRUCTURE_ROOT = "PyramidRooms"


@dataclass(frozen=True)
class StampRequest:
    room: Room
    structure_key: str
    origin: Point


def structure_key_for(room: Room, structure_root: str = DEFAULT_STRUCTURE_ROOT) -> str:
    return f"{structure_root}/{room.footprint_width}x{room.footprint_height}/Room0.struct"


def _rooms_in_stamp_order(topology: DungeonTopology) -> Iterable[Room]:
    yield from topology.correct_path[:-1]
    for path in topology.decoy_paths:
        yield from path


def plan_materialization(
    topology: DungeonTopology, structure_root: str = DEFAULT_STRUCTURE_ROOT
) -> List[StampRequest]:
    requests: List[StampRequest] = []
    skipped_large = 0
    for room in _rooms_in_stamp_order(topology):
        if not room.mark_materialized():
            continue
        # Only 1x1 prefabs exist so far; larger footprints are reserved
        if not room.is_single_cell:
            skipped_large += 1
            continue
        origin = Point(room.region.x + 1, room.region.y + 1)
        requests.append(StampRequest(room, structure_key_for(room, structure_root), origin))
    logger.debug("Materialization plan: %d stamps, %d large rooms reserved", len(requests), skipped_large)
    return requests
