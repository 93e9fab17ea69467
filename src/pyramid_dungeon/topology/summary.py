from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List, Sequence, Tuple

from .dungeon import DungeonTopology
from .geometry import Point
from .room import Room


def _to_stable_json(value: Any) -> str:
    """Stable JSON encoding for hashing."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _coords(path: Sequence[Room]) -> List[List[int]]:
    return [[room.grid_x, room.grid_y] for room in path]


def path_segments(path: Sequence[Room]) -> List[Tuple[Point, Point]]:
    """Center-to-center segments between consecutive rooms, for debug overlays."""
    return [(a.region.center(), b.region.center()) for a, b in zip(path, path[1:])]


def describe(topology: DungeonTopology) -> Dict[str, Any]:
    """JSON-serializable view of the room graph."""
    grid = topology.grid
    spawn = topology.spawn_point
    doors = [
        {
            "from": [link.first.grid_x, link.first.grid_y],
            "to": [link.second.grid_x, link.second.grid_y],
            "side": link.first_side.name.lower(),
        }
        for link in topology.door_links()
    ]
    visited = len(grid.visited_rooms())
    return {
        "seed": topology.seed,
        "grid_side_length": grid.side_length,
        "room_cell_size": grid.room_cell_size,
        "border_padding": grid.border_padding,
        "world": {"width": topology.world_width, "height": topology.world_height},
        "spawn": [spawn.x, spawn.y],
        "correct_path": _coords(topology.correct_path),
        "decoy_paths": [_coords(path) for path in topology.decoy_paths],
        "doors": doors,
        "rooms": {"visited": visited, "solid": len(grid) - visited},
    }


def signature(topology: DungeonTopology) -> str:
    data = _to_stable_json(describe(topology)).encode("utf-8")
    return hashlib.blake2b(data, digest_size=16).hexdigest()
