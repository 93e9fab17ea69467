"""
Room-grid topology for the pyramid dungeon.

Contains the room grid, the weighted-walk path builder, and the orchestrator
that turns a seed into a read-only room graph for the world painter.
"""
from .dungeon import DEFAULT_BRANCH_PROFILES, DungeonTopology, generate
from .geometry import Point, Rect
from .grid import RoomGrid
from .materialize import StampRequest, plan_materialization
from .paths import BranchProfile, Path, PathBuilder, build_correct_path, spawn_decoys
from .progress import GenerationProgress
from .room import Direction, Door, DoorLink, Room
from .summary import describe, path_segments, signature

__all__ = [
    "BranchProfile",
    "DEFAULT_BRANCH_PROFILES",
    "Direction",
    "Door",
    "DoorLink",
    "DungeonTopology",
    "GenerationProgress",
    "Path",
    "PathBuilder",
    "Point",
    "Rect",
    "Room",
    "RoomGrid",
    "StampRequest",
    "build_correct_path",
    "describe",
    "generate",
    "path_segments",
    "plan_materialization",
    "signature",
    "spawn_decoys",
]
