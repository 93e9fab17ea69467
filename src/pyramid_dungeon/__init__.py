"""
Pyramid dungeon topology generator.

Turns a seed into a room graph: a grid of candidate rooms, one guaranteed
path from the top row downward, and dead-end decoy branches. The package
performs no I/O outside of :mod:`.settings` and the command line entry point;
painting tiles from the graph is left to the caller.
"""

__version__ = "0.1.0"

from .errors import (
    GenerationExhausted,
    GridSealedError,
    InvalidDimension,
    OutOfBounds,
    SettingsError,
    TopologyError,
)
from .rng import TopologyRNG
from .topology import DungeonTopology, Room, RoomGrid, generate

__all__ = [
    "__version__",
    "DungeonTopology",
    "GenerationExhausted",
    "GridSealedError",
    "InvalidDimension",
    "OutOfBounds",
    "Room",
    "RoomGrid",
    "SettingsError",
    "TopologyError",
    "TopologyRNG",
    "generate",
]
