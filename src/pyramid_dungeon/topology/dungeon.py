from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..errors import GenerationExhausted
from ..rng import TopologyRNG
from .geometry import Point
from .grid import RoomGrid
from .paths import BranchProfile, Path, PathBuilder
from .progress import GenerationProgress
from .room import Direction, DoorLink, Room

if TYPE_CHECKING:  # pragma: no cover
    from ..settings import TopologySettings

logger = logging.getLogger(__name__)

# First generation branches off the correct path, later ones off the previous generation
DEFAULT_BRANCH_PROFILES: Tuple[BranchProfile, ...] = (
    BranchProfile(branch_chance_denominator=5, branch_end_denominator=50),
    BranchProfile(branch_chance_denominator=8, branch_end_denominator=30),
)
DEFAULT_DECOY_DEPTH = 2
DEFAULT_BOSS_ROOM_PADDING = 150

GENERATION_PASSES = ("Initializing", "Correct Path", "Decoy Paths")


class DungeonTopology:
    """
    The room graph of one dungeon: a grid, one correct path and its decoys.

    Build it with :meth:`generate`; the result is read-only. The grid is
    sealed, paths are tuples, and doors can only be read through rooms.

    Guarantees:
    - Same seed and parameters give the same paths and doors
    - No room appears on two paths or twice on one path
    - Consecutive rooms of every path are grid-adjacent and share a door
    """

    def __init__(
        self,
        seed: int,
        grid: RoomGrid,
        correct_path: Path,
        decoy_paths: Sequence[Path],
        boss_room_padding: int = DEFAULT_BOSS_ROOM_PADDING,
    ) -> None:
        self._seed = seed
        self._grid = grid
        self._correct_path = correct_path
        self._decoy_paths: Tuple[Path, ...] = tuple(decoy_paths)
        self._boss_room_padding = boss_room_padding

    @classmethod
    def generate(
        cls,
        seed: Optional[int],
        grid_side_length: int,
        room_cell_size: int,
        border_padding: int,
        *,
        decoy_depth: int = DEFAULT_DECOY_DEPTH,
        branch_profiles: Sequence[BranchProfile] = DEFAULT_BRANCH_PROFILES,
        boss_room_padding: int = DEFAULT_BOSS_ROOM_PADDING,
        progress: Optional[GenerationProgress] = None,
    ) -> "DungeonTopology":
        """Run the whole generation pass for one seed.

        ``decoy_depth`` is the number of decoy generations. Generation N scans
        only the branches generation N-1 produced and uses
        ``branch_profiles[N-1]``, or the last profile once they run out.
        """
        profiles = tuple(branch_profiles)
        if decoy_depth < 0:
            raise ValueError(f"decoy_depth cannot be negative, got {decoy_depth}")
        if decoy_depth > 0 and not profiles:
            raise ValueError("At least one branch profile is required when decoy_depth > 0")
        if progress is None:
            progress = GenerationProgress(pass_count=len(GENERATION_PASSES))

        progress.begin_pass(GENERATION_PASSES[0])
        grid = RoomGrid.build(grid_side_length, room_cell_size, border_padding)
        rng = TopologyRNG(seed)
        builder = PathBuilder(grid, rng)
        progress.end_pass()

        progress.begin_pass(GENERATION_PASSES[1])
        correct_path = builder.build_correct_path()
        if not correct_path:
            raise GenerationExhausted(f"No correct path could be started for seed {rng.seed}")
        progress.end_pass()

        progress.begin_pass(GENERATION_PASSES[2])
        decoys: List[Path] = []
        frontier: List[Path] = [correct_path]
        for generation in range(decoy_depth):
            profile = profiles[min(generation, len(profiles) - 1)]
            spawned: List[Path] = []
            for path in frontier:
                spawned.extend(
                    builder.spawn_decoys(path, profile.branch_chance_denominator, profile.branch_end_denominator)
                )
            logger.debug("Decoy generation %d: %d branches", generation + 1, len(spawned))
            decoys.extend(spawned)
            frontier = spawned
            progress.set((generation + 1) / decoy_depth)
        progress.end_pass()

        grid.seal()
        topology = cls(rng.seed, grid, correct_path, decoys, boss_room_padding)
        logger.info(
            "Generated topology: seed=%s grid=%dx%d correct=%d decoys=%d visited=%d/%d",
            rng.seed,
            grid.side_length,
            grid.side_length,
            len(correct_path),
            len(decoys),
            len(grid.visited_rooms()),
            len(grid),
        )
        return topology

    @classmethod
    def from_settings(
        cls, settings: "TopologySettings", *, progress: Optional[GenerationProgress] = None
    ) -> "DungeonTopology":
        return cls.generate(
            settings.seed,
            settings.grid_side_length,
            settings.room_cell_size,
            settings.border_padding,
            decoy_depth=settings.decoy_depth,
            branch_profiles=[BranchProfile(chance, end) for chance, end in settings.branch_profiles],
            boss_room_padding=settings.boss_room_padding,
            progress=progress,
        )

    # ---- Read-only accessors -----------------------------------------------
    @property
    def seed(self) -> int:
        return self._seed

    @property
    def grid(self) -> RoomGrid:
        return self._grid

    @property
    def correct_path(self) -> Path:
        return self._correct_path

    @property
    def decoy_paths(self) -> Tuple[Path, ...]:
        return self._decoy_paths

    def all_paths(self) -> Tuple[Path, ...]:
        return (self._correct_path,) + self._decoy_paths

    @property
    def starting_room(self) -> Room:
        """Where the player enters the dungeon."""
        return self._correct_path[0]

    @property
    def boss_room(self) -> Room:
        return self._correct_path[-1]

    @property
    def spawn_point(self) -> Point:
        return self.starting_room.region.center()

    @property
    def world_width(self) -> int:
        return self._grid.room_cell_size * self._grid.side_length + self._grid.border_padding * 2

    @property
    def world_height(self) -> int:
        return (
            self._grid.room_cell_size * self._grid.side_length
            + self._boss_room_padding
            + self._grid.border_padding * 2
        )

    def door_links(self) -> List[DoorLink]:
        """Every door edge once, in the order the walks created them."""
        links: List[DoorLink] = []
        for path in self.all_paths():
            for a, b in zip(path, path[1:]):
                links.append(a.doors()[Direction.between(a, b)].link)
        return links

    def __repr__(self) -> str:
        return (
            f"DungeonTopology(seed={self._seed}, side_length={self._grid.side_length}, "
            f"correct_path={len(self._correct_path)}, decoy_paths={len(self._decoy_paths)})"
        )


def generate(
    seed: Optional[int],
    grid_side_length: int,
    room_cell_size: int,
    border_padding: int,
    **kwargs,
) -> DungeonTopology:
    return DungeonTopology.generate(seed, grid_side_length, room_cell_size, border_padding, **kwargs)
