"""
Weighted random walks over a :class:`RoomGrid`.

Two walks share the same shape: look at the rooms below, left and right of
the current room, weight whichever are eligible and step into the one drawn.

- The correct path leans downward (34 vs 33/33) so it makes progress toward
  the last row while still wandering sideways. It ends when nothing is left
  to step into.
- Decoy branches lean sideways (25 vs 37.5/37.5) and carry a stop roll that
  gets more likely with every step, so they die out as dead ends.

Every step claims the room it enters and links a door back to the previous
room. A claimed room can never be entered again by any walk.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..errors import GenerationExhausted
from ..rng import TopologyRNG
from .grid import RoomGrid
from .room import DoorLink, Room

logger = logging.getLogger(__name__)

Path = Tuple[Room, ...]

CORRECT_BELOW_WEIGHT = 34.0
CORRECT_SIDE_WEIGHT = 33.0

BRANCH_BELOW_WEIGHT = 25.0
BRANCH_SIDE_WEIGHT = 37.5

# Each successful branch step makes the next stop roll this much likelier
BRANCH_END_TIGHTENING = 5


@dataclass(frozen=True)
class BranchProfile:
    """Starting 1-in-N denominators for one generation of decoy branches.

    ``branch_chance_denominator`` decides whether a room on the scanned path
    sprouts a branch; every miss lowers it by one until a hit resets it.
    ``branch_end_denominator`` decides whether a growing branch stops; every
    step lowers it by five.
    """

    branch_chance_denominator: int
    branch_end_denominator: int

    def __post_init__(self) -> None:
        if self.branch_chance_denominator < 1 or self.branch_end_denominator < 1:
            raise ValueError(
                "Branch denominators must be >= 1, got "
                f"{self.branch_chance_denominator}/{self.branch_end_denominator}"
            )


class PathBuilder:
    """Builds the correct path and decoy branches on one grid with one RNG."""

    def __init__(self, grid: RoomGrid, rng: TopologyRNG) -> None:
        self.grid = grid
        self.rng = rng

    # ---- Correct path ------------------------------------------------------
    def build_correct_path(self) -> Path:
        grid, rng = self.grid, self.rng
        start = grid.room_at(rng.next_int(grid.side_length), 0)
        if start.visited:
            raise GenerationExhausted(f"Starting room {start!r} is already claimed; use a fresh grid")
        grid.claim(start)
        path: List[Room] = [start]

        current: Optional[Room] = start
        while current is not None:
            below = grid.neighbor_below(current)
            left = grid.neighbor_left(current)
            right = grid.neighbor_right(current)

            choices: List[Tuple[Room, float]] = []
            if below is not None:
                choices.append((below, CORRECT_BELOW_WEIGHT))
            if left is not None and not left.visited:
                choices.append((left, CORRECT_SIDE_WEIGHT))
            if right is not None and not right.visited:
                choices.append((right, CORRECT_SIDE_WEIGHT))

            if not choices:
                current = None
                continue

            selected = rng.weighted_choice(choices)
            path.append(selected)
            grid.claim(selected)
            DoorLink.connect(current, selected)
            current = selected

        logger.debug(
            "Correct path: %d rooms from (%d,%d) to (%d,%d)",
            len(path),
            path[0].grid_x,
            path[0].grid_y,
            path[-1].grid_x,
            path[-1].grid_y,
        )
        return tuple(path)

    # ---- Decoy branches ----------------------------------------------------
    def _fully_enclosed(self, room: Room) -> bool:
        # A missing neighbor is not a visited one, so edge rooms never count as enclosed
        neighbors = (
            self.grid.neighbor_below(room),
            self.grid.neighbor_left(room),
            self.grid.neighbor_right(room),
        )
        return all(n is not None and n.visited for n in neighbors)

    def spawn_decoys(
        self,
        path_to_scan: Sequence[Optional[Room]],
        branch_chance_denominator: int,
        branch_end_denominator: int,
    ) -> List[Path]:
        """Scan a path and grow dead-end branches off it.

        Returns the kept branches (two rooms or more) in the order they
        sprouted. Each branch starts with the room it sprouted from.
        """
        profile = BranchProfile(branch_chance_denominator, branch_end_denominator)
        chance = profile.branch_chance_denominator
        branches: List[Path] = []

        for origin in path_to_scan:
            if origin is None or self._fully_enclosed(origin):
                continue

            if self.rng.one_in(chance):
                chance = profile.branch_chance_denominator
                branch = self._grow_branch(origin, profile.branch_end_denominator)
                if len(branch) > 1:
                    branches.append(branch)
                    logger.debug(
                        "Decoy branch of %d rooms from (%d,%d)", len(branch), origin.grid_x, origin.grid_y
                    )
            else:
                chance = max(1, chance - 1)

        return branches

    def _grow_branch(self, origin: Room, branch_end_denominator: int) -> Path:
        grid, rng = self.grid, self.rng
        end_chance = branch_end_denominator
        branch: List[Room] = [origin]
        current = origin

        while True:
            below = grid.neighbor_below(current)
            left = grid.neighbor_left(current)
            right = grid.neighbor_right(current)

            choices: List[Tuple[Room, float]] = []
            if below is not None and not below.visited:
                choices.append((below, BRANCH_BELOW_WEIGHT))
            if left is not None and not left.visited:
                choices.append((left, BRANCH_SIDE_WEIGHT))
            if right is not None and not right.visited:
                choices.append((right, BRANCH_SIDE_WEIGHT))
            if not choices:
                break

            selected = rng.weighted_choice(choices)
            # The stop roll is consumed before the candidate is checked
            if rng.one_in(end_chance) or selected is None or selected.visited:
                break

            branch.append(selected)
            grid.claim(selected)
            DoorLink.connect(current, selected)
            end_chance = min(max(end_chance - BRANCH_END_TIGHTENING, 1), branch_end_denominator)
            current = selected

        return tuple(branch)


def build_correct_path(grid: RoomGrid, rng: TopologyRNG) -> Path:
    return PathBuilder(grid, rng).build_correct_path()


def spawn_decoys(
    path_to_scan: Sequence[Optional[Room]],
    branch_chance_denominator: int,
    branch_end_denominator: int,
    grid: RoomGrid,
    rng: TopologyRNG,
) -> List[Path]:
    return PathBuilder(grid, rng).spawn_decoys(path_to_scan, branch_chance_denominator, branch_end_denominator)
