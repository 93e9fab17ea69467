import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from pyramid_dungeon.topology import DungeonTopology, RoomGrid  # noqa: E402


@pytest.fixture
def small_grid() -> RoomGrid:
    return RoomGrid.build(4, room_cell_size=10, border_padding=5)


@pytest.fixture
def topology() -> DungeonTopology:
    return DungeonTopology.generate(1337, grid_side_length=10, room_cell_size=101, border_padding=150)
