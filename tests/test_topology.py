import pytest

from pyramid_dungeon.errors import GridSealedError, InvalidDimension
from pyramid_dungeon.settings import TopologySettings
from pyramid_dungeon.topology import (
    BranchProfile,
    Direction,
    DungeonTopology,
    GenerationProgress,
    generate,
    signature,
)

from topology_helpers import coords

SEEDS = range(1, 41)


def _adjacent(a, b) -> bool:
    return abs(a.grid_x - b.grid_x) + abs(a.grid_y - b.grid_y) == 1


@pytest.mark.parametrize("seed", SEEDS)
def test_paths_never_share_rooms(seed):
    topo = generate(seed, 10, 101, 150)

    claimed = set(topo.correct_path)
    assert len(claimed) == len(topo.correct_path)
    for branch in topo.decoy_paths:
        assert len(branch) >= 2
        # A branch opens from a room on an earlier path
        assert branch[0] in claimed
        for room in branch[1:]:
            assert room not in claimed
            claimed.add(room)

    assert claimed == set(topo.grid.visited_rooms())


@pytest.mark.parametrize("seed", SEEDS)
def test_every_path_is_adjacent_and_door_linked(seed):
    topo = generate(seed, 8, 50, 10)
    for path in topo.all_paths():
        for a, b in zip(path, path[1:]):
            assert _adjacent(a, b)
            side = Direction.between(a, b)
            door = a.doors()[side]
            assert door.leads_to is b
            assert door.linked_door.room is b
            assert door.linked_door.side is side.opposite
    for room in topo.grid.unvisited_rooms():
        assert room.doors() == {}


@pytest.mark.parametrize("seed", SEEDS)
def test_correct_path_reaches_last_row(seed):
    topo = generate(seed, 10, 101, 150)
    assert topo.starting_room.grid_y == 0
    assert topo.boss_room.grid_y == topo.grid.side_length - 1
    rows = [room.grid_y for room in topo.correct_path]
    assert rows == sorted(rows)


def test_door_count_matches_path_steps(topology):
    expected = sum(len(path) - 1 for path in topology.all_paths())
    links = topology.door_links()
    assert len(links) == expected
    assert len(set(map(id, links))) == expected


def test_same_seed_same_topology():
    a = generate(2024, 10, 101, 150)
    b = generate(2024, 10, 101, 150)
    assert [coords(p) for p in a.all_paths()] == [coords(p) for p in b.all_paths()]
    assert signature(a) == signature(b)


def test_different_seeds_vary():
    sigs = {signature(generate(seed, 10, 101, 150)) for seed in range(10)}
    assert len(sigs) > 1


def test_random_seed_is_recorded_and_replayable():
    first = generate(None, 6, 20, 0)
    assert isinstance(first.seed, int)
    replay = generate(first.seed, 6, 20, 0)
    assert signature(replay) == signature(first)


def test_single_cell_grid():
    topo = generate(9, 1, 101, 0)
    assert coords(topo.correct_path) == [(0, 0)]
    assert topo.decoy_paths == ()
    assert topo.boss_room is topo.starting_room


def test_depth_zero_has_no_decoys():
    topo = generate(5, 10, 101, 150, decoy_depth=0)
    assert topo.decoy_paths == ()


def test_negative_depth_rejected():
    with pytest.raises(ValueError):
        generate(5, 10, 101, 150, decoy_depth=-1)


def test_empty_profiles_rejected():
    with pytest.raises(ValueError):
        generate(5, 10, 101, 150, branch_profiles=())


@pytest.mark.parametrize("seed", [3, 11, 42])
def test_first_generation_is_prefix_of_deeper_runs(seed):
    shallow = generate(seed, 10, 101, 150, decoy_depth=1)
    deep = generate(seed, 10, 101, 150, decoy_depth=3)
    shallow_coords = [coords(p) for p in shallow.decoy_paths]
    deep_coords = [coords(p) for p in deep.decoy_paths]
    assert deep_coords[: len(shallow_coords)] == shallow_coords
    assert coords(shallow.correct_path) == coords(deep.correct_path)


def test_first_generation_branches_off_correct_path():
    topo = generate(17, 10, 101, 150, decoy_depth=1, branch_profiles=[BranchProfile(1, 1000)])
    assert topo.decoy_paths
    for branch in topo.decoy_paths:
        assert branch[0] in topo.correct_path


def test_second_generation_branches_off_first_generation():
    profiles = [BranchProfile(1, 1000), BranchProfile(1, 1000)]
    shallow = generate(17, 10, 101, 150, decoy_depth=1, branch_profiles=profiles)
    deep = generate(17, 10, 101, 150, decoy_depth=2, branch_profiles=profiles)
    first_generation = {xy for path in shallow.decoy_paths for xy in coords(path)}
    for branch in deep.decoy_paths[len(shallow.decoy_paths) :]:
        origin = (branch[0].grid_x, branch[0].grid_y)
        assert origin in first_generation


def test_grid_is_sealed_after_generation(topology):
    assert topology.grid.sealed
    spare = topology.grid.unvisited_rooms()
    if spare:
        with pytest.raises(GridSealedError):
            topology.grid.claim(spare[0])


def test_progress_reports_every_pass():
    progress = GenerationProgress(pass_count=3)
    generate(1, 10, 101, 150, progress=progress)
    assert progress.done
    assert progress.total == 1.0
    assert progress.message == "Decoy Paths"
    assert progress.passes_completed == 3


def test_world_dimensions_and_spawn(topology):
    assert topology.world_width == 101 * 10 + 150 * 2
    assert topology.world_height == 101 * 10 + 150 + 150 * 2
    assert topology.spawn_point == topology.starting_room.region.center()
    assert topology.grid.room_at_tile(topology.spawn_point) is topology.starting_room


@pytest.mark.parametrize("side,cell,padding", [(0, 101, 0), (10, 0, 0), (10, 101, -1)])
def test_invalid_dimensions_propagate(side, cell, padding):
    with pytest.raises(InvalidDimension):
        generate(1, side, cell, padding)


def test_from_settings_matches_generate():
    settings = TopologySettings(seed=99, grid_side_length=6, room_cell_size=30, border_padding=4)
    settings.validate()
    a = DungeonTopology.from_settings(settings)
    b = generate(99, 6, 30, 4)
    assert signature(a) == signature(b)
    assert a.world_height == 6 * 30 + 150 + 8


def test_progress_shares_and_clamps():
    progress = GenerationProgress(pass_count=2)
    progress.begin_pass("Correct Path")
    progress.set(0.5)
    assert progress.total == 0.25
    progress.set(7)
    assert progress.value == 1.0
    progress.end_pass()
    progress.end_pass()
    progress.end_pass()
    assert progress.passes_completed == 2
    assert progress.total == 1.0
    with pytest.raises(ValueError):
        GenerationProgress(pass_count=0)
