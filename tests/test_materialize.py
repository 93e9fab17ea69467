from types import SimpleNamespace

from pyramid_dungeon.topology import Point, Rect, Room, StampRequest, generate, plan_materialization
from pyramid_dungeon.topology.materialize import structure_key_for


def test_plan_skips_boss_room_and_covers_every_other_path_room(topology):
    plan = plan_materialization(topology)
    stamped = [req.room for req in plan]

    assert topology.boss_room not in stamped
    expected = set(topology.correct_path[:-1])
    for path in topology.decoy_paths:
        expected.update(path)
    assert set(stamped) == expected
    assert len(stamped) == len(expected), "Each room is stamped once"


def test_stamp_keys_and_origins(topology):
    plan = plan_materialization(topology)
    assert plan
    for req in plan:
        assert isinstance(req, StampRequest)
        assert req.structure_key == "PyramidRooms/1x1/Room0.struct"
        assert req.origin == Point(req.room.region.x + 1, req.room.region.y + 1)
        assert req.room.materialized


def test_custom_structure_root():
    topo = generate(4, 5, 20, 0, decoy_depth=0)
    plan = plan_materialization(topo, structure_root="Prefabs/Inner")
    assert {req.structure_key for req in plan} == {"Prefabs/Inner/1x1/Room0.struct"}


def test_second_plan_is_empty(topology):
    assert plan_materialization(topology)
    assert plan_materialization(topology) == []


def test_large_rooms_are_marked_but_not_stamped():
    small = Room(0, 0, Rect(0, 0, 10, 10))
    large = Room(1, 0, Rect(10, 0, 20, 10), footprint_width=2)
    boss = Room(0, 1, Rect(0, 10, 10, 10))
    fake = SimpleNamespace(correct_path=(small, large, boss), decoy_paths=())

    plan = plan_materialization(fake)

    assert [req.room for req in plan] == [small]
    assert large.materialized
    assert not boss.materialized
    assert structure_key_for(large) == "PyramidRooms/2x1/Room0.struct"


def test_boss_room_on_decoy_path_is_stamped():
    a = Room(0, 0, Rect(0, 0, 10, 10))
    boss = Room(1, 0, Rect(10, 0, 10, 10))
    fake = SimpleNamespace(correct_path=(a, boss), decoy_paths=((boss, Room(2, 0, Rect(20, 0, 10, 10))),))

    plan = plan_materialization(fake)

    assert boss in [req.room for req in plan]
