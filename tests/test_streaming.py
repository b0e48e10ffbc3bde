from __future__ import annotations

import math
import random

import pytest

from strata.world.grid import align_down, align_up

from .conftest import START_X, build_world


def expected_blocks(world, lo, hi):
    return {d.top_left for d in world.terrain.blocks_in_range(math.floor(lo), math.floor(hi))}


def expected_slots(world, lo, hi):
    pitch = world.cfg.tree_pitch
    return list(range(align_up(math.ceil(lo), pitch), align_down(math.floor(hi), pitch) + 1, pitch))


def assert_matches_window(world):
    lo, hi = world.streaming.window
    assert world.region.positions() == expected_blocks(world, lo, hi)
    assert world.flora.slots() == expected_slots(world, lo, hi)
    attached_trees = sum(1 for _ in world.flora.trunks())
    assert attached_trees == len(world.flora)


def test_tick_before_start_does_nothing(world):
    assert not world.streaming.is_ready
    assert not world.streaming.tick(5000)
    assert len(world.region) == 0
    assert len(world.flora) == 0


def test_start_populates_the_initial_window(started):
    assert started.streaming.is_ready
    assert started.streaming.window == (-300, 1100)
    assert sorted(started.region.columns()) == list(range(-330, 1111, 30))
    assert len(started.region.columns()) == 49
    assert len(started.region) == 49 * started.cfg.terrain_depth_blocks
    assert started.flora.slots() == [-210, 0, 210, 420, 630, 840, 1050]


def test_small_step_is_ignored(started):
    blocks = started.region.positions()
    trees = started.flora.slots()
    assert not started.streaming.tick(START_X + 60)
    assert started.streaming.window == (-300, 1100)
    assert started.streaming.last_avatar_x == START_X
    assert started.region.positions() == blocks
    assert started.flora.slots() == trees


def test_threshold_step_reconciles(started):
    assert started.streaming.tick(START_X + 90)
    assert started.streaming.window == (-210, 1190)
    columns = sorted(started.region.columns())
    assert columns[0] == -240
    assert columns[-1] == 1200
    assert len(columns) == 49
    assert started.flora.slots() == [-210, 0, 210, 420, 630, 840, 1050]
    assert_matches_window(started)


def test_long_jump_right(started):
    """A 1000 px jump lands on window [700, 2100]. That holds 50 columns, not the
    49 of the initial window: 700 is not block-aligned, so the window straddles
    one more column than an aligned 1400 px window would."""
    assert started.streaming.tick(1400)
    assert started.streaming.window == (700, 2100)
    columns = sorted(started.region.columns())
    assert columns[0] == 660
    assert columns[-1] == 2130
    assert len(columns) == 50
    assert started.flora.slots() == [840, 1050, 1260, 1470, 1680, 1890, 2100]
    assert_matches_window(started)


def test_long_jump_left(started):
    assert started.streaming.tick(START_X - 1000)
    assert started.streaming.window == (-1300, 100)
    assert_matches_window(started)
    assert started.flora.slots() == [-1260, -1050, -840, -630, -420, -210, 0]


def test_round_trip_restores_the_same_keys(started):
    blocks = started.region.positions()
    trees = started.flora.slots()
    started.streaming.tick(START_X + 1200)
    assert_matches_window(started)
    started.streaming.tick(START_X)
    assert started.streaming.window == (-300, 1100)
    assert started.region.positions() == blocks
    assert started.flora.slots() == trees


def test_scene_holds_only_what_the_window_needs(started):
    for x in (START_X + 90, START_X + 700, START_X + 2500, START_X - 900, START_X - 5000):
        started.streaming.tick(x)
        tree_parts = sum(len(list(t.parts())) for t in started.flora.trees.values())
        assert len(started.scene) == len(started.region) + tree_parts


def test_fractional_steps_keep_the_window_exact(started):
    x = START_X
    for step in (91.5, 133.25, -97.75, 250.1, -412.9, 90.5, -90.5):
        x += step
        assert started.streaming.tick(x)
        assert_matches_window(started)


@pytest.mark.parametrize("seed", [0, 1, 42, 2**31 - 1])
def test_random_walk_keeps_a_bounded_working_set(make_world, seed):
    world = make_world(world_seed=seed)
    world.streaming.start(START_X)
    cfg = world.cfg
    max_columns = math.ceil(world.streaming.width / cfg.block_size) + 3
    max_trees = math.floor(world.streaming.width / cfg.tree_pitch) + 1

    rng = random.Random(seed)
    x = START_X
    for _ in range(300):
        x += rng.uniform(-400, 400)
        world.streaming.tick(x)
        assert len(world.region.columns()) <= max_columns
        assert len(world.region) <= max_columns * cfg.terrain_depth_blocks
        assert len(world.flora) <= max_trees
        assert_matches_window(world)


def test_same_seed_same_world_after_the_same_walk(cfg):
    a, b = build_world(cfg), build_world(cfg)
    a.streaming.start(START_X)
    b.streaming.start(START_X)
    for x in (490, 1490, 300, -900, -880, 2500, 2400):
        assert a.streaming.tick(x) == b.streaming.tick(x)
        assert a.region.positions() == b.region.positions()
        assert [blk.descriptor for blk in sorted(a.region, key=lambda blk: (blk.top_left.x, blk.top_left.y))] == \
            [blk.descriptor for blk in sorted(b.region, key=lambda blk: (blk.top_left.x, blk.top_left.y))]
        assert a.flora.descriptors() == b.flora.descriptors()


def test_teardown_releases_everything(started):
    started.streaming.tick(START_X + 500)
    started.streaming.teardown()
    assert not started.streaming.is_ready
    assert len(started.region) == 0
    assert len(started.flora) == 0
    assert len(started.scene) == 0
    assert not started.streaming.tick(START_X + 5000)
