from __future__ import annotations

import pytest

from strata.linalg import Vec2
from strata.world.config import WorldConfig
from strata.world.grid import snap_down
from strata.world.terrain import BlockKind, TerrainModel, approximate_color, ground_color


def test_ground_top_is_block_aligned_and_pure(cfg):
    terrain = TerrainModel(cfg)
    for x in range(-3000, 3000, 17):
        top = terrain.ground_top(x)
        assert isinstance(top, int)
        assert top % cfg.block_size == 0
        assert terrain.ground_top(x) == top


def test_ground_top_is_constant_within_a_column(cfg):
    terrain = TerrainModel(cfg)
    for column in range(-600, 600, 30):
        assert terrain.ground_top(column) == terrain.ground_top(column + 29.5)


def test_ground_stays_inside_the_playfield(cfg):
    terrain = TerrainModel(cfg)
    low = cfg.ground_base_y - cfg.noise_amplitude - cfg.block_size
    high = cfg.ground_base_y + cfg.noise_amplitude
    for x in range(-50000, 50000, 30):
        assert low <= terrain.ground_top(x) <= high


WALK_SEEDS = [0, 42, 255, 256, 1000, 123456789, 2**31 - 1]


def _columns_to_check(terrain):
    """Columns around the origin and around both lattice wrap points."""
    b = terrain.block_size
    field = terrain.noise
    columns = list(range(-6000, 6000, b))
    for wrap_x in ((256 - field.offset) * field.scale, -field.offset * field.scale):
        start = snap_down(wrap_x, b)
        columns.extend(range(start - 50 * b, start + 50 * b, b))
    return columns


@pytest.mark.parametrize("seed", WALK_SEEDS)
def test_neighbouring_columns_are_walkable(seed):
    cfg = WorldConfig(world_seed=seed)
    terrain = TerrainModel(cfg)
    limit = 3 * cfg.block_size
    for x in _columns_to_check(terrain):
        assert abs(terrain.ground_top(x + cfg.block_size) - terrain.ground_top(x)) <= limit, x


def test_seeds_past_the_noise_base_shift_the_lattice():
    assert TerrainModel(WorldConfig(world_seed=42)).noise.offset == 0
    assert TerrainModel(WorldConfig(world_seed=256)).noise.offset != 0


def test_block_kinds():
    assert {k.name for k in BlockKind} == {"GROUND", "TRUNK", "LEAF", "FRUIT", "CLOUD"}


def test_same_seed_same_terrain(cfg):
    a, b = TerrainModel(cfg), TerrainModel(WorldConfig(world_seed=cfg.world_seed))
    assert a.blocks_in_range(-1000, 1000) == b.blocks_in_range(-1000, 1000)


def test_different_seeds_change_the_ground():
    a, b = TerrainModel(WorldConfig(world_seed=1)), TerrainModel(WorldConfig(world_seed=2))
    assert [a.ground_top(x) for x in range(0, 9000, 30)] != [b.ground_top(x) for x in range(0, 9000, 30)]


def test_initial_window_spans_49_columns(cfg):
    terrain = TerrainModel(cfg)
    columns = terrain.columns(-300, 1100)
    assert len(columns) == 49
    assert columns[0] == -330
    assert columns[-1] == 1110
    assert terrain.column_span(-300, 1100) == (-330, 1110)


def test_blocks_in_range_stacks_depth_blocks_per_column(cfg):
    terrain = TerrainModel(cfg)
    blocks = terrain.blocks_in_range(-300, 1100)
    assert len(blocks) == 49 * cfg.terrain_depth_blocks

    by_column: dict[int, list[int]] = {}
    for block in blocks:
        assert block.kind is BlockKind.GROUND
        by_column.setdefault(block.top_left.x, []).append(block.top_left.y)
    for x, ys in by_column.items():
        top = terrain.ground_top(x)
        assert ys == [top + i * cfg.block_size for i in range(cfg.terrain_depth_blocks)]


def test_blocks_in_range_has_no_duplicates(cfg):
    terrain = TerrainModel(cfg)
    positions = [b.top_left for b in terrain.blocks_in_range(-1234, 987)]
    assert len(positions) == len(set(positions))


def test_adjacent_ranges_cover_their_union(cfg):
    terrain = TerrainModel(cfg)
    left = terrain.blocks_in_range(-700, 100)
    right = terrain.blocks_in_range(101, 900)
    union = terrain.blocks_in_range(-700, 900)
    assert set(left) | set(right) >= set(union)


def test_appearance_is_a_pure_function_of_position(cfg):
    a, b = TerrainModel(cfg), TerrainModel(cfg)
    assert a.appearance_seed(90, 420) == b.appearance_seed(90, 420)
    block = a.blocks_in_range(0, 10)[0]
    assert ground_color(block) == ground_color(block)


def test_ground_color_is_jittered_around_the_base():
    for seed in range(50):
        color = approximate_color((212, 123, 74), seed, jitter=10)
        assert abs(color[0] - 212) <= 10
        assert abs(color[1] - 123) <= 10
        assert abs(color[2] - 74) <= 10


def test_block_descriptor_is_immutable(cfg):
    block = TerrainModel(cfg).blocks_in_range(0, 10)[0]
    with pytest.raises(AttributeError):
        block.top_left = Vec2(0, 0)
