"""Tree assembly: a pure function from a slot and its RNG to part descriptors.

The draw order on the per-slot RNG is part of the world format. Changing it
changes every tree in every seed:

1. trunk height
2. shape
3. trunk shade
4. one shade per leaf, in leaf creation order
5. one fruit roll per leaf, in the same order

Canopies grow upward from the trunk top. A TRIANGLE has its single-leaf row
sitting on the trunk and widens going up (1, 2, 3, 4 leaves), so the widest
row is the highest one, not the lowest. A DIAMOND is a three-row triangle of
that kind capped by a two-row triangle that narrows going up.
"""
from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass

from strata.linalg import Vec2

from . import config
from .config import WorldConfig
from .noise_field import hash_coords
from .terrain import BlockKind


class TreeShape(enum.Enum):
    DIAMOND = "diamond"
    TRIANGLE = "triangle"
    SQUARE = "square"


SHAPES = (TreeShape.DIAMOND, TreeShape.TRIANGLE, TreeShape.SQUARE)


@dataclass(frozen=True)
class PartDescriptor:
    kind: BlockKind
    top_left: Vec2
    size: Vec2
    color: tuple[int, int, int]
    shade: float = 0.0
    anchor: Vec2 | None = None  # leaf a fruit hangs from


@dataclass(frozen=True)
class TreeDescriptor:
    slot_x: int
    ground_y: int
    trunk_height: int
    shape: TreeShape
    shade: float
    rng_seed: int
    trunk: PartDescriptor
    leaves: tuple[PartDescriptor, ...]
    fruits: tuple[PartDescriptor, ...]

    @property
    def position(self) -> Vec2:
        return Vec2(self.slot_x, self.ground_y)

    def parts(self) -> tuple[PartDescriptor, ...]:
        return (self.trunk, *self.leaves, *self.fruits)


def slot_seed(x, world_seed: int) -> int:
    return hash_coords(world_seed, math.floor(x))


def trunk_color(shade: float) -> tuple[int, int, int]:
    return (100 + int(shade * 50), 50 + int(shade * 25), 20 + int(shade * 10))


def leaf_color(shade: float) -> tuple[int, int, int]:
    return (50, 150 + int(shade * 55), 30)


def fruit_color(rng: random.Random) -> tuple[int, int, int]:
    red = 0.5 + rng.random() * 0.5
    green = rng.random() * 0.5
    blue = rng.random() * 0.5
    return (round(red * 255), round(green * 255), round(blue * 255))


def square_leaf_positions(slot_x: float, top_y: float) -> list[Vec2]:
    step = config.LEAF_SIZE + config.SPACE_BETWEEN_LEAVES
    start_x = slot_x + config.TRUNK_WIDTH / 2 - config.SQUARE_OFFSET_X_FACTOR * step
    start_y = top_y - config.SQUARE_OFFSET_Y_FACTOR * step
    return [
        Vec2(start_x + col * step, start_y + row * step)
        for row in range(config.SQUARE_ROWS)
        for col in range(config.SQUARE_COLS)
    ]


def _triangle_row_width(row: int, rows: int, widening: bool) -> float:
    count = row + 1 if widening else rows - row
    return count * config.LEAF_SIZE + (count - 1) * config.TRIANGLE_SPACE_BETWEEN_LEAVES


def triangle_leaf_positions(slot_x: float, top_y: float, rows: int, widening: bool = True) -> list[Vec2]:
    """Rows stack upward from ``top_y``. A widening triangle holds r+1
    leaves on row r; a narrowing one holds rows-r."""
    center_x = slot_x + config.TRUNK_WIDTH / 2
    start_y = top_y - config.TRIANGLE_START_OFFSET_Y
    spacing = config.LEAF_SIZE + config.TRIANGLE_SPACE_BETWEEN_LEAVES
    positions = []
    for row in range(rows):
        count = row + 1 if widening else rows - row
        row_start_x = center_x - _triangle_row_width(row, rows, widening) / 2
        y = start_y - row * (config.LEAF_SIZE + config.LEAF_ROW_SPACING)
        positions.extend(Vec2(row_start_x + col * spacing, y) for col in range(count))
    return positions


def diamond_leaf_positions(slot_x: float, top_y: float) -> list[Vec2]:
    lower = triangle_leaf_positions(slot_x, top_y, config.DIAMOND_LOWER_ROWS, widening=True)
    lift = config.DIAMOND_LOWER_ROWS * (config.LEAF_SIZE + config.LEAF_ROW_SPACING)
    upper = triangle_leaf_positions(slot_x, top_y - lift, config.DIAMOND_UPPER_ROWS, widening=False)
    return lower + upper


def leaf_positions(shape: TreeShape, slot_x: float, top_y: float) -> list[Vec2]:
    if shape is TreeShape.SQUARE:
        return square_leaf_positions(slot_x, top_y)
    if shape is TreeShape.TRIANGLE:
        return triangle_leaf_positions(slot_x, top_y, config.TRIANGLE_ROWS)
    return diamond_leaf_positions(slot_x, top_y)


def assemble_tree(slot_x: int, ground_y: int, cfg: WorldConfig) -> TreeDescriptor:
    seed = slot_seed(slot_x, cfg.world_seed)
    rng = random.Random(seed)

    lo, hi = cfg.trunk_height_range
    trunk_height = math.ceil(lo + rng.random() * (hi - lo))
    shape = SHAPES[int(rng.random() * len(SHAPES))]
    shade = rng.random()

    top_y = ground_y - trunk_height
    trunk = PartDescriptor(
        BlockKind.TRUNK,
        Vec2(slot_x, top_y),
        Vec2(config.TRUNK_WIDTH, trunk_height),
        trunk_color(shade),
        shade,
    )

    leaf_size = Vec2.splat(config.LEAF_SIZE)
    leaves = []
    for pos in leaf_positions(shape, slot_x, top_y):
        leaf_shade = rng.random()
        leaves.append(PartDescriptor(BlockKind.LEAF, pos, leaf_size, leaf_color(leaf_shade), leaf_shade))

    fruit_size = Vec2.splat(config.FRUIT_SIZE)
    offset = Vec2(*config.FRUIT_OFFSET)
    fruits = []
    for leaf in leaves:
        if rng.random() < cfg.fruit_probability:
            pos = leaf.top_left + offset
            color = fruit_color(random.Random(slot_seed(pos.x, cfg.world_seed)))
            fruits.append(PartDescriptor(BlockKind.FRUIT, pos, fruit_size, color, anchor=leaf.top_left))

    return TreeDescriptor(
        slot_x=slot_x,
        ground_y=ground_y,
        trunk_height=trunk_height,
        shape=shape,
        shade=shade,
        rng_seed=seed,
        trunk=trunk,
        leaves=tuple(leaves),
        fruits=tuple(fruits),
    )
