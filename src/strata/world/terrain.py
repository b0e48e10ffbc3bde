from __future__ import annotations

import enum
import random
from dataclasses import dataclass

import numpy as np

from strata.linalg import Vec2

from . import config
from .config import WorldConfig
from .grid import snap_down
from .noise_field import NoiseField, hash_coords


class BlockKind(enum.Enum):
    GROUND = "ground"
    TRUNK = "trunk"
    LEAF = "leaf"
    FRUIT = "fruit"
    CLOUD = "cloud"


@dataclass(frozen=True)
class BlockDescriptor:
    top_left: Vec2
    kind: BlockKind
    appearance_seed: int


def add_color_offset(base: tuple[int, int, int], offset: tuple[int, int, int]):
    return tuple(max(0, min(255, base[i] + offset[i])) for i in range(3))


def approximate_color(base: tuple[int, int, int], seed: int, jitter: int = config.GROUND_COLOR_JITTER):
    rng = random.Random(seed)
    offset = (
        rng.randint(-jitter, jitter),
        rng.randint(-jitter, jitter),
        rng.randint(-jitter, jitter),
    )
    return add_color_offset(base, offset)


def ground_color(block: BlockDescriptor) -> tuple[int, int, int]:
    return approximate_color(config.BASE_GROUND_COLOR, block.appearance_seed)


class TerrainModel:
    def __init__(self, cfg: WorldConfig):
        self.cfg = cfg
        self.block_size = cfg.block_size
        self.depth = cfg.terrain_depth_blocks
        self.base_y = cfg.ground_base_y
        self.noise = NoiseField(
            cfg.world_seed,
            scale=cfg.noise_scale,
            amplitude=cfg.noise_amplitude,
            octaves=cfg.noise_octaves,
        )

    @property
    def seed(self) -> int:
        return self.cfg.world_seed

    def ground_top(self, x: float) -> int:
        column = snap_down(x, self.block_size)
        return snap_down(self.base_y + self.noise(column), self.block_size)

    def column_span(self, min_x: float, max_x: float) -> tuple[int, int]:
        """First and last column ``blocks_in_range`` emits for the range."""
        b = self.block_size
        return snap_down(min_x, b) - b, snap_down(max_x, b) + b

    def columns(self, min_x: float, max_x: float) -> np.ndarray:
        first, last = self.column_span(min_x, max_x)
        return np.arange(first, last + 1, self.block_size, dtype=np.int64)

    def appearance_seed(self, x: int, y: int) -> int:
        return hash_coords(self.seed, x, y)

    def blocks_in_range(self, min_x: int, max_x: int) -> list[BlockDescriptor]:
        depth_offsets = np.arange(self.depth, dtype=np.int64) * self.block_size
        blocks: list[BlockDescriptor] = []
        for column in self.columns(min_x, max_x):
            x = int(column)
            for y in (self.ground_top(x) + depth_offsets).tolist():
                blocks.append(BlockDescriptor(Vec2(x, y), BlockKind.GROUND, self.appearance_seed(x, y)))
        return blocks
