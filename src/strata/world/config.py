from __future__ import annotations

from dataclasses import dataclass

# Terrain
BLOCK_SIZE = 30
TERRAIN_DEPTH_BLOCKS = 20
GROUND_HEIGHT_RATIO = 2.0 / 3.0
NOISE_SCALE_BLOCKS = 7  # noise cell is this many blocks wide
NOISE_AMPLITUDE = 4 * BLOCK_SIZE
NOISE_OCTAVES = 2
BASE_GROUND_COLOR = (212, 123, 74)
GROUND_COLOR_JITTER = 10

# Flora
TREE_PITCH = 210
TRUNK_WIDTH = 30
TRUNK_HEIGHT_RANGE = (95.0, 150.0)
LEAF_SIZE = 30
SPACE_BETWEEN_LEAVES = 3
TRIANGLE_SPACE_BETWEEN_LEAVES = 18
LEAF_ROW_SPACING = 3
TRIANGLE_START_OFFSET_Y = 8
TRIANGLE_ROWS = 4
SQUARE_ROWS = 4
SQUARE_COLS = 4
SQUARE_OFFSET_X_FACTOR = 2.0
SQUARE_OFFSET_Y_FACTOR = 2.5
DIAMOND_LOWER_ROWS = 3
DIAMOND_UPPER_ROWS = 2
FRUIT_SIZE = 20
FRUIT_OFFSET = (4, 4)
FRUIT_PROBABILITY = 0.2
FRUIT_RESPAWN_INTERVAL = 30.0

# Leaf sway
SWAY_DURATION = 2.0
SWAY_MAX_DELAY = 5.0
SWAY_ANGLE = (-5.0, 5.0)
SWAY_MIN_SIZE_FACTOR = 0.95

# Streaming window
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_PAD = 300.0
UPDATE_THRESHOLD_BLOCKS = 3


@dataclass(frozen=True)
class WorldConfig:
    world_seed: int = 0
    block_size: int = BLOCK_SIZE
    terrain_depth_blocks: int = TERRAIN_DEPTH_BLOCKS
    tree_pitch: int = TREE_PITCH
    trunk_height_range: tuple[float, float] = TRUNK_HEIGHT_RANGE
    fruit_probability: float = FRUIT_PROBABILITY
    window_pad: float = WINDOW_PAD
    update_threshold: float | None = None
    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT
    noise_amplitude: float = NOISE_AMPLITUDE
    noise_octaves: int = NOISE_OCTAVES
    fruit_respawn_interval: float = FRUIT_RESPAWN_INTERVAL

    def __post_init__(self):
        if self.block_size <= 0:
            raise ValueError("block_size must be positive")
        if self.tree_pitch <= 0:
            raise ValueError("tree_pitch must be positive")
        if self.terrain_depth_blocks <= 0:
            raise ValueError("terrain_depth_blocks must be positive")
        lo, hi = self.trunk_height_range
        if lo > hi:
            raise ValueError("trunk_height_range must be (min, max)")
        if not 0.0 <= self.fruit_probability <= 1.0:
            raise ValueError("fruit_probability must be within [0, 1]")
        if self.update_threshold is None:
            object.__setattr__(self, "update_threshold", float(UPDATE_THRESHOLD_BLOCKS * self.block_size))
        if self.update_threshold < 2:
            raise ValueError("update_threshold must be at least 2 pixels")

    @property
    def ground_base_y(self) -> float:
        return self.window_height * GROUND_HEIGHT_RATIO

    @property
    def noise_scale(self) -> float:
        return float(NOISE_SCALE_BLOCKS * self.block_size)


# Object tags
AVATAR_TAG = "avatar"
GROUND_TAG = "ground"
TRUNK_TAG = "trunk"
LEAF_TAG = "leaf"
FRUIT_TAG = "fruit"
