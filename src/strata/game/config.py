from __future__ import annotations

from strata.world import config as world_config

WIDTH = world_config.WINDOW_WIDTH
HEIGHT = world_config.WINDOW_HEIGHT
FPS_LIMIT = 60
MAX_DT = 1.0 / 20.0  # clamp long frames so the avatar never tunnels through a block

SKY_COLOR = (120, 170, 230)
AVATAR_COLOR = (240, 240, 255)

AVATAR_SIZE = 50
AVATAR_VERTICAL_OFFSET = 8
GRAVITY = 600.0       # px/s^2
MOVE_SPEED = 300.0    # px/s
JUMP_VELOCITY = -450.0
