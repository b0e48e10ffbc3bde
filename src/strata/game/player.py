from __future__ import annotations

import pygame

from strata.engine.render import RectangleRenderable
from strata.engine.scene import GameObject, Layer, SceneGraph
from strata.linalg import Vec2
from strata.world import config as world_config

from . import config
from .physics import dispatch_collisions, move_axis


class Avatar(GameObject):
    def __init__(self, top_left: Vec2):
        super().__init__(top_left, Vec2.splat(config.AVATAR_SIZE), RectangleRenderable(config.AVATAR_COLOR),
                         tag=world_config.AVATAR_TAG)
        self.v_y = 0.0
        self.grounded = False
        self.fruits_eaten = 0

    @property
    def x(self) -> float:
        return self.top_left.x

    def on_fruit_collected(self) -> None:
        self.fruits_eaten += 1


def read_input() -> tuple[int, bool]:
    keys = pygame.key.get_pressed()
    left = keys[pygame.K_LEFT] or keys[pygame.K_a]
    right = keys[pygame.K_RIGHT] or keys[pygame.K_d]
    jump = keys[pygame.K_SPACE] or keys[pygame.K_UP] or keys[pygame.K_w]
    direction = 0 if left == right else (-1 if left else 1)
    return direction, bool(jump)


def update(avatar: Avatar, scene: SceneGraph, dt: float, direction: int, jump: bool) -> None:
    if jump and avatar.grounded:
        avatar.v_y = config.JUMP_VELOCITY
        avatar.grounded = False

    move_axis(scene, avatar, direction * config.MOVE_SPEED * dt, axis=0)

    avatar.v_y += config.GRAVITY * dt
    blocked = move_axis(scene, avatar, avatar.v_y * dt, axis=1)
    if blocked:
        avatar.grounded = avatar.v_y > 0
        avatar.v_y = 0.0
    else:
        avatar.grounded = False

    dispatch_collisions(scene, avatar, Layer.FRUITS)
