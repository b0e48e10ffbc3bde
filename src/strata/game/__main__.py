from __future__ import annotations

import argparse
import logging
import random

import pygame

from strata.engine.render import PrimitiveFactory, draw_scene, draw_status
from strata.engine.scene import Layer, SceneGraph
from strata.engine.tasks import Scheduler
from strata.linalg import Vec2
from strata.world.active_region import ActiveRegion
from strata.world.config import WorldConfig
from strata.world.flora import FloraModel
from strata.world.streaming import StreamingController
from strata.world.terrain import TerrainModel

from . import config
from .player import Avatar, read_input, update as update_avatar

logger = logging.getLogger("strata.game")


def build_world(cfg: WorldConfig, scene: SceneGraph, scheduler: Scheduler):
    factory = PrimitiveFactory()
    terrain = TerrainModel(cfg)
    region = ActiveRegion(terrain, scene, factory)
    flora = FloraModel(terrain, scene, scheduler, factory)
    return terrain, region, flora, StreamingController(region, flora, cfg)


def spawn_avatar(terrain: TerrainModel, scene: SceneGraph, cfg: WorldConfig) -> Avatar:
    start_x = cfg.window_width / 2
    ground_y = terrain.ground_top(start_x)
    avatar = Avatar(Vec2(start_x, ground_y - config.AVATAR_SIZE - config.AVATAR_VERTICAL_OFFSET))
    scene.attach(avatar, Layer.DEFAULT)
    return avatar


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="strata", add_help=True)
    parser.add_argument("--seed", type=int, default=None, help="World seed (random if omitted).")
    parser.add_argument("--width", type=int, default=config.WIDTH)
    parser.add_argument("--height", type=int, default=config.HEIGHT)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    seed = args.seed if args.seed is not None else random.randint(1, 1_000_000_000)
    cfg = WorldConfig(world_seed=seed, window_width=args.width, window_height=args.height)
    logger.info("seed=%d window=%dx%d", seed, cfg.window_width, cfg.window_height)

    pygame.init()
    screen = pygame.display.set_mode((cfg.window_width, cfg.window_height))
    pygame.display.set_caption(f"strata (seed {seed})")
    font = pygame.font.SysFont("consolas", 16)
    clock = pygame.time.Clock()

    scene = SceneGraph()
    scheduler = Scheduler()
    terrain, region, flora, streaming = build_world(cfg, scene, scheduler)
    avatar = spawn_avatar(terrain, scene, cfg)
    flora.subscribe_fruit_collected(avatar.on_fruit_collected)
    streaming.start(avatar.x)

    running = True
    while running:
        dt = min(clock.get_time() / 1000.0, config.MAX_DT)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                running = False

        direction, jump = read_input()
        update_avatar(avatar, scene, dt, direction, jump)
        streaming.tick(avatar.x)
        scheduler.update(dt)

        cam_x = avatar.center().x - cfg.window_width / 2
        draw_scene(screen, scene, cam_x, 0.0, config.SKY_COLOR)
        draw_status(screen, font, [
            f"seed {seed}   x {int(avatar.x)}   fruit {avatar.fruits_eaten}",
            f"blocks {len(region)}   trees {len(flora)}   fps {clock.get_fps():.0f}",
        ])
        pygame.display.flip()
        clock.tick(config.FPS_LIMIT)

    streaming.teardown()
    pygame.quit()


if __name__ == "__main__":
    main()
