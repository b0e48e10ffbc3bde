"""Shared fixtures: a headless world wired to an in-memory scene graph."""
from __future__ import annotations

import os
from dataclasses import dataclass

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from strata.engine.scene import SceneGraph  # noqa: E402
from strata.engine.tasks import Scheduler  # noqa: E402
from strata.world.active_region import ActiveRegion  # noqa: E402
from strata.world.config import WorldConfig  # noqa: E402
from strata.world.flora import FloraModel  # noqa: E402
from strata.world.streaming import StreamingController  # noqa: E402
from strata.world.terrain import TerrainModel  # noqa: E402

SCENARIO_SEED = 42
START_X = 400.0


@dataclass
class World:
    cfg: WorldConfig
    scene: SceneGraph
    scheduler: Scheduler
    terrain: TerrainModel
    region: ActiveRegion
    flora: FloraModel
    streaming: StreamingController


def build_world(cfg: WorldConfig) -> World:
    scene = SceneGraph()
    scheduler = Scheduler()
    terrain = TerrainModel(cfg)
    region = ActiveRegion(terrain, scene)
    flora = FloraModel(terrain, scene, scheduler)
    return World(cfg, scene, scheduler, terrain, region, flora, StreamingController(region, flora, cfg))


@pytest.fixture
def cfg() -> WorldConfig:
    return WorldConfig(world_seed=SCENARIO_SEED, block_size=30, tree_pitch=210, window_pad=300,
                       window_width=800, window_height=600)


@pytest.fixture
def make_world(cfg):
    def _make(**overrides) -> World:
        if not overrides:
            return build_world(cfg)
        params = {
            "world_seed": cfg.world_seed,
            "window_width": cfg.window_width,
            "window_height": cfg.window_height,
        }
        params.update(overrides)
        return build_world(WorldConfig(**params))

    return _make


@pytest.fixture
def world(make_world) -> World:
    return make_world()


@pytest.fixture
def started(world) -> World:
    world.streaming.start(START_X)
    return world
