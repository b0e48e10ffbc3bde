from __future__ import annotations

import logging
from typing import Iterator

from strata.engine.render import PrimitiveFactory
from strata.engine.scene import GameObject, Layer, SceneGraph
from strata.linalg import Vec2

from . import config
from .terrain import BlockDescriptor, TerrainModel, ground_color

logger = logging.getLogger(__name__)


class Block(GameObject):
    def __init__(self, descriptor: BlockDescriptor, size: int, renderable):
        super().__init__(descriptor.top_left, Vec2.splat(size), renderable, tag=config.GROUND_TAG)
        self.descriptor = descriptor


class ActiveRegion:
    """Ground blocks currently attached to the scene graph, keyed by position.

    A key is present exactly while its block is attached.
    """

    def __init__(self, terrain: TerrainModel, scene: SceneGraph, factory: PrimitiveFactory | None = None,
                 layer: int = Layer.STATIC_OBJECTS):
        self.terrain = terrain
        self.scene = scene
        self.factory = factory or PrimitiveFactory()
        self.layer = layer
        self.blocks: dict[Vec2, Block] = {}

    def _materialize(self, descriptor: BlockDescriptor) -> Block:
        renderable = self.factory.rectangle(ground_color(descriptor))
        return Block(descriptor, self.terrain.block_size, renderable)

    def add_in_range(self, min_x: int, max_x: int) -> int:
        added = 0
        for descriptor in self.terrain.blocks_in_range(min_x, max_x):
            if descriptor.top_left in self.blocks:
                continue
            block = self._materialize(descriptor)
            self.scene.attach(block, self.layer)
            self.blocks[descriptor.top_left] = block
            added += 1
        logger.debug("blocks: +%d in [%s, %s] (active=%d)", added, min_x, max_x, len(self.blocks))
        return added

    def remove_in_range(self, min_x: int, max_x: int) -> int:
        doomed = [pos for pos in self.blocks if min_x < pos.x < max_x]
        for pos in doomed:
            block = self.blocks.pop(pos)
            self.scene.detach(block.handle)
        logger.debug("blocks: -%d in (%s, %s) (active=%d)", len(doomed), min_x, max_x, len(self.blocks))
        return len(doomed)

    def clear(self) -> int:
        count = len(self.blocks)
        for block in self.blocks.values():
            self.scene.detach(block.handle)
        self.blocks.clear()
        return count

    def positions(self) -> set[Vec2]:
        return set(self.blocks)

    def columns(self) -> set[int]:
        return {pos.x for pos in self.blocks}

    def __contains__(self, position: Vec2) -> bool:
        return position in self.blocks

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks.values())

    def __len__(self) -> int:
        return len(self.blocks)
