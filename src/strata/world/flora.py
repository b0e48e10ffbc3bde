from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterator

from strata.engine.events import Observers, Subscription
from strata.engine.render import PrimitiveFactory
from strata.engine.scene import GameObject, Layer, SceneGraph
from strata.engine.tasks import Easing, ScheduledTask, Scheduler, Transition, TransitionMode
from strata.linalg import Vec2

from . import config
from .errors import DuplicateCollectHandler, InvalidRange
from .grid import align_down, align_up
from .terrain import TerrainModel
from .tree import PartDescriptor, TreeDescriptor, assemble_tree

logger = logging.getLogger(__name__)


class Fruit(GameObject):
    def __init__(self, descriptor: PartDescriptor, renderable):
        super().__init__(descriptor.top_left, descriptor.size, renderable, tag=config.FRUIT_TAG)
        self.descriptor = descriptor
        self._on_collect: Callable[[], None] | None = None

    def set_on_collect(self, callback: Callable[[], None]) -> None:
        if self._on_collect is not None:
            raise DuplicateCollectHandler(self.descriptor.top_left)
        self._on_collect = callback

    def on_collision_enter(self, other: GameObject) -> None:
        if other.tag == config.AVATAR_TAG and self._on_collect is not None and self.attached:
            self._on_collect()


@dataclass
class LeafSlot:
    leaf: GameObject
    fruit: Fruit | None = None
    eaten: bool = False


class Tree:
    """Live tree: trunk, leaves and fruits attached to the scene graph."""

    def __init__(self, descriptor: TreeDescriptor, scene: SceneGraph, scheduler: Scheduler,
                 factory: PrimitiveFactory, on_collected: Callable[[], None],
                 respawn_interval: float = config.FRUIT_RESPAWN_INTERVAL):
        self.descriptor = descriptor
        self.scene = scene
        self.scheduler = scheduler
        self.factory = factory
        self.on_collected = on_collected
        self.respawn_interval = respawn_interval
        self.trunk: GameObject | None = None
        self.leaves: dict[Vec2, LeafSlot] = {}
        self._tasks: list[ScheduledTask] = []
        self._transitions: list[Transition] = []

    @property
    def position(self) -> Vec2:
        return self.descriptor.position

    def build(self) -> "Tree":
        d = self.descriptor
        self.trunk = GameObject(d.trunk.top_left, d.trunk.size, self.factory.rectangle(d.trunk.color),
                                tag=config.TRUNK_TAG)
        self.scene.attach(self.trunk, Layer.STATIC_OBJECTS)

        for part in d.leaves:
            leaf = GameObject(part.top_left, part.size, self.factory.rectangle(part.color), tag=config.LEAF_TAG)
            self.scene.attach(leaf, Layer.LEAVES)
            self.leaves[part.top_left] = LeafSlot(leaf)
            self._add_sway(leaf)

        for part in d.fruits:
            slot = self.leaves[part.anchor]
            fruit = Fruit(part, self.factory.oval(part.color))
            fruit.set_on_collect(lambda slot=slot: self.collect(slot))
            self.scene.attach(fruit, Layer.FRUITS)
            slot.fruit = fruit

        self._tasks.append(self.scheduler.schedule(self.respawn_interval, self.respawn_fruits, repeat=True))
        return self

    def _add_sway(self, leaf: GameObject) -> None:
        delay = max(1e-3, random.uniform(0.0, config.SWAY_MAX_DELAY))
        self._tasks.append(self.scheduler.schedule(delay, lambda: self._start_sway(leaf)))

    def _start_sway(self, leaf: GameObject) -> None:
        if not leaf.attached:
            return

        def set_angle(value):
            leaf.angle = value

        edge = leaf.size.x
        lo, hi = config.SWAY_ANGLE
        self._transitions.append(self.scheduler.tween(
            set_angle, lo, hi, config.SWAY_DURATION,
            TransitionMode.BACK_AND_FORTH, Easing.LINEAR,
        ))
        self._transitions.append(self.scheduler.tween(
            leaf.set_size_keep_center, edge * config.SWAY_MIN_SIZE_FACTOR, edge, config.SWAY_DURATION,
            TransitionMode.BACK_AND_FORTH, Easing.CUBIC,
        ))

    def collect(self, slot: LeafSlot) -> None:
        if slot.fruit is None or slot.eaten:
            return
        self.scene.detach(slot.fruit.handle)
        slot.eaten = True
        self.on_collected()

    def respawn_fruits(self) -> int:
        count = 0
        for slot in self.leaves.values():
            if slot.eaten and slot.fruit is not None:
                self.scene.attach(slot.fruit, Layer.FRUITS)
                slot.eaten = False
                count += 1
        if count:
            logger.debug("tree %s: respawned %d fruit(s)", self.position, count)
        return count

    def release(self) -> None:
        """Detach every part and stop every timer. Safe to call once."""
        for task in self._tasks:
            task.cancel()
        for transition in self._transitions:
            transition.cancel()
        self._tasks.clear()
        self._transitions.clear()

        if self.trunk is not None and self.trunk.attached:
            self.scene.detach(self.trunk.handle)
        for slot in self.leaves.values():
            if slot.leaf.attached:
                self.scene.detach(slot.leaf.handle)
            if slot.fruit is not None and slot.fruit.attached:
                self.scene.detach(slot.fruit.handle)
        self.leaves.clear()

    def fruits(self) -> Iterator[Fruit]:
        for slot in self.leaves.values():
            if slot.fruit is not None and slot.fruit.attached:
                yield slot.fruit

    def parts(self) -> Iterator[GameObject]:
        if self.trunk is not None:
            yield self.trunk
        for slot in self.leaves.values():
            yield slot.leaf
            if slot.fruit is not None:
                yield slot.fruit


class FloraModel:
    """Trees keyed by ``(slot_x, ground_top(slot_x))``."""

    def __init__(self, terrain: TerrainModel, scene: SceneGraph, scheduler: Scheduler | None = None,
                 factory: PrimitiveFactory | None = None,
                 on_fruit_collected: Callable[[], None] | None = None):
        self.terrain = terrain
        self.cfg = terrain.cfg
        self.pitch = self.cfg.tree_pitch
        self.scene = scene
        self.scheduler = scheduler or Scheduler()
        self.factory = factory or PrimitiveFactory()
        self.trees: dict[Vec2, Tree] = {}
        self.fruit_collected = Observers("fruit_collected")
        if on_fruit_collected is not None:
            self.fruit_collected.subscribe(on_fruit_collected)

    def subscribe_fruit_collected(self, callback: Callable[[], None]) -> Subscription:
        return self.fruit_collected.subscribe(callback)

    def unsubscribe_fruit_collected(self, token: Subscription) -> bool:
        return self.fruit_collected.unsubscribe(token)

    def _on_fruit_collected(self) -> None:
        self.fruit_collected.emit()

    def slot_range(self, min_x: int, max_x: int) -> range:
        return range(align_up(min_x, self.pitch), align_down(max_x, self.pitch) + 1, self.pitch)

    def create_in_range(self, min_x: int, max_x: int) -> list[Tree]:
        if min_x >= max_x:
            raise InvalidRange(min_x, max_x)

        created = []
        for x in self.slot_range(min_x, max_x):
            position = Vec2(x, self.terrain.ground_top(x))
            if position in self.trees:
                continue
            descriptor = assemble_tree(x, position.y, self.cfg)
            tree = Tree(descriptor, self.scene, self.scheduler, self.factory, self._on_fruit_collected,
                        self.cfg.fruit_respawn_interval).build()
            self.trees[position] = tree
            created.append(tree)
        if created:
            logger.debug("flora: +%d tree(s) in [%s, %s] (active=%d)", len(created), min_x, max_x, len(self.trees))
        return created

    def remove_trees_outside_range(self, min_x: int, max_x: int) -> int:
        """Remove trees whose slot x lies strictly inside (min_x, max_x)."""
        doomed = [pos for pos in self.trees if min_x < pos.x < max_x]
        for pos in doomed:
            self.trees.pop(pos).release()
        if doomed:
            logger.debug("flora: -%d tree(s) in (%s, %s) (active=%d)", len(doomed), min_x, max_x, len(self.trees))
        return len(doomed)

    def clear(self) -> int:
        count = len(self.trees)
        for tree in self.trees.values():
            tree.release()
        self.trees.clear()
        return count

    def slots(self) -> list[int]:
        return sorted(pos.x for pos in self.trees)

    def descriptors(self) -> list[TreeDescriptor]:
        return [self.trees[pos].descriptor for pos in sorted(self.trees, key=lambda p: p.x)]

    def trunks(self) -> Iterator[GameObject]:
        for tree in self.trees.values():
            if tree.trunk is not None:
                yield tree.trunk

    def fruits(self) -> Iterator[Fruit]:
        for tree in self.trees.values():
            yield from tree.fruits()

    def __contains__(self, position: Vec2) -> bool:
        return position in self.trees

    def __len__(self) -> int:
        return len(self.trees)
