from __future__ import annotations

import itertools
import logging
from typing import Iterator

from strata.linalg import Vec2

from .errors import SceneGraphFailure

logger = logging.getLogger(__name__)


class Layer:
    BACKGROUND = -200
    STATIC_OBJECTS = -100
    DEFAULT = 0
    UI = 200

    LEAVES = STATIC_OBJECTS + 1
    FRUITS = STATIC_OBJECTS + 2


class Handle:
    """Opaque token for an attached object. Only the scene graph reads it."""

    __slots__ = ("id", "layer")

    def __init__(self, id_: int, layer: int):
        self.id = id_
        self.layer = layer

    def __repr__(self):
        return f"Handle({self.id}, layer={self.layer})"


class GameObject:
    def __init__(self, top_left: Vec2, size: Vec2, renderable=None, tag: str = ""):
        self.top_left = top_left
        self.size = size
        self.renderable = renderable
        self.tag = tag
        self.angle = 0.0
        self.handle: Handle | None = None

    @property
    def attached(self) -> bool:
        return self.handle is not None

    def bounds(self) -> tuple[float, float, float, float]:
        x, y = self.top_left
        return (x, y, x + self.size.x, y + self.size.y)

    def center(self) -> Vec2:
        return Vec2(self.top_left.x + self.size.x / 2, self.top_left.y + self.size.y / 2)

    def set_size_keep_center(self, edge: float) -> None:
        c = self.center()
        self.size = Vec2.splat(edge)
        self.top_left = Vec2(c.x - edge / 2, c.y - edge / 2)

    def on_collision_enter(self, other: "GameObject") -> None:
        pass

    def __repr__(self):
        return f"{type(self).__name__}(tag={self.tag!r}, top_left={self.top_left!r})"


def rects_overlap(a, b) -> bool:
    ax0, ay0, ax1, ay1 = a
    bx0, by0, bx1, by1 = b
    return ax0 < bx1 and bx0 < ax1 and ay0 < by1 and by0 < ay1


class SceneGraph:
    """Layered object store. Every call is made from the update tick."""

    def __init__(self):
        self._layers: dict[int, dict[int, GameObject]] = {}
        self._ids = itertools.count(1)

    def attach(self, obj: GameObject, layer: int = Layer.DEFAULT) -> Handle:
        if obj.handle is not None:
            raise SceneGraphFailure(f"{obj!r} is already attached as {obj.handle!r}")
        handle = Handle(next(self._ids), layer)
        self._layers.setdefault(layer, {})[handle.id] = obj
        obj.handle = handle
        return handle

    def detach(self, handle: Handle) -> GameObject:
        objects = self._layers.get(handle.layer)
        if objects is None or handle.id not in objects:
            raise SceneGraphFailure(f"unknown handle {handle!r}")
        obj = objects.pop(handle.id)
        if not objects:
            del self._layers[handle.layer]
        obj.handle = None
        return obj

    def layers(self) -> list[int]:
        return sorted(self._layers)

    def objects(self, layer: int | None = None) -> Iterator[GameObject]:
        if layer is not None:
            yield from list(self._layers.get(layer, {}).values())
            return
        for key in self.layers():
            yield from list(self._layers[key].values())

    def overlapping(self, rect, layer: int) -> list[GameObject]:
        return [obj for obj in self.objects(layer) if rects_overlap(rect, obj.bounds())]

    def count(self, layer: int) -> int:
        return len(self._layers.get(layer, {}))

    def __len__(self) -> int:
        return sum(len(objs) for objs in self._layers.values())
