from __future__ import annotations

from strata.engine.scene import GameObject, Layer, SceneGraph, rects_overlap
from strata.linalg import Vec2


def _solids(scene: SceneGraph, bounds) -> list[GameObject]:
    return scene.overlapping(bounds, Layer.STATIC_OBJECTS)


def move_axis(scene: SceneGraph, obj: GameObject, delta: float, axis: int) -> bool:
    """Move ``obj`` along one axis and push it back out of any solid it
    entered. Returns True when movement was blocked."""
    if delta == 0:
        return False
    x, y = obj.top_left
    if axis == 0:
        obj.top_left = Vec2(x + delta, y)
    else:
        obj.top_left = Vec2(x, y + delta)

    blocked = False
    for solid in _solids(scene, obj.bounds()):
        if not rects_overlap(obj.bounds(), solid.bounds()):
            continue
        sx0, sy0, sx1, sy1 = solid.bounds()
        x, y = obj.top_left
        if axis == 0:
            x = sx0 - obj.size.x if delta > 0 else sx1
        else:
            y = sy0 - obj.size.y if delta > 0 else sy1
        obj.top_left = Vec2(x, y)
        blocked = True
    return blocked


def dispatch_collisions(scene: SceneGraph, obj: GameObject, layer: int) -> int:
    hits = scene.overlapping(obj.bounds(), layer)
    for other in hits:
        other.on_collision_enter(obj)
    return len(hits)
