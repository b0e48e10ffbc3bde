from __future__ import annotations

from strata.engine.errors import SceneGraphFailure

__all__ = ["WorldError", "InvalidRange", "DuplicateCollectHandler", "SceneGraphFailure"]


class WorldError(Exception):
    """Base class for errors raised by the world core."""


class InvalidRange(WorldError, ValueError):
    def __init__(self, min_x, max_x):
        super().__init__(f"min_x must be smaller than max_x (got {min_x} >= {max_x})")
        self.min_x = min_x
        self.max_x = max_x


class DuplicateCollectHandler(WorldError, RuntimeError):
    def __init__(self, position):
        super().__init__(f"fruit at {position} already has a collect handler")
        self.position = position
