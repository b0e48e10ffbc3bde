from __future__ import annotations


class Vec2:
    """Immutable 2D vector. Hashable, so world positions can key dicts."""

    __slots__ = ("x", "y")

    def __init__(self, x=0.0, y=0.0):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __setattr__(self, name, value):
        raise AttributeError("Vec2 is immutable")

    @classmethod
    def splat(cls, v):
        return cls(v, v)

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __eq__(self, other):
        if not isinstance(other, Vec2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self):
        return f"Vec2({self.x!r}, {self.y!r})"
