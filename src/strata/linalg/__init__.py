from .vec2 import Vec2

__all__ = ["Vec2"]
