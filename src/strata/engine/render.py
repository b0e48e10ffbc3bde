from __future__ import annotations

import pygame

from .scene import GameObject, Layer, SceneGraph


class RectangleRenderable:
    def __init__(self, color):
        self.color = tuple(color)

    def draw(self, surface: pygame.Surface, rect: pygame.Rect, angle: float = 0.0) -> None:
        if not angle:
            pygame.draw.rect(surface, self.color, rect)
            return
        # Rotated quads go through a temporary surface.
        tile = pygame.Surface(rect.size, pygame.SRCALPHA)
        tile.fill(self.color)
        rotated = pygame.transform.rotate(tile, angle)
        surface.blit(rotated, rotated.get_rect(center=rect.center))


class OvalRenderable:
    def __init__(self, color):
        self.color = tuple(color)

    def draw(self, surface: pygame.Surface, rect: pygame.Rect, angle: float = 0.0) -> None:
        pygame.draw.ellipse(surface, self.color, rect)


class PrimitiveFactory:
    """Produces renderables for the world core."""

    def rectangle(self, color) -> RectangleRenderable:
        return RectangleRenderable(color)

    def oval(self, color) -> OvalRenderable:
        return OvalRenderable(color)


def world_to_screen(x: float, y: float, cam_x: float, cam_y: float) -> tuple[int, int]:
    return int(round(x - cam_x)), int(round(y - cam_y))


def draw_object(surface: pygame.Surface, obj: GameObject, cam_x: float, cam_y: float) -> None:
    if obj.renderable is None:
        return
    sx, sy = world_to_screen(obj.top_left.x, obj.top_left.y, cam_x, cam_y)
    rect = pygame.Rect(sx, sy, max(1, int(round(obj.size.x))), max(1, int(round(obj.size.y))))
    if not rect.colliderect(surface.get_rect()):
        return
    obj.renderable.draw(surface, rect, obj.angle)


def draw_scene(surface: pygame.Surface, scene: SceneGraph, cam_x: float, cam_y: float,
               sky_color=(120, 170, 230)) -> None:
    surface.fill(sky_color)
    for layer in scene.layers():
        if layer >= Layer.UI:
            continue
        for obj in scene.objects(layer):
            draw_object(surface, obj, cam_x, cam_y)


def draw_status(surface: pygame.Surface, font: pygame.font.Font, lines: list[str]) -> None:
    for i, text in enumerate(lines):
        label = font.render(text, True, (15, 15, 20))
        surface.blit(label, (10, 10 + 18 * i))
