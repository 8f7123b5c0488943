# src/beerrun/render/strip.py
# Side-on preview of a GeneratedLevel drawn onto a pygame Surface (no display needed).
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

from ..levelgen.model import GeneratedLevel
from .palette import (
    END_MARK, GROUND, MONEY, SPAWN_MARK, enemy_color, obstacle_color, role_color,
)

GROUND_ROWS = 1.5     # world units of ground drawn below y=0
ENEMY_HEIGHT = 1.6
OBSTACLE_HEIGHT = 0.8


@dataclass
class StripView:
    scale: int = 8          # pixels per world unit
    offset_x: float = 0.0   # world x at the left edge
    height: int = 64        # surface height in pixels

    @property
    def ground_px(self) -> int:
        return self.height - int(GROUND_ROWS * self.scale)

    def to_px(self, x: float, y: float) -> Tuple[int, int]:
        return (int(round((x - self.offset_x) * self.scale)),
                int(round(self.ground_px - y * self.scale)))

    def width_px(self, w: float) -> int:
        return max(1, int(round(w * self.scale)))


def surface_size(level: GeneratedLevel, view: StripView) -> Tuple[int, int]:
    return (view.width_px(level.length), view.height)


def draw_level(surface: pygame.Surface, level: GeneratedLevel, view: StripView) -> None:
    h = view.height
    g = view.ground_px

    for seg in level.segments:
        x0, _ = view.to_px(seg.start_x, 0)
        pygame.draw.rect(surface, role_color(seg.role), pygame.Rect(x0, 0, view.width_px(seg.width), g))
    x0, _ = view.to_px(0, 0)
    pygame.draw.rect(surface, GROUND, pygame.Rect(x0, g, view.width_px(level.length), h - g))

    for p in level.obstacles:
        w = view.width_px(p.payload.width)
        px, _ = view.to_px(p.x - p.payload.width / 2, 0)
        if p.payload.lethal:
            # holes cut into the ground
            rect = pygame.Rect(px, g, w, h - g)
        else:
            top = view.width_px(OBSTACLE_HEIGHT)
            rect = pygame.Rect(px, g - top, w, top)
        pygame.draw.rect(surface, obstacle_color(p.payload.kind), rect)

    for p in level.enemies:
        w = view.width_px(1.0)
        top = view.width_px(ENEMY_HEIGHT)
        px, _ = view.to_px(p.x - 0.5, 0)
        pygame.draw.rect(surface, enemy_color(p.payload.kind), pygame.Rect(px, g - top, w, top))

    r = max(2, view.scale // 3)
    for p in level.money:
        cx, cy = view.to_px(p.x, p.y + 0.5)
        pygame.draw.circle(surface, MONEY, (cx, cy), r)

    sx, _ = view.to_px(*level.player_spawn)
    ex, _ = view.to_px(*level.level_end_position)
    pygame.draw.line(surface, SPAWN_MARK, (sx, 0), (sx, g), 2)
    pygame.draw.line(surface, END_MARK, (ex - 1, 0), (ex - 1, g), 2)


def render_level(level: GeneratedLevel, view: StripView) -> pygame.Surface:
    surf = pygame.Surface(surface_size(level, view))
    draw_level(surf, level, view)
    return surf
