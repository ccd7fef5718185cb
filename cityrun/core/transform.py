# cityrun/core/transform.py
"""
Screen <-> world coordinate transforms.

Pure functions: the camera passes in its current offset (top-left of the
viewport, meters) and pixel/meter ratio. Screen space is pixels with the
origin at the top-left of the display; world space is meters.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

import pygame

Point = Tuple[float, float]


def viewport_offset(center: Point, visible_region: Point) -> pygame.Vector2:
    """Top-left corner of a viewport of size `visible_region` centered on `center`."""
    return pygame.Vector2(center[0] - visible_region[0] / 2, center[1] - visible_region[1] / 2)


def screen_to_world(sx: float, sy: float, offset: Point, ratio: float) -> pygame.Vector2:
    return pygame.Vector2(sx / ratio + offset[0], sy / ratio + offset[1])


def world_to_screen(wx: float, wy: float, offset: Point, ratio: float) -> pygame.Vector2:
    return pygame.Vector2((wx - offset[0]) * ratio, (wy - offset[1]) * ratio)


def world_points_to_screen(points: Iterable[Point], offset: Point, ratio: float) -> List[Tuple[int, int]]:
    """Batch-transform world points to integer pixel points (for polylines)."""
    ox, oy = offset
    return [(int(round((x - ox) * ratio)), int(round((y - oy) * ratio))) for x, y in points]
