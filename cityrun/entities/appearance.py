"""
Appearance descriptors: how an entity looks and which z-plane it paints in.

Sizes are in meters; the camera's ratio turns them into pixels at draw time.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

import pygame

from cityrun.utils.surface_cache import ScaledSurfaceCache

if TYPE_CHECKING:
    from cityrun.core.camera import Camera  # noqa: F401
    from cityrun.utils.camera_types import Positioned  # noqa: F401

Color = Tuple[int, int, int]

_scaled = ScaledSurfaceCache()


class Appearance:
    """
    Base appearance: culls against the camera, then hands a screen rect to
    `draw`. `drawn_rect` records the last frame's screen rect (None if culled).
    """

    def __init__(self, width: float, height: float, *, z: int = 0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.z = z
        # Set by the owning Actor; the body supplies the world position.
        self.body: Optional["Positioned"] = None
        self.drawn_rect: Optional[pygame.Rect] = None

    @property
    def radius(self) -> float:
        """Radius of the circumscribing circle, meters."""
        return math.hypot(self.width, self.height) / 2

    def prerender(self, elapsed_ms: float) -> bool:
        """Advance per-frame state. Returns whether there is anything to draw."""
        return True

    def render(self, camera: "Camera", elapsed_ms: float) -> None:
        self.drawn_rect = None
        pos = self.body.world_center if self.body is not None else None
        if pos is None:
            return
        cx, cy = pos[0], pos[1]

        # Off-screen cull
        if not camera.in_bounds(cx, cy, self.radius):
            return
        surface = camera.surface
        if surface is None:
            return

        rect = camera.apply(cx, cy, self.width, self.height)
        self.draw(surface, rect)
        self.drawn_rect = rect

    def draw(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        raise NotImplementedError


class FilledBox(Appearance):
    def __init__(self, width: float, height: float, color: Color, *, z: int = 0) -> None:
        super().__init__(width, height, z=z)
        self.color = color

    def draw(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        pygame.draw.rect(surface, self.color, rect)


class FilledCircle(Appearance):
    def __init__(self, radius: float, color: Color, *, z: int = 0) -> None:
        super().__init__(radius * 2, radius * 2, z=z)
        self.color = color

    @property
    def radius(self) -> float:
        return self.width / 2

    def draw(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        pygame.draw.circle(surface, self.color, rect.center, max(1, rect.width // 2))


class ImageSprite(Appearance):
    """A pygame surface stretched over width x height meters."""

    def __init__(self, image: pygame.Surface, width: float, height: float, *, z: int = 0) -> None:
        super().__init__(width, height, z=z)
        self.image = image

    def draw(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        surface.blit(_scaled.scaled(self.image, rect.width, rect.height), rect.topleft)


class AnimatedSprite(ImageSprite):
    """
    Flip-book animation. Frames advance in prerender() by elapsed time, so an
    entity that is not rendered does not animate.
    """

    def __init__(
        self,
        frames: Sequence[pygame.Surface],
        frame_ms: float,
        width: float,
        height: float,
        *,
        z: int = 0,
        loop: bool = True,
    ) -> None:
        if not frames:
            raise ValueError("AnimatedSprite needs at least one frame")
        if frame_ms <= 0:
            raise ValueError("frame_ms must be > 0")
        super().__init__(frames[0], width, height, z=z)
        self.frames = list(frames)
        self.frame_ms = float(frame_ms)
        self.loop = loop
        self.index = 0
        self._acc_ms = 0.0

    @property
    def finished(self) -> bool:
        return not self.loop and self.index == len(self.frames) - 1

    def prerender(self, elapsed_ms: float) -> bool:
        self._acc_ms += max(0.0, elapsed_ms)
        steps = int(self._acc_ms // self.frame_ms)
        if steps:
            self._acc_ms -= steps * self.frame_ms
            if self.loop:
                self.index = (self.index + steps) % len(self.frames)
            else:
                self.index = min(self.index + steps, len(self.frames) - 1)
            self.image = self.frames[self.index]
        return True

    def restart(self) -> None:
        self.index = 0
        self._acc_ms = 0.0
        self.image = self.frames[0]
