# cityrun/core/frame.py
"""
Frame driver: the one place that decides per-frame call order.

Each frame runs, in this order:
  1. on_update(elapsed_ms)   - world simulation (physics, game rules)
  2. camera.adjust_camera()  - chase re-center, clamped to the world
  3. camera.render(elapsed_ms) - z-planes, back to front

Rendering before adjusting would draw with last frame's viewport, so step()
is the only supported way to advance a frame.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple, TYPE_CHECKING

import pygame

import cityrun.utils.settings as settings
from cityrun.utils.dt import DtSmoother

if TYPE_CHECKING:
    from cityrun.core.camera import Camera  # noqa: F401

log = logging.getLogger(__name__)

UpdateHook = Callable[[float], None]


class FrameDriver:
    def __init__(
        self,
        camera: "Camera",
        *,
        on_update: Optional[UpdateHook] = None,
        fps: int = settings.FPS,
        bg_color: Tuple[int, int, int] = settings.BG_COLOR,
        smoother: Optional[DtSmoother] = None,
    ) -> None:
        self.camera = camera
        self.on_update = on_update
        self.fps = int(fps)
        self.bg_color = bg_color
        self.smoother = smoother or DtSmoother()
        self.frames = 0
        self.running = False

    def step(self, elapsed_ms: float) -> bool:
        """Advance exactly one frame: update, adjust, render."""
        if self.on_update is not None:
            self.on_update(elapsed_ms)
        self.camera.adjust_camera()
        rendered = self.camera.render(elapsed_ms)
        self.frames += 1
        return rendered

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False

    def run(self, *, max_frames: Optional[int] = None) -> int:
        """
        Pygame loop until QUIT/ESC (or `max_frames`). Returns frames drawn.
        """
        clock = pygame.time.Clock()
        self.running = True
        start = self.frames
        log.info("Frame loop starting at %d fps (%s)", self.fps, self.camera)
        while self.running:
            if max_frames is not None and self.frames - start >= max_frames:
                break
            for event in pygame.event.get():
                self.handle_event(event)
            if not self.running:
                break

            elapsed_ms = self.smoother(clock.tick(self.fps))
            surface = self.camera.surface
            if surface is not None:
                surface.fill(self.bg_color)
            self.step(elapsed_ms)
            if surface is not None and surface is pygame.display.get_surface():
                pygame.display.flip()

        self.running = False
        drawn = self.frames - start
        log.info("Frame loop stopped after %d frames", drawn)
        return drawn
