# tests/test_frame.py
from __future__ import annotations

import pygame
import pytest

from cityrun.core.camera import Camera
from cityrun.core.frame import FrameDriver
from cityrun.entities import Actor, StaticBody
from cityrun.utils.dt import DtSmoother


class CenterSpy:
    """Appearance that records the camera center at the moment it renders."""

    z = 0

    def __init__(self) -> None:
        self.seen = []

    def prerender(self, elapsed_ms: float) -> bool:
        return True

    def render(self, camera, elapsed_ms: float) -> None:
        self.seen.append(tuple(camera.center))


def test_step_runs_update_then_adjust_then_render():
    cam = Camera(100, 100, 100, (2000, 1000))
    hero = StaticBody(30, 30)
    spy = CenterSpy()
    cam.add_entity(Actor(StaticBody(0, 0), spy))
    cam.set_camera_chase(hero)

    driver = FrameDriver(cam, on_update=lambda ms: hero.move_by(ms / 1000.0, 0))
    assert driver.step(1000.0) is True
    # moved in update, followed in adjust, seen by render: all the same frame
    assert spy.seen == [(31, 30)]
    driver.step(500.0)
    assert spy.seen[-1] == (31.5, 30)
    assert driver.frames == 2


def test_run_stops_after_max_frames():
    cam = Camera(100, 50, 100, (2000, 1000))
    driver = FrameDriver(cam, fps=0)
    assert driver.run(max_frames=3) == 3
    assert driver.running is False


def test_run_draws_onto_display_surface():
    screen = pygame.display.get_surface()
    cam = Camera(100, 50, 100, screen.get_size(), surface=screen)
    driver = FrameDriver(cam, fps=0, bg_color=(10, 20, 30))
    assert driver.run(max_frames=1) == 1
    assert tuple(screen.get_at((0, 0)))[:3] == (10, 20, 30)


def test_quit_event_stops_loop():
    cam = Camera(100, 50, 100, (2000, 1000))
    driver = FrameDriver(cam, fps=0)
    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert driver.run(max_frames=10) == 0


def test_escape_key_stops_loop():
    driver = FrameDriver(Camera(100, 50, 100, (2000, 1000)))
    driver.running = True
    driver.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert driver.running is False


def test_dt_smoother_clamps_and_averages():
    smooth = DtSmoother(max_ms=50, window=2)
    assert smooth(100) == 50
    assert smooth(10) == pytest.approx(30)
    assert smooth(-5) == pytest.approx(5)
    smooth.reset()
    assert smooth(20) == 20
