# cityrun/demo.py
"""
Demo level: a hero runs back and forth along a 128m street while the camera
chases it. Buildings sit behind the hero, goodies in front of the buildings,
and the hero picks goodies up as it passes them.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pygame

import cityrun.utils.settings as settings
from cityrun.core.camera import Camera
from cityrun.core.frame import FrameDriver
from cityrun.entities import Actor, FilledBox, FilledCircle, StaticBody

log = logging.getLogger(__name__)

GROUND_Y = settings.DEMO_WORLD_HEIGHT - 1.0
HERO_SIZE = 0.8
GOODIE_RADIUS = 0.25


@dataclass
class DemoScene:
    camera: Camera
    hero: Actor
    goodies: List[Actor] = field(default_factory=list)
    direction: float = 1.0
    collected: int = 0

    def update(self, elapsed_ms: float) -> None:
        """Move the hero and collect goodies. Runs before the camera adjusts."""
        body = self.hero.body
        step = settings.DEMO_HERO_SPEED * elapsed_ms / 1000.0 * self.direction
        body.move_by(step, 0.0)

        # Turn around at either end of the street
        half = HERO_SIZE / 2
        if body.center.x > settings.DEMO_WORLD_WIDTH - half:
            body.center.x = settings.DEMO_WORLD_WIDTH - half
            self.direction = -1.0
        elif body.center.x < half:
            body.center.x = half
            self.direction = 1.0

        reach = half + GOODIE_RADIUS
        for goodie in list(self.goodies):
            if goodie.world_center.distance_to(body.center) <= reach:
                self.camera.remove_entity(goodie)
                self.goodies.remove(goodie)
                self.collected += 1
                log.debug("Collected %r (%d so far)", goodie, self.collected)


def build_scene(camera: Camera, *, seed: int = 7) -> DemoScene:
    rng = random.Random(seed)
    width, height = settings.DEMO_WORLD_WIDTH, settings.DEMO_WORLD_HEIGHT

    # Sky fills the world on the back plane
    sky = Actor(StaticBody(width / 2, height / 2), FilledBox(width, height, settings.SKY_COLOR, z=-2), name="sky")
    camera.add_entity(sky)

    # Skyline
    x = 1.0
    while x < width - 1.0:
        w = rng.uniform(2.0, 5.0)
        h = rng.uniform(3.0, 10.0)
        color = rng.choice(settings.BUILDING_COLORS)
        building = Actor(StaticBody(x + w / 2, GROUND_Y - h / 2), FilledBox(w, h, color, z=-1), name="building")
        camera.add_entity(building)
        x += w + rng.uniform(0.5, 2.0)

    # Street
    street = Actor(StaticBody(width / 2, GROUND_Y + 0.5), FilledBox(width, 1.0, (90, 90, 90), z=-1), name="street")
    camera.add_entity(street)

    hero = Actor(StaticBody(2.0, GROUND_Y - HERO_SIZE / 2),
                 FilledBox(HERO_SIZE, HERO_SIZE, settings.HERO_COLOR, z=1), name="hero")
    camera.add_entity(hero)

    scene = DemoScene(camera=camera, hero=hero)
    for i in range(12):
        gx = 8.0 + i * 10.0
        goodie = Actor(StaticBody(gx, GROUND_Y - HERO_SIZE / 2),
                       FilledCircle(GOODIE_RADIUS, settings.GOODIE_COLOR, z=0), name=f"goodie{i}")
        camera.add_entity(goodie)
        scene.goodies.append(goodie)

    camera.set_camera_chase(hero, *settings.DEMO_CHASE_OFFSET)
    return scene


def build_demo(surface: Optional[pygame.Surface], size: Tuple[int, int]) -> FrameDriver:
    """Entry point used by safe_main.run_game."""
    ratio = settings.effective_ratio(*size)
    camera = Camera(settings.DEMO_WORLD_WIDTH, settings.DEMO_WORLD_HEIGHT, ratio, size, surface=surface)
    scene = build_scene(camera)
    log.info("Demo scene ready: %d entities, %d goodies", len(camera.planes), len(scene.goodies))
    return FrameDriver(camera, on_update=scene.update)
