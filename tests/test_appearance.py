# tests/test_appearance.py
"""
Appearances drawing through the camera onto a real (off-screen) pygame surface.
"""
from __future__ import annotations

import pygame
import pytest

from cityrun.core.camera import Camera
from cityrun.entities import Actor, AnimatedSprite, FilledBox, FilledCircle, ImageSprite, StaticBody

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)


@pytest.fixture
def cam(surface):
    """200x100 px surface at 10 px/m: a 20m x 10m view with its top-left at the origin."""
    c = Camera(100, 50, 10, surface.get_size(), surface=surface)
    c.set_center(10, 5)
    return c


def _rgb(surface, xy):
    return tuple(surface.get_at(xy))[:3]


def test_box_draws_at_world_position(cam, surface):
    box = FilledBox(2, 2, RED, z=0)
    cam.add_entity(Actor(StaticBody(5, 5), box))
    cam.render(16)
    assert box.drawn_rect == pygame.Rect(40, 40, 20, 20)
    assert _rgb(surface, (50, 50)) == RED
    assert _rgb(surface, (35, 50)) == BLACK


def test_offscreen_entity_is_culled(cam, surface):
    box = FilledBox(2, 2, RED)
    cam.add_entity(Actor(StaticBody(50, 25), box))
    cam.render(16)
    assert box.drawn_rect is None
    assert pygame.transform.average_color(surface)[:3] == BLACK


def test_partially_visible_entity_is_drawn(cam, surface):
    box = FilledBox(4, 4, RED)
    cam.add_entity(Actor(StaticBody(21, 5), box))  # straddles the right edge
    cam.render(16)
    assert box.drawn_rect is not None
    assert _rgb(surface, (199, 50)) == RED


def test_no_surface_means_no_drawing():
    c = Camera(100, 50, 10, (200, 100))
    box = FilledBox(2, 2, RED)
    c.add_entity(Actor(StaticBody(50, 25), box))
    assert c.render(16) is True
    assert box.drawn_rect is None


def test_disabled_actor_is_not_drawn(cam, surface):
    box = FilledBox(2, 2, RED)
    actor = Actor(StaticBody(5, 5), box)
    actor.disable()
    cam.add_entity(actor)
    cam.render(16)
    assert box.drawn_rect is None
    actor.enable()
    cam.render(16)
    assert box.drawn_rect is not None


def test_circle_draws_centered(cam, surface):
    ball = FilledCircle(1, GREEN)
    cam.add_entity(Actor(StaticBody(10, 5), ball))
    cam.render(16)
    assert ball.drawn_rect.center == (100, 50)
    assert ball.radius == 1
    assert _rgb(surface, (100, 50)) == GREEN
    assert _rgb(surface, (100 + 15, 50)) == BLACK


def test_front_plane_paints_over_back_plane(cam, surface):
    front = Actor(StaticBody(10, 5), FilledBox(1, 1, RED, z=2))
    back = Actor(StaticBody(10, 5), FilledBox(6, 6, BLUE, z=-2))
    cam.add_entity(front)
    cam.add_entity(back)
    cam.render(16)
    assert _rgb(surface, (100, 50)) == RED
    assert _rgb(surface, (80, 50)) == BLUE


def test_image_sprite_scales_to_meters(cam, surface):
    img = pygame.Surface((4, 4))
    img.fill(GREEN)
    sprite = ImageSprite(img, 2, 2)
    cam.add_entity(Actor(StaticBody(5, 5), sprite))
    cam.render(16)
    assert sprite.drawn_rect.size == (20, 20)
    assert _rgb(surface, (41, 41)) == GREEN
    assert _rgb(surface, (58, 58)) == GREEN


def test_zooming_in_redraws_larger(cam, surface):
    box = FilledBox(1, 1, RED)
    cam.add_entity(Actor(StaticBody(10, 5), box))
    cam.render(16)
    assert box.drawn_rect.size == (10, 10)
    cam.set_scale(20)
    cam.set_center(10, 5)
    cam.render(16)
    assert box.drawn_rect.size == (20, 20)
    assert box.drawn_rect.center == (100, 50)


def _frames(n):
    out = []
    for i in range(n):
        s = pygame.Surface((2, 2))
        s.fill((i * 40, 0, 0))
        out.append(s)
    return out


def test_animation_advances_with_elapsed_time():
    frames = _frames(3)
    anim = AnimatedSprite(frames, 100, 1, 1)
    anim.prerender(250)
    assert anim.index == 2 and anim.image is frames[2]
    anim.prerender(60)
    assert anim.index == 0  # 50 left over + 60 crosses one boundary, wraps
    anim.restart()
    assert anim.index == 0 and anim.image is frames[0]


def test_non_looping_animation_holds_last_frame():
    frames = _frames(3)
    anim = AnimatedSprite(frames, 10, 1, 1, loop=False)
    anim.prerender(1000)
    assert anim.index == 2
    assert anim.finished


def test_animation_only_advances_when_actor_prerenders(cam):
    anim = AnimatedSprite(_frames(4), 100, 1, 1)
    actor = Actor(StaticBody(5, 5), anim)
    actor.disable()
    cam.add_entity(actor)
    cam.render(150)
    assert anim.index == 0
    actor.enable()
    cam.render(150)
    assert anim.index == 1


@pytest.mark.parametrize("frames,frame_ms", [([], 100), (None, 0)])
def test_animation_rejects_bad_arguments(frames, frame_ms):
    if frames is None:
        frames = _frames(1)
    with pytest.raises(ValueError):
        AnimatedSprite(frames, frame_ms, 1, 1)
