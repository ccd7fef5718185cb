"""
Actors: things in the world the camera can draw or chase.

The physics library owns real bodies; StaticBody is the small stand-in the
demo and tests use. Anything with a `world_center` works in its place; to be
chased by the camera it must also be weak-referenceable.

An appearance belongs to exactly one actor.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import pygame

if TYPE_CHECKING:
    from cityrun.entities.appearance import Appearance  # noqa: F401
    from cityrun.utils.camera_types import Positioned  # noqa: F401


class StaticBody:
    """A body that only moves when told to. Positions in meters."""

    def __init__(self, x: float, y: float) -> None:
        self.center = pygame.Vector2(x, y)

    @property
    def world_center(self) -> pygame.Vector2:
        return pygame.Vector2(self.center)

    def move_to(self, x: float, y: float) -> None:
        self.center.update(x, y)

    def move_by(self, dx: float, dy: float) -> None:
        self.center.x += dx
        self.center.y += dy


class Actor:
    """An optional body (position) plus an optional appearance (z-plane, drawing)."""

    def __init__(
        self,
        body: Optional["Positioned"] = None,
        appearance: Optional["Appearance"] = None,
        *,
        name: str = "",
    ) -> None:
        if appearance is not None and getattr(appearance, "body", None) is not None:
            raise ValueError(f"{type(appearance).__name__} already belongs to another actor")
        self.name = name
        self.body = body
        self.appearance = appearance
        self.enabled = True
        if appearance is not None:
            appearance.body = body

    def __repr__(self) -> str:
        return f"Actor({self.name or hex(id(self))})"

    @property
    def world_center(self) -> Optional[pygame.Vector2]:
        return self.body.world_center if self.body is not None else None

    def prerender(self, elapsed_ms: float) -> bool:
        """Disabled actors and actors without an appearance don't draw."""
        if not self.enabled or self.appearance is None:
            return False
        return bool(self.appearance.prerender(elapsed_ms))

    def disable(self) -> None:
        self.enabled = False

    def enable(self) -> None:
        self.enabled = True
