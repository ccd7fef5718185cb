"""
Lightweight camera type hints for the camera's collaborators.

- Uses `from __future__ import annotations` so pygame types in annotations
  don't need pygame at import-time (helps headless CI).
- Imports pygame only under TYPE_CHECKING to keep runtime import optional.
- The physics body, the appearance and the entity are owned by other parts of
  the game; these Protocols describe only what the camera reads from them.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    import pygame  # noqa: F401
    from cityrun.core.camera import Camera  # noqa: F401


Point = Tuple[float, float]


@runtime_checkable
class Positioned(Protocol):
    """
    Anything the camera can chase: exposes its world-space center in meters.

    The camera only holds chase targets weakly, so a chased object must be
    weak-referenceable (slotted classes need '__weakref__' in __slots__).
    """

    @property
    def world_center(self) -> Optional[Point]: ...


@runtime_checkable
class AppearanceLike(Protocol):
    """
    Appearance descriptor of a renderable entity.

    `z` picks the paint layer (-2 back .. 2 front). `render` draws using the
    camera's offset and ratio; it is only called when the entity's prerender
    hook reported it eligible for this frame.
    """

    z: int

    def prerender(self, elapsed_ms: float) -> bool: ...
    def render(self, camera: "Camera", elapsed_ms: float) -> None: ...


@runtime_checkable
class Renderable(Protocol):
    """Entity as the z-plane scheduler sees it. `appearance` may be None."""

    appearance: Optional[AppearanceLike]

    def prerender(self, elapsed_ms: float) -> bool: ...


__all__ = [
    "AppearanceLike",
    "Point",
    "Positioned",
    "Renderable",
]
