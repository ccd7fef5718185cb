# cityrun/core/camera.py
"""
Camera system for a 2D side-scrolling world (pygame).

The camera decides *how much* of the world is rendered:

- World bounds run from (0, 0) to a mutable maximum, in meters.
- A pixel/meter ratio and the fixed screen size give the visible region.
- The visible region, centered on the camera center, is shifted back inside
  the world bounds whenever the center is set (clamp).
- Optional chase: each frame the center snaps to a subject's position plus a
  fixed offset (no easing).
- Screen <-> world transforms and a cheap circle-box visibility test.
- Five z-planes of renderable entities, drawn back to front.

Frame contract: call `adjust_camera()` then `render(elapsed_ms)` once per
frame (see cityrun.core.frame.FrameDriver).
"""

from __future__ import annotations

import enum
import logging
import math
import weakref
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

import pygame

import cityrun.utils.settings as settings
from cityrun.core import transform
from cityrun.core.zplanes import LayerHandle, ZPlanes

if TYPE_CHECKING:
    from cityrun.utils.camera_types import Positioned, Renderable  # noqa: F401

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Constants & helpers
# ---------------------------------------------------------------------
_SAFE_MIN = -2_000_000_000
_SAFE_MAX = 2_000_000_000


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _require_positive(name: str, value: float) -> float:
    value = float(value)
    if not value > 0 or math.isinf(value):
        raise ValueError(f"{name} must be a finite number > 0, got {value!r}")
    return value


class CameraMode(enum.Enum):
    MANUAL = "manual"    # center moves only through set_center()
    CHASING = "chasing"  # center recomputed from the chase target every frame


class Camera:
    """Viewport over a bounded world, plus the z-plane render schedule."""

    __slots__ = (
        "surface",
        "_screen", "_min", "_max", "_center",
        "_ratio", "_visible",
        "_chase_ref", "_chase_offset",
        "_planes",
    )

    def __init__(
        self,
        max_x: float,
        max_y: float,
        ratio: float,
        screen_dims: Optional[Tuple[int, int]] = None,
        *,
        surface: Optional[pygame.Surface] = None,
    ) -> None:
        """
        Create a camera for a world of `max_x` x `max_y` meters at `ratio`
        pixels per meter. The center starts in the middle of the world.
        """
        if screen_dims is None:
            screen_dims = (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT)
        sw, sh = screen_dims
        self._screen = pygame.Vector2(_require_positive("screen width", sw), _require_positive("screen height", sh))

        # Target surface appearances draw onto (None for logic-only use)
        self.surface = surface

        # World bounds (meters)
        self._min = pygame.Vector2(0.0, 0.0)
        self._max = pygame.Vector2(_require_positive("max_x", max_x), _require_positive("max_y", max_y))
        self._center = (self._min + self._max) * 0.5

        # Scale; _visible is always derived from _screen / _ratio
        self._ratio = 1.0
        self._visible = pygame.Vector2(0.0, 0.0)

        # Chase (weak: the camera never keeps its subject alive)
        self._chase_ref: Optional[weakref.ReferenceType] = None
        self._chase_offset = pygame.Vector2(0.0, 0.0)

        self._planes = ZPlanes()

        self.set_scale(ratio)

    # -------------------------
    # Read-only state
    # -------------------------

    @property
    def screen_dims(self) -> Tuple[float, float]:
        return (self._screen.x, self._screen.y)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) in meters."""
        return (self._min.x, self._min.y, self._max.x, self._max.y)

    @property
    def center(self) -> pygame.Vector2:
        return pygame.Vector2(self._center)

    @property
    def visible_region(self) -> pygame.Vector2:
        """Width and height of the visible world, in meters."""
        return pygame.Vector2(self._visible)

    @property
    def offset_x(self) -> float:
        """X coordinate of the left of the viewport."""
        return self._center.x - self._visible.x / 2

    @property
    def offset_y(self) -> float:
        """Y coordinate of the top of the viewport."""
        return self._center.y - self._visible.y / 2

    @property
    def offset(self) -> pygame.Vector2:
        return transform.viewport_offset(self._center, self._visible)

    @property
    def planes(self) -> ZPlanes:
        return self._planes

    def visible_world_rect(self) -> Tuple[float, float, float, float]:
        """(left, top, width, height) of the viewport in meters."""
        return (self.offset_x, self.offset_y, self._visible.x, self._visible.y)

    # -------------------------
    # Scale & bounds
    # -------------------------

    def get_scale(self) -> float:
        """Pixel/meter ratio. Bigger means zoomed in."""
        return self._ratio

    def set_scale(self, ratio: float) -> None:
        """
        Set the pixel/meter ratio and recompute the visible region.
        Raises ValueError for ratio <= 0.
        """
        self._ratio = _require_positive("ratio", ratio)
        self._visible.update(self._screen.x / self._ratio, self._screen.y / self._ratio)
        self.check_dims()

    def set_bounds(self, max_x: float, max_y: float) -> None:
        """
        Replace the world's maximum corner. The center is not re-clamped here;
        the next set_center() (e.g. from adjust_camera) does that.
        """
        self._max.update(_require_positive("max_x", max_x), _require_positive("max_y", max_y))
        self.check_dims()

    def check_dims(self) -> bool:
        """
        Warn if the world, drawn at the current ratio, is narrower or shorter
        than the screen. Returns True when the world covers the screen.
        """
        w = self._ratio * (self._max.x - self._min.x)
        h = self._ratio * (self._max.y - self._min.y)
        ok = True
        if w < self._screen.x:
            log.warning("Visible game area is less than the screen width (%.1fpx < %.0fpx)", w, self._screen.x)
            ok = False
        if h < self._screen.y:
            log.warning("Visible game area is less than the screen height (%.1fpx < %.0fpx)", h, self._screen.y)
            ok = False
        return ok

    # -------------------------
    # Centering & visibility
    # -------------------------

    def set_center(self, center_x: float, center_y: float) -> None:
        """
        Center on (center_x, center_y), shifted so the viewport stays inside
        the world bounds.

        Corrections run in a fixed order (bottom, top, right, left) and each
        one only looks at the requested point. If the viewport is bigger than
        the world along an axis, the later correction wins on that axis.
        """
        half_w = self._visible.x / 2
        half_h = self._visible.y / 2
        top = center_y - half_h
        bottom = center_y + half_h
        left = center_x - half_w
        right = center_x + half_w

        self._center.update(center_x, center_y)

        if bottom > self._max.y:
            self._center.y = self._max.y - half_h
        if top < self._min.y:
            self._center.y = self._min.y + half_h
        if right > self._max.x:
            self._center.x = self._max.x - half_w
        if left < self._min.x:
            self._center.x = self._min.x + half_w

    def in_bounds(self, x: float, y: float, r: float) -> bool:
        """
        True if an object at (x, y) with circumscribing radius `r` overlaps
        the viewport. Edges count as overlapping.
        """
        half_w = self._visible.x / 2
        half_h = self._visible.y / 2
        left_ok = x + r >= self._center.x - half_w
        right_ok = x - r <= self._center.x + half_w
        top_ok = y + r >= self._center.y - half_h
        bottom_ok = y - r <= self._center.y + half_h
        return left_ok and right_ok and top_ok and bottom_ok

    # -------------------------
    # Coordinate transforms
    # -------------------------

    def screen_to_meters(self, screen_x: float, screen_y: float) -> pygame.Vector2:
        """Convert screen pixels to world meters."""
        return transform.screen_to_world(screen_x, screen_y, (self.offset_x, self.offset_y), self._ratio)

    def meters_to_screen(self, world_x: float, world_y: float) -> pygame.Vector2:
        """Convert world meters to screen pixels."""
        return transform.world_to_screen(world_x, world_y, (self.offset_x, self.offset_y), self._ratio)

    def apply(self, cx: float, cy: float, width: float, height: float) -> pygame.Rect:
        """Screen-space rect for a world-space box centered on (cx, cy)."""
        tl = self.meters_to_screen(cx - width / 2, cy - height / 2)
        # Boxes that share an edge in meters share it in pixels
        left, top = round(tl.x), round(tl.y)
        right = round(tl.x + width * self._ratio)
        bottom = round(tl.y + height * self._ratio)
        # Clamp all values to the safe range before creating the Rect
        safe_x = _clamp(left, _SAFE_MIN, _SAFE_MAX)
        safe_y = _clamp(top, _SAFE_MIN, _SAFE_MAX)
        safe_w = _clamp(right - left, 0, _SAFE_MAX)
        safe_h = _clamp(bottom - top, 0, _SAFE_MAX)
        return pygame.Rect(int(safe_x), int(safe_y), int(safe_w), int(safe_h))

    # -------------------------
    # Chase
    # -------------------------

    def set_camera_chase(self, target: Optional["Positioned"] = None, x: float = 0.0, y: float = 0.0) -> None:
        """
        Follow `target`, centering on its world center plus (x, y).
        Passing None stops following; the camera stays where it is.
        The camera holds `target` weakly, so it must support weak references.
        """
        try:
            ref = weakref.ref(target) if target is not None else None
        except TypeError as e:
            raise TypeError(
                f"chase target {type(target).__name__} must support weak references "
                "(add '__weakref__' to its __slots__)"
            ) from e
        self._chase_ref = ref
        self._chase_offset.update(x, y)

    @property
    def chase_target(self) -> Optional["Positioned"]:
        return self._chase_ref() if self._chase_ref is not None else None

    @property
    def chase_offset(self) -> pygame.Vector2:
        return pygame.Vector2(self._chase_offset)

    @property
    def mode(self) -> CameraMode:
        return CameraMode.CHASING if self.chase_target is not None else CameraMode.MANUAL

    def adjust_camera(self) -> None:
        """
        Re-center on the chase target (position + offset) for this frame.
        The result is still clamped by set_center().
        """
        if self._chase_ref is None:
            return
        target = self._chase_ref()
        if target is None:
            log.debug("Chase target released; camera stays at (%.2f, %.2f)", self._center.x, self._center.y)
            self._chase_ref = None
            return
        pos = target.world_center
        if pos is None:
            return
        self.set_center(pos[0] + self._chase_offset.x, pos[1] + self._chase_offset.y)

    # -------------------------
    # Z-planes
    # -------------------------

    def add_entity(self, entity: "Renderable") -> Optional[LayerHandle]:
        """Register `entity` in the z-plane named by its appearance."""
        return self._planes.add(entity)

    def remove_entity(self, entity: "Renderable") -> bool:
        """Unregister `entity`; False if it was not registered."""
        return self._planes.remove(entity)

    def remove_handle(self, handle: LayerHandle) -> bool:
        return self._planes.remove_handle(handle)

    def render(self, elapsed_ms: float) -> bool:
        """
        Draw every registered entity, back to front.
        Precondition: adjust_camera() already ran for this frame.
        """
        return self._planes.render(self, elapsed_ms)

    # -------------------------
    # Convenience / persistence
    # -------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Serialize camera state (center/ratio/bounds) for save files or dev tools."""
        return {
            "center": (float(self._center.x), float(self._center.y)),
            "ratio": float(self._ratio),
            "bounds": (float(self._max.x), float(self._max.y)),
        }

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Restore camera state from `to_dict` output (validated and clamped)."""
        bx, by = data.get("bounds", (self._max.x, self._max.y))
        self.set_bounds(bx, by)
        self.set_scale(data.get("ratio", self._ratio))
        cx, cy = data.get("center", (self._center.x, self._center.y))
        self.set_center(float(cx), float(cy))

    def __repr__(self) -> str:
        return (
            f"Camera(center=({self._center.x:.2f}, {self._center.y:.2f}), ratio={self._ratio:g}, "
            f"bounds=({self._max.x:g}, {self._max.y:g}), mode={self.mode.value})"
        )
