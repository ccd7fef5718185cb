# cityrun/core/zplanes.py
"""
Z-plane registry and per-frame traversal.

Five paint layers, z = -2 (back) .. 2 (front). Within a layer entities paint
in registration order. Each registration gets a LayerHandle (z, slot) so
removal is O(1) and can never hit an unrelated entry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

import cityrun.utils.settings as settings

if TYPE_CHECKING:
    from cityrun.core.camera import Camera  # noqa: F401
    from cityrun.utils.camera_types import Renderable  # noqa: F401

log = logging.getLogger(__name__)

MIN_Z = settings.Z_PLANES[0]
MAX_Z = settings.Z_PLANES[-1]


@dataclass(frozen=True)
class LayerHandle:
    """Where an entity was registered. Slots are never reused."""
    z: int
    slot: int


class ZPlanes:
    """Layered registry of renderable entities, owned by one camera."""

    __slots__ = ("_layers", "_handles", "_next_slot")

    def __init__(self) -> None:
        # dicts keep insertion order, which is the paint order
        self._layers: List[Dict[int, "Renderable"]] = [{} for _ in settings.Z_PLANES]
        # id(entity) -> handle; valid because the layer holds the entity alive
        self._handles: Dict[int, LayerHandle] = {}
        self._next_slot = 0

    # -------------------------
    # Registration
    # -------------------------

    def add(self, entity: "Renderable") -> Optional[LayerHandle]:
        """
        Append `entity` to the layer named by `entity.appearance.z`.

        Entities without an appearance are ignored (returns None). Adding an
        entity that is already registered returns its existing handle.
        """
        appearance = getattr(entity, "appearance", None)
        if appearance is None:
            return None

        existing = self._handles.get(id(entity))
        if existing is not None:
            return existing

        z = appearance.z
        if isinstance(z, bool) or not isinstance(z, int) or not MIN_Z <= z <= MAX_Z:
            raise ValueError(f"z-plane must be an int in [{MIN_Z}, {MAX_Z}], got {z!r}")

        handle = LayerHandle(z, self._next_slot)
        self._next_slot += 1
        self._layers[z - MIN_Z][handle.slot] = entity
        self._handles[id(entity)] = handle
        return handle

    def remove(self, entity: "Renderable") -> bool:
        """Unregister `entity`. Returns False (and changes nothing) if it isn't registered."""
        handle = self._handles.get(id(entity))
        if handle is None:
            log.debug("remove: %r is not registered", entity)
            return False
        return self.remove_handle(handle)

    def remove_handle(self, handle: LayerHandle) -> bool:
        """O(1) removal by handle. Stale or foreign handles are a no-op."""
        if not MIN_Z <= handle.z <= MAX_Z:
            return False
        entity = self._layers[handle.z - MIN_Z].pop(handle.slot, None)
        if entity is None:
            return False
        del self._handles[id(entity)]
        return True

    def clear(self) -> None:
        for layer in self._layers:
            layer.clear()
        self._handles.clear()

    # -------------------------
    # Inspection
    # -------------------------

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, entity: Any) -> bool:
        return self.handle_of(entity) is not None

    def handle_of(self, entity: Any) -> Optional[LayerHandle]:
        handle = self._handles.get(id(entity))
        if handle is None or self._layers[handle.z - MIN_Z].get(handle.slot) is not entity:
            return None
        return handle

    def layer(self, z: int) -> Tuple["Renderable", ...]:
        """Snapshot of one layer in paint order."""
        if not MIN_Z <= z <= MAX_Z:
            raise ValueError(f"z-plane must be in [{MIN_Z}, {MAX_Z}], got {z!r}")
        return tuple(self._layers[z - MIN_Z].values())

    def counts(self) -> Dict[int, int]:
        return {z: len(layer) for z, layer in zip(settings.Z_PLANES, self._layers)}

    # -------------------------
    # Frame traversal
    # -------------------------

    def render(self, camera: "Camera", elapsed_ms: float) -> bool:
        """
        Visit every layer back to front. Each entity's prerender hook decides
        whether its appearance draws this frame.

        Traverses a snapshot taken at frame start: entities removed during the
        frame are skipped if not yet visited, entities added during the frame
        first draw on the next one.
        """
        snapshot = [list(layer.items()) for layer in self._layers]
        for layer, items in zip(self._layers, snapshot):
            for slot, entity in items:
                if slot not in layer:
                    continue
                if entity.prerender(elapsed_ms):
                    appearance = entity.appearance
                    if appearance is not None:
                        appearance.render(camera, elapsed_ms)
        return True
