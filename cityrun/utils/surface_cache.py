# cityrun/utils/surface_cache.py
from __future__ import annotations
from typing import Dict, Tuple
import pygame


class ScaledSurfaceCache:
    """
    Small cache for (surface_id, pixel size) -> scaled surface.
    Sprites are authored in meters, so every zoom change would otherwise
    rescale every image every frame.
    """

    def __init__(self, max_items: int = 256) -> None:
        self._max = max_items
        self._cache: Dict[Tuple[int, int, int], pygame.Surface] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def _trim(self) -> None:
        # simple FIFO eviction
        if len(self._cache) > self._max:
            remove = len(self._cache) - self._max
            for k in list(self._cache.keys())[:remove]:
                self._cache.pop(k, None)

    def scaled(self, surface: pygame.Surface, w: int, h: int) -> pygame.Surface:
        w, h = max(1, int(w)), max(1, int(h))
        if surface.get_size() == (w, h):
            return surface
        key = (id(surface), w, h)
        s = self._cache.get(key)
        if s is None:
            s = pygame.transform.scale(surface, (w, h))
            self._cache[key] = s
            self._trim()
        return s

    def clear(self) -> None:
        self._cache.clear()
