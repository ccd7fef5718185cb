# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path
import pytest

# Ensure repo root is importable (so `import cityrun...` works without an install)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless Pygame setup
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(scope="session", autouse=True)
def _init_pygame():
    import pygame
    pygame.init()
    # a tiny hidden display so event pumping and display.get_surface() behave
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()


@pytest.fixture
def camera():
    """100m x 50m world, 2000x1000 screen at 100 px/m: a 20m x 10m viewport."""
    from cityrun.core.camera import Camera
    return Camera(100, 50, 100, (2000, 1000))


@pytest.fixture
def surface():
    import pygame
    return pygame.Surface((200, 100))
