# cityrun/core/safe_main.py
from __future__ import annotations

import os
import time
import traceback
from importlib import import_module
from pathlib import Path
from typing import Optional, Tuple

import cityrun.utils.settings as settings


def configure_environment(headless: Optional[bool] = None) -> None:
    """Robust SDL/Pygame defaults for Linux/CI/headless."""
    ci = os.getenv("CI", "").lower() == "true"
    no_display = os.name == "posix" and not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY"))
    if headless is None:
        headless = settings.HEADLESS or ci or no_display
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    os.environ.setdefault("SDL_HINT_RENDER_DRIVER", "software")
    if headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


def init_pygame_display(size: Tuple[int, int] = (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT), *,
                        caption: str = settings.WINDOW_TITLE):
    """Initialize pygame and return a display surface (or None if no display could be opened)."""
    import pygame
    pygame.init()
    try:
        surf = pygame.display.set_mode(size)
        pygame.display.set_caption(caption)
        return surf
    except pygame.error:
        return None


def run_game(entry: str = "cityrun.demo:build_demo", *, size: Optional[Tuple[int, int]] = None,
             max_frames: Optional[int] = None) -> int:
    """
    Safe entrypoint runner:
      - Configures env for Linux/headless.
      - Initializes logging.
      - Builds the scene via `entry` ('module:function', called with (surface, size)
        and returning a FrameDriver) and runs it.
      - Catches exceptions and writes a crash log.
    """
    from cityrun.utils.logging_setup import setup_logging, get_logger

    configure_environment()
    setup_logging()
    log = get_logger("safe_main")

    size = size or (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT)
    screen = init_pygame_display(size)
    if screen is None:
        log.warning("Running without a visible display; drawing is skipped.")

    import pygame
    try:
        try:
            mod_name, func_name = entry.split(":")
            build = getattr(import_module(mod_name), func_name)
        except (ValueError, ImportError, AttributeError) as e:
            log.exception("Failed to import game entry %s: %s", entry, e)
            return 2
        driver = build(screen, size)
        driver.run(max_frames=max_frames)
        return 0
    except SystemExit as e:
        return int(e.code or 0)
    except Exception as e:
        # Write a crash report
        log.exception("Unhandled exception in game loop: %s", e)
        crash_dir = Path("logs")
        crash_dir.mkdir(parents=True, exist_ok=True)
        stamp = time.strftime("%Y%m%d_%H%M%S")
        (crash_dir / f"crash_{stamp}.txt").write_text(
            "Unexpected crash.\n\n" + traceback.format_exc(),
            encoding="utf-8",
        )
        return 1
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(run_game())
