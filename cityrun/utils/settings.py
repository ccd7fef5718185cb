# cityrun/utils/settings.py
"""
Centralized settings and constants for the game.
"""
import os

# --- Screen & Scale Settings ---
# The world is measured in meters; the camera maps meters to pixels with this
# ratio. 100 px/m on a 1600x900 screen shows a 16m x 9m slice of the world.
PIXEL_METER_RATIO = 100
DEFAULT_SCREEN_WIDTH = 1600
DEFAULT_SCREEN_HEIGHT = 900

# Scale the ratio so the same number of meters stays visible on any display.
ADAPT_TO_SCREEN_SIZE = True


def _screen_from_env(default_w: int, default_h: int) -> tuple:
    """Read CITYRUN_SCREEN="WxH"; malformed values fall back to the defaults."""
    raw = os.environ.get("CITYRUN_SCREEN", "")
    w, sep, h = raw.lower().partition("x")
    if not sep or not w.isdigit() or not h.isdigit() or int(w) <= 0 or int(h) <= 0:
        return default_w, default_h
    return int(w), int(h)


# --- General Settings ---
SCREEN_WIDTH, SCREEN_HEIGHT = _screen_from_env(DEFAULT_SCREEN_WIDTH, DEFAULT_SCREEN_HEIGHT)
FPS = 60
BG_COLOR = (0, 0, 0)  # Black, for anything outside the world
WINDOW_TITLE = "CityRun"

# Forces SDL dummy drivers (no window, no audio device).
HEADLESS = os.environ.get("CITYRUN_HEADLESS") == "1"

# --- Frame Timing ---
MAX_FRAME_MS = 1000.0 / 15.0  # clamp long frames (window drag, breakpoints)
DT_SMOOTHING_WINDOW = 8

# --- Camera ---
Z_PLANES = (-2, -1, 0, 1, 2)  # back to front

# --- Demo Level ---
DEMO_WORLD_WIDTH = 128.0
DEMO_WORLD_HEIGHT = 15.0
DEMO_CHASE_OFFSET = (2.0, 0.0)  # look a little ahead of the hero
DEMO_HERO_SPEED = 6.0  # meters per second
SKY_COLOR = (24, 28, 48)
BUILDING_COLORS = ((60, 64, 92), (80, 86, 120), (44, 48, 70))
HERO_COLOR = (240, 200, 80)
GOODIE_COLOR = (230, 90, 90)


def effective_ratio(screen_w: int, screen_h: int) -> float:
    """
    Pixel/meter ratio for the actual display size.

    With ADAPT_TO_SCREEN_SIZE the configured ratio is scaled by the smaller of
    the width and height factors, so a 16m x 9m view on 1600x900 stays at
    least 16m x 9m on any other display.
    """
    if not ADAPT_TO_SCREEN_SIZE:
        return float(PIXEL_METER_RATIO)
    if screen_w <= 0 or screen_h <= 0:
        raise ValueError("screen dimensions must be > 0")
    scale = min(screen_w / DEFAULT_SCREEN_WIDTH, screen_h / DEFAULT_SCREEN_HEIGHT)
    return PIXEL_METER_RATIO * scale
