# tests/test_settings.py
from __future__ import annotations

import pytest

import cityrun.utils.settings as settings


def test_effective_ratio_matches_config_on_default_screen():
    assert settings.effective_ratio(1600, 900) == settings.PIXEL_METER_RATIO


@pytest.mark.parametrize("size,expected", [
    ((3200, 1800), 200),
    ((800, 900), 50),     # width is the tighter fit
    ((1600, 450), 50),    # height is the tighter fit
])
def test_effective_ratio_scales_by_tighter_axis(size, expected):
    assert settings.effective_ratio(*size) == pytest.approx(expected)


def test_effective_ratio_without_adapting(monkeypatch):
    monkeypatch.setattr(settings, "ADAPT_TO_SCREEN_SIZE", False)
    assert settings.effective_ratio(3200, 1800) == settings.PIXEL_METER_RATIO


def test_effective_ratio_rejects_empty_screen():
    with pytest.raises(ValueError):
        settings.effective_ratio(0, 900)


@pytest.mark.parametrize("raw,expected", [
    ("1280x720", (1280, 720)),
    ("1920X1080", (1920, 1080)),
    ("", (1600, 900)),
    ("wide", (1600, 900)),
    ("0x720", (1600, 900)),
    ("1280x", (1600, 900)),
])
def test_screen_size_from_environment(monkeypatch, raw, expected):
    monkeypatch.setenv("CITYRUN_SCREEN", raw)
    assert settings._screen_from_env(1600, 900) == expected
