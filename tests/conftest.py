# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Pytest configuration and shared fixtures for fiftyeight tests.
"""

import os
import tempfile
from pathlib import Path

import pytest

# Surfaces are drawn off-screen; never open a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dict():
    """Return a minimal valid config dictionary."""
    return {
        "face": {
            "dark_mode": False,
            "use_24_hour_format": False,
            "show_am_pm": False,
            "show_second_dot": False,
            "show_hour_minute_dots": True,
            "step_goal": 10000,
            "debug_logging": False
        },
        "widgets": {
            "top_left": "day_date",
            "top_right": "battery"
        },
        "display": {
            "width": 144,
            "height": 168,
            "dial_radius": 50,
            "dot_radius": 4
        },
        "glyphs": {
            "policy": "balanced",
            "digit_gap": 2,
            "colon_width": 8
        }
    }


@pytest.fixture
def sample_config_yaml(temp_dir, sample_config_dict):
    """Create a temporary config.yaml file."""
    import yaml
    config_path = temp_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def default_config():
    """Return a FiftyEightConfig with every default."""
    from fiftyeight.config import FiftyEightConfig
    return FiftyEightConfig()


@pytest.fixture
def blank_atlases():
    """An AtlasSet whose sheets are fully transparent.

    Only the colon, dial dots and background show up when a frame is drawn
    with these, which makes pixel assertions independent of glyph artwork.
    """
    import pygame
    from fiftyeight.face.glyphs import (
        AM_PM_STRIP, BATTERY_STRIP, DATE_ATLAS, FAMILY_ATLASES, STEPS_STRIP,
        AtlasSet, FrameAtlas, GlyphAtlas,
    )

    def blank(size):
        return pygame.Surface(size, pygame.SRCALPHA)

    families = {
        family: GlyphAtlas(descriptor, blank(descriptor.sheet_size))
        for family, descriptor in FAMILY_ATLASES.items()
    }
    strips = {
        strip.name: FrameAtlas(strip, blank(strip.sheet_size))
        for strip in (AM_PM_STRIP, BATTERY_STRIP, STEPS_STRIP)
    }
    return AtlasSet(families, GlyphAtlas(DATE_ATLAS, blank(DATE_ATLAS.sheet_size)), strips)
