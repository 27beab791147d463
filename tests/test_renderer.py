# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Tests for the watch face renderer and tick handling.

Frames are drawn onto off-screen pygame surfaces; no display is opened.
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pygame
import pytest

from fiftyeight.config import FiftyEightConfig
from fiftyeight.face.dial import Hand, hand_positions
from fiftyeight.face.glyphs import AtlasSet
from fiftyeight.face.renderer import (
    BLACK, COLON_DOT_SIZE, WHITE, TickUnits, WatchFace, WatchFaceRenderer,
    changed_units,
)


def pixel(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


def count_color(surface, rect, color):
    x0, y0, w, h = rect
    return sum(1 for x in range(x0, x0 + w) for y in range(y0, y0 + h)
               if pixel(surface, x, y) == color)


class TestChangedUnits:
    """Tests for tick unit detection."""

    def test_first_tick_changes_everything(self):
        units = changed_units(None, datetime(2026, 10, 18, 10, 8, 0))
        assert units == TickUnits.SECOND | TickUnits.MINUTE | TickUnits.HOUR | TickUnits.DAY

    def test_second_only(self):
        units = changed_units(datetime(2026, 10, 18, 10, 8, 0), datetime(2026, 10, 18, 10, 8, 1))
        assert units == TickUnits.SECOND

    def test_day_rollover(self):
        units = changed_units(datetime(2026, 10, 18, 23, 59, 59), datetime(2026, 10, 19, 0, 0, 0))
        assert TickUnits.DAY in units
        assert TickUnits.HOUR in units


class TestRenderer:
    """Tests for WatchFaceRenderer frames."""

    def test_properties(self, default_config, blank_atlases):
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        assert renderer.size == (144, 168)
        assert renderer.background == WHITE
        assert renderer.foreground == BLACK
        assert renderer.get_update_interval_ms() == 60000

    def test_second_dot_needs_faster_updates(self, default_config, blank_atlases):
        default_config.face.show_second_dot = True
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        assert renderer.get_update_interval_ms() == 1000

    def test_time_is_centered(self, default_config, blank_atlases):
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        result = renderer.time_layout(datetime(2026, 10, 18, 1, 23))
        assert result.width == 114
        assert result.x == (144 - 114) // 2
        assert result.y == (168 - 18) // 2

    def test_mask_hides_dots_behind_time(self, default_config, blank_atlases):
        """At 11:15 the minute dot sits inside the time area and must not show."""
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        now = datetime(2026, 10, 18, 11, 15)
        surface = renderer.new_surface()

        result = renderer.render(surface, now)

        x, y, w, h = result.mask_rect
        minute_dot = dict(hand_positions(11, 15, 0, 50, (72, 84)))[Hand.MINUTE]
        assert x <= minute_dot.x < x + w and y <= minute_dot.y < y + h
        # Only the colon squares are drawn in the masked area
        assert count_color(surface, result.mask_rect, BLACK) == 2 * COLON_DOT_SIZE ** 2

    def test_dots_drawn_outside_time(self, default_config, blank_atlases):
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        surface = renderer.new_surface()

        renderer.render(surface, datetime(2026, 10, 18, 11, 0))

        assert pixel(surface, 72, 34) == BLACK
        assert pixel(surface, 0, 0) == WHITE

    def test_hour_minute_dots_hidden(self, default_config, blank_atlases):
        default_config.face.show_hour_minute_dots = False
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        surface = renderer.new_surface()

        renderer.render(surface, datetime(2026, 10, 18, 11, 0))

        assert pixel(surface, 72, 34) == WHITE

    def test_dark_mode_swaps_colors(self, default_config, blank_atlases):
        default_config.face.dark_mode = True
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        surface = renderer.new_surface()

        renderer.render(surface, datetime(2026, 10, 18, 11, 0))

        assert pixel(surface, 0, 0) == BLACK
        assert pixel(surface, 72, 34) == WHITE

    def test_digits_drawn_with_synthesized_sheets(self, default_config):
        renderer = WatchFaceRenderer(default_config, AtlasSet.load())
        surface = renderer.new_surface()

        result = renderer.render(surface, datetime(2026, 10, 18, 8, 8))

        first = result.digits[0]
        glyph_rect = (first.x, first.y, first.width, result.height)
        assert count_color(surface, glyph_rect, BLACK) > 0

    def test_render_to_image(self, default_config, blank_atlases):
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        image = renderer.render_to_image(datetime(2026, 10, 18, 10, 8))
        assert image.size == (144, 168)
        assert image.mode == 'RGB'
        assert image.getpixel((0, 0)) == WHITE

    def test_unknown_widget_left_empty(self, default_config, blank_atlases):
        default_config.widgets.top_left = "weather"
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        surface = renderer.new_surface()
        # Does not raise
        renderer.render(surface, datetime(2026, 10, 18, 10, 8))

    def test_am_pm_takes_top_left(self, default_config):
        default_config.face.show_am_pm = True
        atlases = MagicMock()
        atlases.available_families = AtlasSet.load().available_families
        renderer = WatchFaceRenderer(default_config, atlases)

        renderer.render(pygame.Surface((144, 168)), datetime(2026, 10, 18, 15, 0))

        atlases.strip.assert_any_call("am_pm_indicator")
        atlases.date.blit_digit.assert_not_called()

    def test_update_config_reloads_on_dark_mode(self, default_config, blank_atlases):
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        new_config = FiftyEightConfig()
        new_config.face.dark_mode = True

        with patch.object(AtlasSet, 'load', return_value=blank_atlases) as load:
            renderer.update_config(new_config)

        load.assert_called_once_with(None, True)
        assert renderer.config is new_config

    def test_update_config_keeps_atlases_otherwise(self, default_config, blank_atlases):
        renderer = WatchFaceRenderer(default_config, blank_atlases)
        new_config = FiftyEightConfig()
        new_config.glyphs.policy = "uniform"

        with patch.object(AtlasSet, 'load') as load:
            renderer.update_config(new_config)

        load.assert_not_called()
        result = renderer.time_layout(datetime(2026, 10, 18, 1, 23))
        assert result.digits[0].width == 30


class TestWatchFace:
    """Tests for tick-driven redraws."""

    @pytest.fixture
    def renderer(self, default_config):
        mock = MagicMock()
        mock.config = default_config
        return mock

    def test_first_tick_draws(self, renderer):
        face = WatchFace(renderer)
        assert face.tick(datetime(2026, 10, 18, 10, 8, 0))
        assert face.frames_rendered == 1

    def test_seconds_ignored_without_second_dot(self, renderer):
        face = WatchFace(renderer)
        face.tick(datetime(2026, 10, 18, 10, 8, 0))

        assert not face.tick(datetime(2026, 10, 18, 10, 8, 1))
        assert face.tick(datetime(2026, 10, 18, 10, 9, 0))
        assert face.frames_rendered == 2

    def test_seconds_redraw_with_second_dot(self, renderer):
        renderer.config.face.show_second_dot = True
        face = WatchFace(renderer)
        face.tick(datetime(2026, 10, 18, 10, 8, 0))

        assert face.tick(datetime(2026, 10, 18, 10, 8, 1))

    def test_force(self, renderer):
        face = WatchFace(renderer)
        now = datetime(2026, 10, 18, 10, 8, 0)
        face.tick(now)

        assert face.tick(now, force=True)
        assert renderer.render.call_count == 2
