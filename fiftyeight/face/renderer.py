# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Watch face render orchestrator."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import IntFlag
from typing import Optional, TYPE_CHECKING, Tuple

import pygame
from PIL import Image

from .classifier import get_policy
from .dial import hand_positions
from .glyphs import AtlasSet
from .layout import LayoutResult, TimeFormat, layout
from .widgets import StatusReadings, WidgetType, plan_corners

if TYPE_CHECKING:
    from ..config import FiftyEightConfig

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# Colon squares, relative to the colon placement
COLON_DOT_SIZE = 4
COLON_DOT_OFFSETS = ((2, 4), (2, 10))


class TickUnits(IntFlag):
    NONE = 0
    SECOND = 1
    MINUTE = 2
    HOUR = 4
    DAY = 8


def changed_units(previous: Optional[datetime], current: datetime) -> TickUnits:
    """Which clock units differ between two readings (all of them on the first)."""
    if previous is None:
        return TickUnits.SECOND | TickUnits.MINUTE | TickUnits.HOUR | TickUnits.DAY
    units = TickUnits.NONE
    if previous.second != current.second:
        units |= TickUnits.SECOND
    if previous.minute != current.minute:
        units |= TickUnits.MINUTE
    if previous.hour != current.hour:
        units |= TickUnits.HOUR
    if previous.date() != current.date():
        units |= TickUnits.DAY
    return units


def _widget_type(name: str) -> WidgetType:
    try:
        return WidgetType(name)
    except ValueError:
        logger.warning(f"Unknown widget '{name}', leaving corner empty")
        return WidgetType.NONE


class WatchFaceRenderer:
    """Draws one complete frame of the watch face onto a pygame surface.

    Each frame is drawn back to front:
    - background fill
    - dial dots for second, minute and hour
    - an opaque mask behind the digital time so dots never show through it
    - the time glyphs and colon
    - the two corner widgets
    """

    def __init__(self, config: FiftyEightConfig, atlases: Optional[AtlasSet] = None):
        """Initialize the renderer.

        Args:
            config: Face, widget, display and glyph settings.
            atlases: Preloaded sprite sheets. Loaded from config if None.
        """
        self._config = config
        self._rules = get_policy(config.glyphs.policy)
        self._atlases = atlases or AtlasSet.load(config.glyphs.atlas_dir, config.face.dark_mode)
        logger.info(f"WatchFaceRenderer initialized: policy={self._rules.name}, "
                    f"display={config.display.width}x{config.display.height}")

    @property
    def config(self) -> FiftyEightConfig:
        return self._config

    @property
    def size(self) -> Tuple[int, int]:
        return self._config.display.width, self._config.display.height

    @property
    def background(self) -> Tuple[int, int, int]:
        return BLACK if self._config.face.dark_mode else WHITE

    @property
    def foreground(self) -> Tuple[int, int, int]:
        return WHITE if self._config.face.dark_mode else BLACK

    @property
    def time_format(self) -> TimeFormat:
        return TimeFormat.H24 if self._config.face.use_24_hour_format else TimeFormat.H12

    def update_config(self, config: FiftyEightConfig) -> None:
        """Apply new settings, reloading sprite sheets if their look changed."""
        reload = (config.face.dark_mode != self._config.face.dark_mode
                  or config.glyphs.atlas_dir != self._config.glyphs.atlas_dir)
        self._config = config
        self._rules = get_policy(config.glyphs.policy)
        if reload:
            self.reload_atlases()
        logger.info(f"Face config updated: policy={self._rules.name}, "
                    f"dark_mode={config.face.dark_mode}, 24h={config.face.use_24_hour_format}")

    def reload_atlases(self) -> None:
        self._atlases = AtlasSet.load(self._config.glyphs.atlas_dir, self._config.face.dark_mode)

    def time_layout(self, now: datetime) -> LayoutResult:
        """Layout of the digital time, centred on the display."""
        result = layout(
            now.hour, now.minute, self.time_format,
            rules=self._rules,
            available=self._atlases.available_families,
            gap=self._config.glyphs.digit_gap,
            colon_width=self._config.glyphs.colon_width,
        )
        return result.centered(*self.size)

    def new_surface(self) -> pygame.Surface:
        return pygame.Surface(self.size)

    def render(self, surface: pygame.Surface, now: datetime,
               status: Optional[StatusReadings] = None) -> LayoutResult:
        """Draw a full frame.

        Args:
            surface: Target surface, at least display-sized.
            now: Wall-clock time for this frame.
            status: Battery and step readings; defaults if None.

        Returns:
            The time layout that was drawn.
        """
        face = self._config.face
        display = self._config.display
        status = status or StatusReadings()

        surface.fill(self.background)

        center = (display.width // 2, display.height // 2)
        for _, point in hand_positions(
                now.hour, now.minute, now.second, display.dial_radius, center,
                show_seconds=face.show_second_dot,
                show_hour_minute=face.show_hour_minute_dots):
            pygame.draw.circle(surface, self.foreground, point, display.dot_radius)

        time_layout = self.time_layout(now)
        surface.fill(self.background, pygame.Rect(time_layout.mask_rect))

        for placement in time_layout.placements:
            if placement.is_colon:
                self._draw_colon(surface, placement.x, placement.y)
            else:
                self._atlases.family(placement.family).blit_digit(
                    surface, placement.value, placement.x, placement.y)

        self._draw_widgets(surface, now, status)

        logger.debug(f"Rendered {now:%H:%M:%S}: width={time_layout.width}, "
                     f"families={[p.family.value for p in time_layout.digits]}")
        return time_layout

    def _draw_colon(self, surface: pygame.Surface, x: int, y: int) -> None:
        for dx, dy in COLON_DOT_OFFSETS:
            surface.fill(self.foreground, pygame.Rect(x + dx, y + dy, COLON_DOT_SIZE, COLON_DOT_SIZE))

    def _draw_widgets(self, surface: pygame.Surface, now: datetime, status: StatusReadings) -> None:
        widgets = self._config.widgets
        show_am_pm = self._config.face.show_am_pm and not self._config.face.use_24_hour_format
        top_left = _widget_type(widgets.top_left)
        if show_am_pm:
            # The AM/PM indicator takes over the top left corner
            top_left = WidgetType.AM_PM

        for widget in plan_corners(top_left, _widget_type(widgets.top_right), now,
                                   self._config.display.width, status,
                                   self._config.face.use_24_hour_format,
                                   self._config.face.step_goal):
            if widget.strip:
                self._atlases.strip(widget.strip).blit_frame(surface, widget.frame, widget.x, widget.y)
            else:
                for digit, x, y in widget.digits:
                    self._atlases.date.blit_digit(surface, digit, x, y)

    def render_to_image(self, now: datetime, status: Optional[StatusReadings] = None) -> Image.Image:
        """Render a frame and return it as a PIL image."""
        surface = self.new_surface()
        self.render(surface, now, status)
        data = pygame.image.tobytes(surface, 'RGB')
        return Image.frombytes('RGB', surface.get_size(), data)

    def get_update_interval_ms(self) -> int:
        """Seconds dot needs a redraw every second, otherwise once a minute."""
        return 1000 if self._config.face.show_second_dot else 60000


class WatchFace:
    """Tick-driven wrapper: redraws only when a displayed unit changed."""

    def __init__(self, renderer: WatchFaceRenderer, surface: Optional[pygame.Surface] = None):
        self._renderer = renderer
        self._surface = surface or renderer.new_surface()
        self._last_tick: Optional[datetime] = None
        self.frames_rendered = 0

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    def tick(self, now: datetime, status: Optional[StatusReadings] = None,
             force: bool = False) -> bool:
        """Handle a timer tick. Returns True if a frame was drawn."""
        units = changed_units(self._last_tick, now)
        self._last_tick = now

        wanted = TickUnits.MINUTE | TickUnits.HOUR | TickUnits.DAY
        if self._renderer.config.face.show_second_dot:
            wanted |= TickUnits.SECOND

        if not force and not units & wanted:
            return False

        self._renderer.render(self._surface, now, status)
        self.frames_rendered += 1
        return True
