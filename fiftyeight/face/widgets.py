# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Corner widgets: date numbers, AM/PM, battery and step progress."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from .glyphs import AM_PM_STRIP, BATTERY_STRIP, DATE_ATLAS, STEPS_STRIP
from .layout import number_layout

logger = logging.getLogger(__name__)

WIDGET_PADDING_TOP = 10
WIDGET_PADDING_SIDE = 10
DATE_DIGIT_SPACING = 4
DEFAULT_WIDGET_WIDTH = 30
DEFAULT_STEP_GOAL = 10000


class WidgetType(Enum):
    NONE = "none"
    MONTH_DATE = "month_date"
    DAY_DATE = "day_date"
    AM_PM = "am_pm"
    BATTERY = "battery"
    STEP_COUNT = "step_count"


class Corner(Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"


@dataclass(frozen=True)
class StatusReadings:
    """Sensor values supplied by the surrounding application each frame."""
    battery_percent: int = 100
    step_count: int = 0


@dataclass(frozen=True)
class WidgetDraw:
    """What to draw for one widget.

    Date widgets list digits in ``digits`` as (digit, x, y); strip widgets
    give the strip name and frame index.
    """
    widget: WidgetType
    x: int
    y: int
    width: int
    digits: Tuple[Tuple[int, int, int], ...] = ()
    strip: Optional[str] = None
    frame: int = 0


def am_pm_frame(hour: int) -> int:
    """Frame 0 is "P", frame 1 is "A"."""
    return 0 if hour >= 12 else 1


def battery_frame(percent: int) -> int:
    """One frame per 10%: 0 for 90-100%, 9 for under 10%."""
    if percent >= 90:
        return 0
    if percent < 10:
        return 9
    return 9 - percent // 10


def step_frame(steps: int, goal: int) -> int:
    """Progress frame toward the step goal, 0 (none) to 8 (goal reached).

    Each frame covers a ninth of the goal; thresholds use integer division.
    """
    if steps >= goal:
        return 8
    for k in range(8, 0, -1):
        if steps >= goal * k // 9:
            return k - 1
    return 0


def date_value(widget: WidgetType, now: datetime) -> int:
    return now.month if widget is WidgetType.MONTH_DATE else now.day


def widget_width(widget: WidgetType, now: datetime) -> int:
    if widget in (WidgetType.MONTH_DATE, WidgetType.DAY_DATE):
        if date_value(widget, now) < 10:
            return DATE_ATLAS.cell_width
        return DATE_ATLAS.cell_width * 2 + DATE_DIGIT_SPACING
    if widget is WidgetType.AM_PM:
        return AM_PM_STRIP.frame_width
    if widget in (WidgetType.BATTERY, WidgetType.STEP_COUNT):
        return BATTERY_STRIP.frame_width
    return DEFAULT_WIDGET_WIDTH


def corner_origin(corner: Corner, width: int, display_width: int) -> Tuple[int, int]:
    if corner is Corner.TOP_LEFT:
        return WIDGET_PADDING_SIDE, WIDGET_PADDING_TOP
    return display_width - width - WIDGET_PADDING_SIDE, WIDGET_PADDING_TOP


def plan_widget(corner: Corner, widget: WidgetType, now: datetime, display_width: int,
                status: StatusReadings, use_24_hour_format: bool = False,
                step_goal: int = DEFAULT_STEP_GOAL) -> Optional[WidgetDraw]:
    """Work out where and what a corner widget draws, or None to skip it."""
    if widget is WidgetType.NONE:
        logger.debug(f"Skipping corner {corner.value} - no widget selected")
        return None
    if widget is WidgetType.AM_PM and use_24_hour_format:
        return None

    width = widget_width(widget, now)
    x, y = corner_origin(corner, width, display_width)

    if widget in (WidgetType.MONTH_DATE, WidgetType.DAY_DATE):
        digits = number_layout(date_value(widget, now), DATE_ATLAS.cell_width,
                               DATE_DIGIT_SPACING, x, y)
        return WidgetDraw(widget, x, y, width, digits=tuple(digits))
    if widget is WidgetType.AM_PM:
        return WidgetDraw(widget, x, y, width, strip=AM_PM_STRIP.name,
                          frame=am_pm_frame(now.hour))
    if widget is WidgetType.BATTERY:
        return WidgetDraw(widget, x, y, width, strip=BATTERY_STRIP.name,
                          frame=battery_frame(status.battery_percent))
    return WidgetDraw(widget, x, y, width, strip=STEPS_STRIP.name,
                      frame=step_frame(status.step_count, step_goal))


def plan_corners(top_left: WidgetType, top_right: WidgetType, now: datetime,
                 display_width: int, status: StatusReadings,
                 use_24_hour_format: bool = False,
                 step_goal: int = DEFAULT_STEP_GOAL) -> List[WidgetDraw]:
    if step_goal <= 0:
        step_goal = DEFAULT_STEP_GOAL
    planned = []
    for corner, widget in ((Corner.TOP_LEFT, top_left), (Corner.TOP_RIGHT, top_right)):
        draw = plan_widget(corner, widget, now, display_width, status,
                           use_24_hour_format, step_goal)
        if draw:
            planned.append(draw)
    return planned
