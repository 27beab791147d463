# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Dot positions on the circular dial for hour, minute and second."""

from enum import Enum
from typing import List, NamedTuple, Tuple

from . import fastmath

DIAL_RADIUS = 50
DOT_RADIUS = 4


class Point(NamedTuple):
    x: int
    y: int


class Hand(Enum):
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


def position_on_circle(phase: float, radius: float, center: Tuple[int, int]) -> Point:
    """Pixel position of a phase around a circle.

    Phase 0 is the top of the circle and increases clockwise; a phase of
    0.25 is three o'clock.
    """
    angle = phase * fastmath.TWO_PI - fastmath.PI_2
    x = center[0] + int(fastmath.rint(radius * fastmath.cos(angle)))
    y = center[1] + int(fastmath.rint(radius * fastmath.sin(angle)))
    return Point(x, y)


def second_phase(second: int) -> float:
    return second / 60.0


def minute_phase(minute: int) -> float:
    return minute / 60.0


def hour_phase(hour: int, minute: int) -> float:
    """Hour position that creeps with the minutes instead of jumping."""
    return ((hour % 12) + minute / 60.0) / 12.0


def hand_positions(hour: int, minute: int, second: int, radius: float,
                   center: Tuple[int, int], show_seconds: bool = True,
                   show_hour_minute: bool = True) -> List[Tuple[Hand, Point]]:
    """Dots to draw this frame, in drawing order (second first)."""
    dots = []
    if show_seconds:
        dots.append((Hand.SECOND, position_on_circle(second_phase(second), radius, center)))
    if show_hour_minute:
        dots.append((Hand.MINUTE, position_on_circle(minute_phase(minute), radius, center)))
        dots.append((Hand.HOUR, position_on_circle(hour_phase(hour, minute), radius, center)))
    return dots
