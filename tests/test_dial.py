# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Tests for dial dot geometry."""

import math

import pytest

from fiftyeight.face.dial import (
    DIAL_RADIUS, Hand, Point, hand_positions, hour_phase, minute_phase,
    position_on_circle,
)

CENTER = (72, 84)


class TestPositionOnCircle:
    """Tests for phase to pixel conversion."""

    def test_top_of_dial(self):
        assert position_on_circle(0.0, DIAL_RADIUS, CENTER) == Point(72, 34)

    def test_quarter_turns(self):
        right = position_on_circle(0.25, DIAL_RADIUS, CENTER)
        bottom = position_on_circle(0.5, DIAL_RADIUS, CENTER)
        left = position_on_circle(0.75, DIAL_RADIUS, CENTER)

        assert right == Point(122, 84)
        assert bottom == Point(72, 134)
        assert abs(left.x - 22) <= 1 and abs(left.y - 84) <= 1

    def test_stays_on_circle(self):
        """Every minute position is within a pixel of the true circle."""
        for minute in range(60):
            point = position_on_circle(minute / 60.0, DIAL_RADIUS, CENTER)
            angle = minute / 60.0 * 2 * math.pi - math.pi / 2
            assert abs(point.x - (CENTER[0] + DIAL_RADIUS * math.cos(angle))) <= 1
            assert abs(point.y - (CENTER[1] + DIAL_RADIUS * math.sin(angle))) <= 1

    def test_returns_ints(self):
        point = position_on_circle(0.1, 33.3, (10, 10))
        assert isinstance(point.x, int) and isinstance(point.y, int)


class TestPhases:
    """Tests for hand phases."""

    def test_minute_phase(self):
        assert minute_phase(15) == pytest.approx(0.25)

    def test_hour_phase_creeps(self):
        assert hour_phase(3, 0) == pytest.approx(0.25)
        assert hour_phase(3, 30) == pytest.approx(3.5 / 12)
        assert hour_phase(15, 0) == hour_phase(3, 0)
        assert hour_phase(0, 0) == 0.0


class TestHandPositions:
    """Tests for the per-frame dot list."""

    def test_all_dots_second_first(self):
        dots = hand_positions(3, 0, 45, DIAL_RADIUS, CENTER)
        assert [hand for hand, _ in dots] == [Hand.SECOND, Hand.MINUTE, Hand.HOUR]
        positions = dict(dots)
        assert positions[Hand.MINUTE] == Point(72, 34)
        assert positions[Hand.HOUR] == Point(122, 84)
        assert abs(positions[Hand.SECOND].x - 22) <= 1

    def test_seconds_hidden(self):
        dots = hand_positions(3, 0, 45, DIAL_RADIUS, CENTER, show_seconds=False)
        assert [hand for hand, _ in dots] == [Hand.MINUTE, Hand.HOUR]

    def test_hour_minute_hidden(self):
        dots = hand_positions(3, 0, 45, DIAL_RADIUS, CENTER, show_hour_minute=False)
        assert [hand for hand, _ in dots] == [Hand.SECOND]
