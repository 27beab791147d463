# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Digital time layout: glyph families plus pixel positions for HH:MM."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from .classifier import (
    DIGIT_ROLES, DEFAULT_RULES, DigitField, DigitRole, FieldContext,
    FieldRole, RuleTable,
)
from .glyphs import GLYPH_HEIGHT, GlyphFamily

DIGIT_GAP = 2
COLON_WIDTH = 8
COLON = ':'


class TimeFormat(Enum):
    H12 = 12
    H24 = 24


@dataclass(frozen=True)
class Placement:
    """One glyph to draw. family is None for the colon separator."""
    family: Optional[GlyphFamily]
    value: Union[int, str]
    x: int
    y: int
    role: Optional[DigitRole] = None
    colon_width: int = COLON_WIDTH

    @property
    def is_colon(self) -> bool:
        return self.family is None

    @property
    def width(self) -> int:
        return self.colon_width if self.family is None else self.family.width


@dataclass(frozen=True)
class LayoutResult:
    """Ordered placements for a time string plus its overall extent."""
    placements: Tuple[Placement, ...]
    width: int
    height: int = GLYPH_HEIGHT
    x: int = 0
    y: int = 0

    @property
    def digits(self) -> List[Placement]:
        return [p for p in self.placements if not p.is_colon]

    @property
    def colon(self) -> Optional[Placement]:
        for placement in self.placements:
            if placement.is_colon:
                return placement
        return None

    @property
    def mask_rect(self) -> Tuple[int, int, int, int]:
        """Opaque rectangle that hides dial dots behind the time."""
        return self.x, self.y, self.width, self.height

    def translated(self, dx: int, dy: int) -> 'LayoutResult':
        return replace(
            self,
            placements=tuple(replace(p, x=p.x + dx, y=p.y + dy) for p in self.placements),
            x=self.x + dx,
            y=self.y + dy,
        )

    def centered(self, display_width: int, display_height: int) -> 'LayoutResult':
        """Move the layout to the middle of a display."""
        return self.translated(
            (display_width - self.width) // 2 - self.x,
            (display_height - self.height) // 2 - self.y,
        )


def to_display_hour(hour: int, time_format: TimeFormat) -> int:
    """Map a 0-23 wall-clock hour to the value shown on the face."""
    if time_format is TimeFormat.H24:
        return hour
    if hour == 0:
        return 12
    if hour > 12:
        return hour - 12
    return hour


def split_time(hour: int, minute: int, time_format: TimeFormat) -> Tuple[DigitField, DigitField]:
    """Split hour and minute into digit fields for the given format."""
    hour_field = DigitField.split(
        to_display_hour(hour, time_format),
        drop_leading_zero=time_format is TimeFormat.H12,
    )
    return hour_field, DigitField.split(minute)


def _field_placements(field: DigitField, tens: Optional[GlyphFamily], ones: GlyphFamily,
                      roles: Tuple[DigitRole, DigitRole]) -> Iterable[Tuple[GlyphFamily, int, DigitRole]]:
    if field.tens_present and tens is not None:
        yield tens, field.tens, roles[0]
    yield ones, field.ones, roles[1]


def layout(hour: int, minute: int, time_format: TimeFormat = TimeFormat.H12,
           rules: RuleTable = DEFAULT_RULES, available=None,
           gap: int = DIGIT_GAP, colon_width: int = COLON_WIDTH) -> LayoutResult:
    """Lay out HH:MM left to right starting at (0, 0).

    The hour field is classified first; the minute field is told whether
    the hour came out as a single digit. Each glyph advances x by its
    family width plus gap, the colon sits between the groups, and there is
    no gap after the last digit.

    Hour must be 0-23 and minute 0-59; other values are not checked.

    Args:
        hour: Wall-clock hour.
        minute: Wall-clock minute.
        time_format: 12- or 24-hour display.
        rules: Classification policy.
        available: Families that can be drawn (None for all).
        gap: Pixels between neighbouring glyphs.
        colon_width: Width reserved for the colon.

    Returns:
        LayoutResult positioned at the origin; see LayoutResult.centered().
    """
    hour_field, minute_field = split_time(hour, minute, time_format)

    hour_cls = rules.classify(
        FieldContext(FieldRole.HOUR, hour_field),
        available,
    )
    minute_cls = rules.classify(
        FieldContext(
            FieldRole.MINUTE, minute_field,
            hour_single_digit=hour_field.single_digit,
        ),
        available,
    )

    placements = []
    x = 0
    for family, digit, role in _field_placements(
            hour_field, hour_cls.tens, hour_cls.ones, DIGIT_ROLES[FieldRole.HOUR]):
        placements.append(Placement(family, digit, x, 0, role))
        x += family.width + gap

    placements.append(Placement(None, COLON, x, 0, colon_width=colon_width))
    x += colon_width + gap

    for family, digit, role in _field_placements(
            minute_field, minute_cls.tens, minute_cls.ones, DIGIT_ROLES[FieldRole.MINUTE]):
        placements.append(Placement(family, digit, x, 0, role))
        x += family.width + gap

    return LayoutResult(tuple(placements), width=x - gap)


def number_layout(value: int, family_width: int, spacing: int,
                  x: int = 0, y: int = 0) -> List[Tuple[int, int, int]]:
    """Positions of the digits of a small number (no leading zero).

    Returns (digit, x, y) triples; used for the date widgets.
    """
    if value < 10:
        return [(value, x, y)]
    tens, ones = divmod(value, 10)
    return [(tens, x, y), (ones, x + family_width + spacing, y)]
