# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Watch face core: glyph layout, dial geometry and frame rendering."""

from .classifier import DIGIT_POLICIES, RuleTable, get_policy
from .dial import Point, position_on_circle
from .glyphs import AtlasSet, GlyphFamily
from .layout import LayoutResult, Placement, TimeFormat, layout
from .renderer import WatchFace, WatchFaceRenderer
from .widgets import StatusReadings, WidgetType

__all__ = [
    'AtlasSet',
    'DIGIT_POLICIES',
    'GlyphFamily',
    'LayoutResult',
    'Placement',
    'Point',
    'RuleTable',
    'StatusReadings',
    'TimeFormat',
    'WatchFace',
    'WatchFaceRenderer',
    'WidgetType',
    'get_policy',
    'layout',
    'position_on_circle',
]
