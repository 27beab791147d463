# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Glyph families and sprite atlases.

Every digit sheet shares one layout: digits 1-9 fill a three column grid
left to right, top to bottom, and 0 sits alone at the start of the last
row. A sheet is described by an AtlasDescriptor (cell size plus grid),
so one drawing routine serves every family instead of one per sheet.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import pygame
from PIL import Image, ImageDraw, ImageOps

logger = logging.getLogger(__name__)

# Height shared by every time-digit family
GLYPH_HEIGHT = 18

Rect = Tuple[int, int, int, int]


class AtlasError(Exception):
    """Raised when a sprite sheet cannot hold the grid it claims to have."""


class GlyphFamily(Enum):
    """Fixed-width digit sets, widest first."""
    PRIORITY = "priority"
    MID_PRIORITY = "mid_priority"
    SUBPRIORITY = "subpriority"
    LESSER = "lesser"
    LEAST = "least"

    @property
    def width(self) -> int:
        return FAMILY_WIDTHS[self]

    @property
    def height(self) -> int:
        return GLYPH_HEIGHT


FAMILY_WIDTHS: Dict[GlyphFamily, int] = {
    GlyphFamily.PRIORITY: 40,
    GlyphFamily.MID_PRIORITY: 35,
    GlyphFamily.SUBPRIORITY: 30,
    GlyphFamily.LESSER: 20,
    GlyphFamily.LEAST: 13,
}


def narrowest_family(families=None) -> GlyphFamily:
    return min(families or GlyphFamily, key=lambda f: f.width)


@dataclass(frozen=True)
class AtlasDescriptor:
    """Geometry of a digit sprite sheet."""
    name: str
    cell_width: int
    cell_height: int
    columns: int = 3
    rows: int = 4

    def __post_init__(self):
        if self.columns * self.rows < 10:
            raise ValueError(
                f"Atlas '{self.name}' has {self.columns}x{self.rows} cells, "
                f"needs at least 10 for digits 0-9"
            )

    @property
    def sheet_size(self) -> Tuple[int, int]:
        return self.columns * self.cell_width, self.rows * self.cell_height

    def cell_index(self, digit: int) -> Tuple[int, int]:
        """Return the (row, column) holding a digit.

        Raises:
            ValueError: digit is not in 0-9.
        """
        if not isinstance(digit, int) or not 0 <= digit <= 9:
            raise ValueError(f"Not a digit: {digit!r}")
        index = 9 if digit == 0 else digit - 1
        return index // self.columns, index % self.columns

    def source_rect(self, digit: int) -> Rect:
        """Return the (x, y, w, h) rectangle of a digit within the sheet."""
        row, col = self.cell_index(digit)
        return (col * self.cell_width, row * self.cell_height,
                self.cell_width, self.cell_height)


@dataclass(frozen=True)
class FrameStrip:
    """A single-column strip of equally sized frames (indicators, meters)."""
    name: str
    frame_width: int
    frame_height: int
    frames: int

    @property
    def sheet_size(self) -> Tuple[int, int]:
        return self.frame_width, self.frame_height * self.frames

    def frame_rect(self, index: int) -> Rect:
        if not 0 <= index < self.frames:
            raise ValueError(f"Frame {index} out of range for '{self.name}' ({self.frames} frames)")
        return 0, index * self.frame_height, self.frame_width, self.frame_height


FAMILY_ATLASES: Dict[GlyphFamily, AtlasDescriptor] = {
    family: AtlasDescriptor(f"{family.value}_digit", FAMILY_WIDTHS[family], GLYPH_HEIGHT)
    for family in GlyphFamily
}

DATE_ATLAS = AtlasDescriptor("date", 20, 14)

AM_PM_STRIP = FrameStrip("am_pm_indicator", 20, 14, 2)
BATTERY_STRIP = FrameStrip("battery", 44, 14, 10)
STEPS_STRIP = FrameStrip("steps", 44, 14, 9)


def invert_palette(image: Image.Image) -> Image.Image:
    """Return a copy of a sprite sheet with black and white swapped.

    Palette images only have their pure black and white entries swapped,
    keeping any accent colours. Other modes get their colour channels
    inverted with alpha preserved.
    """
    if image.mode == 'P':
        inverted = image.copy()
        palette = inverted.getpalette() or []
        for i in range(0, len(palette) - 2, 3):
            entry = tuple(palette[i:i + 3])
            if entry == (0, 0, 0):
                palette[i:i + 3] = [255, 255, 255]
            elif entry == (255, 255, 255):
                palette[i:i + 3] = [0, 0, 0]
        inverted.putpalette(palette)
        return inverted

    rgba = image.convert('RGBA')
    alpha = rgba.getchannel('A')
    inverted = ImageOps.invert(rgba.convert('RGB')).convert('RGBA')
    inverted.putalpha(alpha)
    return inverted


def pil_to_surface(image: Image.Image) -> pygame.Surface:
    """Convert a PIL image to a pygame surface that owns its pixels."""
    rgba = image.convert('RGBA')
    surface = pygame.image.frombuffer(rgba.tobytes(), rgba.size, 'RGBA')
    return surface.copy()


# Seven-segment map used for synthesized sheets: a b c d e f g
_SEGMENTS = {
    0: 'abcdef', 1: 'bc', 2: 'abdeg', 3: 'abcdg', 4: 'bcfg',
    5: 'acdfg', 6: 'acdefg', 7: 'abc', 8: 'abcdefg', 9: 'abcdfg',
}


def _draw_segments(draw: ImageDraw.ImageDraw, digit: int, box: Rect, color) -> None:
    x, y, w, h = box
    t = max(2, h // 6)
    left, right = x + 1, x + w - 2
    top, bottom = y + 1, y + h - 2
    middle = y + (h - t) // 2

    bars = {
        'a': (left, top, right, top + t - 1),
        'b': (right - t + 1, top, right, middle + t - 1),
        'c': (right - t + 1, middle, right, bottom),
        'd': (left, bottom - t + 1, right, bottom),
        'e': (left, middle, left + t - 1, bottom),
        'f': (left, top, left + t - 1, middle + t - 1),
        'g': (left, middle, right, middle + t - 1),
    }
    for segment in _SEGMENTS[digit]:
        draw.rectangle(bars[segment], fill=color)


def synthesize_sheet(descriptor: AtlasDescriptor, color=(0, 0, 0, 255)) -> Image.Image:
    """Draw a placeholder digit sheet with seven-segment glyphs."""
    sheet = Image.new('RGBA', descriptor.sheet_size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(sheet)
    for digit in range(10):
        _draw_segments(draw, digit, descriptor.source_rect(digit), color)
    return sheet


def synthesize_strip(strip: FrameStrip, color=(0, 0, 0, 255)) -> Image.Image:
    """Draw a placeholder frame strip: an outlined box filled to frame level.

    Frame 0 is drawn fullest, matching the battery sheet's ordering.
    """
    sheet = Image.new('RGBA', strip.sheet_size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(sheet)
    for index in range(strip.frames):
        x, y, w, h = strip.frame_rect(index)
        draw.rectangle((x, y + 1, x + w - 1, y + h - 2), outline=color)
        if strip.frames > 1:
            fill = (w - 4) * (strip.frames - 1 - index) // (strip.frames - 1)
            if fill > 0:
                draw.rectangle((x + 2, y + 3, x + 1 + fill, y + h - 4), fill=color)
    return sheet


class GlyphAtlas:
    """A loaded digit sheet addressed through its descriptor."""

    def __init__(self, descriptor: AtlasDescriptor, surface: pygame.Surface):
        width, height = surface.get_size()
        sheet_w, sheet_h = descriptor.sheet_size
        if width < sheet_w or height < sheet_h:
            raise AtlasError(
                f"Sprite sheet '{descriptor.name}' is {width}x{height}, "
                f"grid needs {sheet_w}x{sheet_h}"
            )
        self.descriptor = descriptor
        self.surface = surface

    @classmethod
    def from_image(cls, descriptor: AtlasDescriptor, image: Image.Image,
                   dark_mode: bool = False) -> 'GlyphAtlas':
        if dark_mode:
            image = invert_palette(image)
        return cls(descriptor, pil_to_surface(image))

    @classmethod
    def synthesize(cls, descriptor: AtlasDescriptor, dark_mode: bool = False) -> 'GlyphAtlas':
        return cls.from_image(descriptor, synthesize_sheet(descriptor), dark_mode)

    def glyph(self, digit: int) -> pygame.Surface:
        """Return a subsurface for one digit (shares pixels with the sheet)."""
        return self.surface.subsurface(self.descriptor.source_rect(digit))

    def blit_digit(self, target: pygame.Surface, digit: int, x: int, y: int) -> None:
        target.blit(self.glyph(digit), (x, y))


class FrameAtlas:
    """A loaded frame strip."""

    def __init__(self, strip: FrameStrip, surface: pygame.Surface):
        width, height = surface.get_size()
        if width < strip.frame_width or height < strip.sheet_size[1]:
            raise AtlasError(
                f"Sprite strip '{strip.name}' is {width}x{height}, "
                f"needs {strip.sheet_size[0]}x{strip.sheet_size[1]}"
            )
        self.strip = strip
        self.surface = surface

    @classmethod
    def from_image(cls, strip: FrameStrip, image: Image.Image,
                   dark_mode: bool = False) -> 'FrameAtlas':
        if dark_mode:
            image = invert_palette(image)
        return cls(strip, pil_to_surface(image))

    def blit_frame(self, target: pygame.Surface, index: int, x: int, y: int) -> None:
        target.blit(self.surface.subsurface(self.strip.frame_rect(index)), (x, y))


def _open_sheet(atlas_dir: Optional[str], name: str) -> Optional[Image.Image]:
    """Open <atlas_dir>/<name>.png, or return None if it is not there."""
    if not atlas_dir:
        return None
    path = os.path.join(os.path.expanduser(atlas_dir), f"{name}.png")
    if not os.path.exists(path):
        logger.warning(f"Sprite sheet not found: {path}, using placeholder glyphs")
        return None
    image = Image.open(path)
    image.load()
    logger.info(f"Sprite sheet loaded: {path} ({image.size[0]}x{image.size[1]})")
    return image


class AtlasSet:
    """All sprite sheets a frame needs, loaded once and then read-only.

    Missing files are replaced by synthesized placeholders so a frame can
    always be drawn; a sheet that exists but is too small is an AtlasError.
    """

    def __init__(self, families: Dict[GlyphFamily, GlyphAtlas], date: GlyphAtlas,
                 strips: Dict[str, FrameAtlas]):
        self.families = families
        self.date = date
        self.strips = strips

    @property
    def available_families(self) -> frozenset:
        return frozenset(self.families)

    def family(self, family: GlyphFamily) -> GlyphAtlas:
        return self.families[family]

    def strip(self, name: str) -> FrameAtlas:
        return self.strips[name]

    @classmethod
    def load(cls, atlas_dir: Optional[str] = None, dark_mode: bool = False,
             families=None) -> 'AtlasSet':
        """Load sheets from a directory of <name>.png files.

        Args:
            atlas_dir: Directory holding the sheets; None synthesizes all.
            dark_mode: Swap black and white on every sheet.
            families: Restrict which glyph families are loaded.
        """
        loaded = {}
        for family in families or GlyphFamily:
            descriptor = FAMILY_ATLASES[family]
            image = _open_sheet(atlas_dir, descriptor.name)
            if image is None:
                image = synthesize_sheet(descriptor)
            loaded[family] = GlyphAtlas.from_image(descriptor, image, dark_mode)

        image = _open_sheet(atlas_dir, DATE_ATLAS.name)
        if image is None:
            image = synthesize_sheet(DATE_ATLAS)
        date = GlyphAtlas.from_image(DATE_ATLAS, image, dark_mode)

        strips = {}
        for strip in (AM_PM_STRIP, BATTERY_STRIP, STEPS_STRIP):
            image = _open_sheet(atlas_dir, strip.name)
            if image is None:
                image = synthesize_strip(strip)
            strips[strip.name] = FrameAtlas.from_image(strip, image, dark_mode)

        logger.debug(f"Atlas set ready: {len(loaded)} glyph families, dark_mode={dark_mode}")
        return cls(loaded, date, strips)
