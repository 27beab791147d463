"""
Settings for the fiftyeight watch face.

Settings live in a YAML file split into four sections (face, widgets,
display, glyphs), each mapped onto a dataclass. Anything missing from the
file keeps its default; problems are reported by validate_config() rather
than raised.
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# Searched in order when no path is given
SEARCH_PATHS = [
    "/etc/fiftyeight/config.yaml",
    "~/.config/fiftyeight/config.yaml",
    "./config.yaml",
]

VALID_WIDGETS = ['none', 'month_date', 'day_date', 'am_pm', 'battery', 'step_count']
VALID_POLICIES = ['balanced', 'classic', 'uniform']


@dataclass
class FaceConfig:
    """Watch face behaviour."""
    dark_mode: bool = False
    use_24_hour_format: bool = False
    show_am_pm: bool = False  # replaces the top left widget in 12-hour mode
    show_second_dot: bool = False
    show_hour_minute_dots: bool = True
    step_goal: int = 10000
    debug_logging: bool = False


@dataclass
class WidgetConfig:
    """Corner widget selection."""
    top_left: str = "day_date"  # none, month_date, day_date, am_pm, battery, step_count
    top_right: str = "battery"


@dataclass
class DisplayConfig:
    """Display geometry in pixels."""
    width: int = 144
    height: int = 168
    dial_radius: int = 50
    dot_radius: int = 4


@dataclass
class GlyphConfig:
    """Sprite sheets and digit layout."""
    # Directory of <name>.png sheets; missing sheets are synthesized
    atlas_dir: Optional[str] = None
    policy: str = "balanced"  # balanced, classic, uniform
    digit_gap: int = 2
    colon_width: int = 8


@dataclass
class FiftyEightConfig:
    """All settings."""
    face: FaceConfig = field(default_factory=FaceConfig)
    widgets: WidgetConfig = field(default_factory=WidgetConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    glyphs: GlyphConfig = field(default_factory=GlyphConfig)

    # Where the settings came from; never written back
    config_path: Optional[str] = None


SECTIONS = {
    'face': FaceConfig,
    'widgets': WidgetConfig,
    'display': DisplayConfig,
    'glyphs': GlyphConfig,
}


_TRUE_WORDS = ('true', 'yes', 'on', '1')
_FALSE_WORDS = ('false', 'no', 'off', '0')


def _coerce(value: Any, field_type: Any) -> Any:
    """Convert a YAML value to a field's declared type.

    Raises:
        ValueError: value cannot represent that type.
    """
    if field_type is bool:
        if isinstance(value, bool):
            return value
        word = str(value).strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if field_type is int:
        if isinstance(value, bool):
            raise ValueError(f"not a number: {value!r}")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"not a whole number: {value!r}")
        return int(value)
    if field_type is str:
        if isinstance(value, (dict, list)):
            raise ValueError(f"not a string: {value!r}")
        return str(value)
    if field_type == Optional[str]:
        return None if value is None else _coerce(value, str)
    return value


def _build_section(cls: type, data: Any) -> Any:
    """Create a section dataclass from its YAML mapping.

    Unknown keys are skipped; values that cannot be converted to the
    field's type keep the default.
    """
    if data is None:
        return cls()
    if not isinstance(data, dict):
        logger.warning(f"Config section for {cls.__name__} is not a mapping, using defaults")
        return cls()

    known = {f.name: f.type for f in fields(cls)}
    values = {}
    for key, value in data.items():
        if key not in known:
            logger.debug(f"Unknown {cls.__name__} key '{key}' ignored")
            continue
        try:
            values[key] = _coerce(value, known[key])
        except (TypeError, ValueError) as e:
            logger.warning(f"Bad value for {cls.__name__}.{key}, using default: {e}")
    return cls(**values)


def _read_yaml(path: str) -> Optional[Dict[str, Any]]:
    """Parse a YAML file, returning None if it cannot be read."""
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read config {path}: {e}")
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Config {path} does not contain a mapping")
        return None
    return data


def load_config(config_path: Optional[str] = None) -> FiftyEightConfig:
    """
    Load settings from YAML.

    Args:
        config_path: File to read. When None the SEARCH_PATHS are tried
            and the first readable one wins.

    Returns:
        FiftyEightConfig, all defaults if nothing could be read.
    """
    candidates = [config_path] if config_path else SEARCH_PATHS

    data: Dict[str, Any] = {}
    source = None
    for candidate in candidates:
        path = os.path.expanduser(candidate)
        if not os.path.exists(path):
            continue
        parsed = _read_yaml(path)
        if parsed is not None:
            data, source = parsed, path
            logger.info(f"Using config {path}")
            break

    if source is None:
        logger.info("No usable config file, running with defaults")

    config = FiftyEightConfig(
        config_path=source,
        **{name: _build_section(cls, data.get(name)) for name, cls in SECTIONS.items()}
    )

    # atlas_dir may be relative to the file it was read from
    if config.glyphs.atlas_dir:
        atlas_dir = os.path.expanduser(config.glyphs.atlas_dir)
        if source and not os.path.isabs(atlas_dir):
            atlas_dir = os.path.join(os.path.dirname(source), atlas_dir)
        config.glyphs.atlas_dir = atlas_dir

    return config


def config_to_dict(config: FiftyEightConfig) -> Dict[str, Any]:
    """Plain nested dict of the settings, ready for yaml.safe_dump()."""
    data = asdict(config)
    data.pop('config_path', None)
    return data


def validate_config(config: FiftyEightConfig) -> List[str]:
    """
    Check settings for values the face cannot use.

    Returns:
        Human-readable problems; an empty list means the config is usable.
    """
    errors = []

    if config.face.step_goal <= 0:
        errors.append("Step goal must be a positive number of steps")

    for corner in ('top_left', 'top_right'):
        if getattr(config.widgets, corner) not in VALID_WIDGETS:
            errors.append(f"Invalid {corner} widget. Must be one of: {VALID_WIDGETS}")

    display = config.display
    if display.width <= 0 or display.height <= 0:
        errors.append("Display width and height must be positive")
    if display.dial_radius <= 0:
        errors.append("Dial radius must be positive")
    elif display.dial_radius * 2 > min(display.width, display.height):
        errors.append("Dial radius must fit within the display")
    if display.dot_radius <= 0:
        errors.append("Dot radius must be positive")

    glyphs = config.glyphs
    if glyphs.policy not in VALID_POLICIES:
        errors.append(f"Invalid digit policy. Must be one of: {VALID_POLICIES}")
    if glyphs.digit_gap < 0:
        errors.append("digit_gap must not be negative")
    if glyphs.colon_width < 0:
        errors.append("colon_width must not be negative")
    if glyphs.atlas_dir and not os.path.isdir(glyphs.atlas_dir):
        errors.append(f"Atlas directory not found: {glyphs.atlas_dir}")

    return errors
