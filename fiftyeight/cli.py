#!/usr/bin/env python3
# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Command-line interface for fiftyeight.
Renders watch face snapshots and inspects digit layouts offline.
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from PIL import Image

from .config import FiftyEightConfig, load_config, validate_config
from .face.classifier import DIGIT_POLICIES, get_policy
from .face.layout import TimeFormat, layout
from .face.renderer import WatchFaceRenderer
from .face.widgets import StatusReadings

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug: bool = False) -> None:
    """Configure console logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def parse_time(value: str) -> datetime:
    """Parse HH:MM or HH:MM:SS into today's date at that time."""
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return datetime.now().replace(hour=parsed.hour, minute=parsed.minute,
                                      second=parsed.second, microsecond=0)
    raise argparse.ArgumentTypeError(f"Invalid time '{value}', expected HH:MM or HH:MM:SS")


def parse_date(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def build_config(args) -> FiftyEightConfig:
    """Load config and apply command-line overrides."""
    config = load_config(args.config)

    if config.face.debug_logging:
        logging.getLogger().setLevel(logging.DEBUG)

    if getattr(args, 'dark', False):
        config.face.dark_mode = True
    if getattr(args, 'use_24h', False):
        config.face.use_24_hour_format = True
    if getattr(args, 'seconds', False):
        config.face.show_second_dot = True
    if getattr(args, 'policy', None):
        config.glyphs.policy = args.policy

    for error in validate_config(config):
        logger.warning(f"Config warning: {error}")

    return config


def frame_time(args) -> datetime:
    now = args.time or datetime.now().replace(microsecond=0)
    if args.date:
        now = now.replace(year=args.date.year, month=args.date.month, day=args.date.day)
    return now


def cmd_render(args):
    """Render one frame to a PNG file."""
    config = build_config(args)
    renderer = WatchFaceRenderer(config)
    now = frame_time(args)
    status = StatusReadings(battery_percent=args.battery, step_count=args.steps)

    image = renderer.render_to_image(now, status)
    if args.scale > 1:
        image = image.resize((image.width * args.scale, image.height * args.scale),
                             Image.NEAREST)
    image.save(args.output)
    print(f"Rendered {now:%Y-%m-%d %H:%M:%S} to {args.output}")


def cmd_layout(args):
    """Print the glyph placements for a time, as render would draw them."""
    config = build_config(args)
    time_format = TimeFormat.H24 if config.face.use_24_hour_format else TimeFormat.H12
    rules = get_policy(config.glyphs.policy)
    result = layout(args.time.hour, args.time.minute, time_format, rules=rules,
                    gap=config.glyphs.digit_gap, colon_width=config.glyphs.colon_width)

    print(f"{args.time:%H:%M} ({time_format.value}-hour, policy {rules.name})")
    print("=" * 44)
    for placement in result.placements:
        if placement.is_colon:
            print(f"  x={placement.x:3d}  colon        w={placement.width}")
        else:
            print(f"  x={placement.x:3d}  {placement.value}  "
                  f"{placement.family.value:<12} w={placement.width}  "
                  f"({placement.role.value})")
    print(f"Total width: {result.width}px")


def cmd_policies(args):
    """List digit policies and their rules in precedence order."""
    for name, table in DIGIT_POLICIES.items():
        print(f"{name}:")
        for i, rule in enumerate(table.rules, 1):
            tens = rule.tens.value if rule.tens else "-"
            print(f"  {i}. {rule.name:<24} tens={tens:<12} ones={rule.ones.value}")
        fallback = table.fallback.value if table.fallback else "narrowest"
        print(f"  fallback: {fallback}")


def cmd_sweep(args):
    """Render every hour of the day into one contact sheet."""
    config = build_config(args)
    renderer = WatchFaceRenderer(config)
    base = frame_time(args).replace(minute=args.minute, second=0)

    frames: List[Image.Image] = []
    for hour in range(24):
        frames.append(renderer.render_to_image(base.replace(hour=hour)))

    width, height = renderer.size
    margin = 4
    columns = max(1, args.columns)
    rows = (len(frames) + columns - 1) // columns
    sheet = Image.new('RGB', (columns * (width + margin) + margin, rows * (height + margin) + margin),
                      (128, 128, 128))
    for i, frame in enumerate(frames):
        row, col = divmod(i, columns)
        sheet.paste(frame, (margin + col * (width + margin), margin + row * (height + margin)))

    sheet.save(args.output)
    print(f"Rendered {len(frames)} frames at minute {args.minute:02d} to {args.output}")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="fiftyeight - sprite-digit watch face",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fiftyeight render --time 10:08:30 -o face.png    Render one frame
  fiftyeight layout 11:00                          Show glyph placements
  fiftyeight policies                              List digit policies
  fiftyeight sweep --minute 58 -o sheet.png        Contact sheet of all hours
        """
    )
    parser.add_argument("--config", "-c", help="Path to config.yaml")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_face_options(sub):
        sub.add_argument("--date", type=parse_date, help="Date (YYYY-MM-DD)")
        sub.add_argument("--dark", action="store_true", help="Dark mode")
        sub.add_argument("--24h", dest="use_24h", action="store_true", help="24-hour format")
        sub.add_argument("--seconds", action="store_true", help="Show the second dot")
        sub.add_argument("--policy", choices=sorted(DIGIT_POLICIES), help="Digit policy")

    # Render
    render = subparsers.add_parser("render", help="Render one frame to PNG")
    render.add_argument("--time", "-t", type=parse_time, help="Time (HH:MM[:SS]), default now")
    render.add_argument("--battery", type=int, default=100, help="Battery percent")
    render.add_argument("--steps", type=int, default=0, help="Step count")
    render.add_argument("--scale", type=int, default=1, help="Integer upscale factor")
    render.add_argument("--output", "-o", default="face.png", help="Output PNG path")
    add_face_options(render)

    # Layout
    layout_cmd = subparsers.add_parser("layout", help="Print glyph placements for a time")
    layout_cmd.add_argument("time", type=parse_time, help="Time (HH:MM)")
    layout_cmd.add_argument("--24h", dest="use_24h", action="store_true", help="24-hour format")
    layout_cmd.add_argument("--policy", choices=sorted(DIGIT_POLICIES), help="Digit policy")

    # Policies
    subparsers.add_parser("policies", help="List digit policies")

    # Sweep
    sweep = subparsers.add_parser("sweep", help="Render all 24 hours into a contact sheet")
    sweep.add_argument("--minute", type=int, default=58, choices=range(60), metavar="0-59",
                       help="Minute shown in every frame")
    sweep.add_argument("--columns", type=int, default=6, help="Frames per row")
    sweep.add_argument("--output", "-o", default="sweep.png", help="Output PNG path")
    sweep.set_defaults(time=None)
    add_face_options(sweep)

    # Parse and execute
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(args.debug)

    commands = {
        "render": cmd_render,
        "layout": cmd_layout,
        "policies": cmd_policies,
        "sweep": cmd_sweep,
    }

    if args.command in commands:
        commands[args.command](args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
