# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Tests for the command-line interface."""

import argparse

import pytest
import yaml
from PIL import Image

from fiftyeight.cli import main, parse_time


class TestParseTime:
    """Tests for time argument parsing."""

    def test_hours_minutes(self):
        parsed = parse_time("10:08")
        assert (parsed.hour, parsed.minute, parsed.second) == (10, 8, 0)

    def test_with_seconds(self):
        parsed = parse_time("23:59:30")
        assert parsed.second == 30

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_time("25:00")


class TestCommands:
    """Tests for each CLI command."""

    def test_layout(self, temp_dir, capsys):
        main(["--config", str(temp_dir / "missing.yaml"), "layout", "01:23"])

        out = capsys.readouterr().out
        assert "Total width: 114px" in out
        assert "priority" in out

    def test_layout_24h(self, temp_dir, capsys):
        main(["--config", str(temp_dir / "missing.yaml"), "layout", "09:41", "--24h"])

        out = capsys.readouterr().out
        assert "24-hour" in out
        assert "Total width: 136px" in out

    def test_layout_follows_config(self, sample_config_yaml, sample_config_dict, capsys):
        """Format, policy, gap and colon width come from the config file."""
        sample_config_dict["face"]["use_24_hour_format"] = True
        sample_config_dict["glyphs"]["policy"] = "uniform"
        sample_config_dict["glyphs"]["digit_gap"] = 1
        sample_config_dict["glyphs"]["colon_width"] = 6
        with open(sample_config_yaml, 'w') as f:
            yaml.dump(sample_config_dict, f)

        main(["--config", str(sample_config_yaml), "layout", "15:07"])

        out = capsys.readouterr().out
        assert "15:07 (24-hour, policy uniform)" in out
        assert "Total width: 130px" in out

    def test_layout_options_override_config(self, sample_config_yaml, capsys):
        main(["--config", str(sample_config_yaml), "layout", "15:07",
              "--24h", "--policy", "classic"])

        out = capsys.readouterr().out
        assert "(24-hour, policy classic)" in out

    def test_policies(self, capsys):
        main(["policies"])

        out = capsys.readouterr().out
        for name in ("balanced:", "classic:", "uniform:"):
            assert name in out
        assert "trailing_zero_minute" in out

    def test_render(self, temp_dir):
        output = temp_dir / "face.png"

        main(["--config", str(temp_dir / "missing.yaml"), "render",
              "--time", "10:08:30", "--date", "2026-10-18", "--battery", "40",
              "--output", str(output)])

        with Image.open(output) as image:
            assert image.size == (144, 168)

    def test_render_scaled(self, temp_dir):
        output = temp_dir / "face.png"

        main(["--config", str(temp_dir / "missing.yaml"), "render",
              "--time", "10:08", "--scale", "2", "--dark", "--output", str(output)])

        with Image.open(output) as image:
            assert image.size == (288, 336)
            assert image.getpixel((0, 0))[:3] == (0, 0, 0)

    def test_sweep(self, temp_dir):
        output = temp_dir / "sheet.png"

        main(["--config", str(temp_dir / "missing.yaml"), "sweep",
              "--minute", "58", "--columns", "6", "--output", str(output)])

        with Image.open(output) as image:
            assert image.size == (6 * 148 + 4, 4 * 172 + 4)

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
