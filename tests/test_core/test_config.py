"""Unit tests for display configuration loading.

Tests cover:
- Defaults when no file is given
- Loading overrides from YAML (with and without a 'display' section)
- ConfigError on missing files, bad YAML and invalid values
"""

import tempfile
import unittest
from pathlib import Path

from urlcompare.core.config import (
    DisplayConfig,
    get_config_dir,
    load_default_config,
    load_display_config,
)
from urlcompare.core.constants import COMPONENT_STYLES, DEFAULTS
from urlcompare.core.exceptions import ConfigError


class TestLoadDisplayConfig(unittest.TestCase):
    """Test load_display_config."""

    def setUp(self):
        """Create temporary directory for each test."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.temp_dir.name) / "display.yaml"

    def tearDown(self):
        """Clean up temporary directory."""
        self.temp_dir.cleanup()

    def write(self, content):
        self.config_path.write_text(content, encoding="utf-8")
        return self.config_path

    def test_defaults_without_file(self):
        """Test that no path gives built-in defaults."""
        config = load_display_config(None)

        self.assertEqual(config.placeholder, DEFAULTS["placeholder"])
        self.assertTrue(config.mask_password)
        self.assertEqual(config.styles, COMPONENT_STYLES)

    def test_styles_not_shared_between_instances(self):
        """Test that each config gets its own styles mapping."""
        first = DisplayConfig()
        first.styles["protocol"] = "white"

        self.assertEqual(DisplayConfig().styles["protocol"], COMPONENT_STYLES["protocol"])

    def test_load_display_section(self):
        """Test loading overrides from a 'display' section."""
        path = self.write(
            "display:\n"
            "  placeholder: n/a\n"
            "  mask_password: false\n"
            "  styles:\n"
            "    hostname: bold blue\n"
        )

        config = load_display_config(path)

        self.assertEqual(config.placeholder, "n/a")
        self.assertFalse(config.mask_password)
        self.assertEqual(config.style_for("hostname"), "bold blue")
        self.assertEqual(config.style_for("protocol"), COMPONENT_STYLES["protocol"])

    def test_load_top_level_keys(self):
        """Test that settings may also be given without a 'display' section."""
        path = self.write("diff_style: reverse\n")

        self.assertEqual(load_display_config(str(path)).diff_style, "reverse")

    def test_empty_file_gives_defaults(self):
        """Test that an empty file gives defaults."""
        path = self.write("")

        self.assertEqual(load_display_config(path), DisplayConfig())

    def test_missing_file(self):
        """Test that a missing file raises ConfigError."""
        with self.assertRaises(ConfigError) as ctx:
            load_display_config(Path(self.temp_dir.name) / "nope.yaml")

        self.assertIn("not found", str(ctx.exception))

    def test_invalid_yaml(self):
        """Test that malformed YAML raises ConfigError."""
        path = self.write("display: [unclosed\n")

        with self.assertRaises(ConfigError) as ctx:
            load_display_config(path)

        self.assertIn("Failed to parse display YAML", str(ctx.exception))

    def test_invalid_types(self):
        """Test that wrongly typed values raise ConfigError."""
        for content in (
            "- a\n- b\n",
            "display: 3\n",
            "placeholder: 5\n",
            "mask_password: 'yes'\n",
            "styles: red\n",
            "styles:\n  hostname: 3\n",
        ):
            with self.subTest(content=content):
                path = self.write(content)
                with self.assertRaises(ConfigError):
                    load_display_config(path)

    def test_unknown_style_component(self):
        """Test that styles for unknown components are rejected."""
        path = self.write("styles:\n  colour: red\n")

        with self.assertRaises(ConfigError) as ctx:
            load_display_config(path)

        self.assertIn("Unknown component 'colour'", str(ctx.exception))


class TestLoadDefaultConfig(unittest.TestCase):
    """Test the project configs directory fallback."""

    def test_config_dir_name(self):
        """Test that the config directory is named configs."""
        self.assertEqual(get_config_dir().name, "configs")

    def test_load_default_config(self):
        """Test that the shipped or built-in defaults load."""
        config = load_default_config()

        self.assertIsInstance(config, DisplayConfig)
        self.assertEqual(config.placeholder, "-")


if __name__ == "__main__":
    unittest.main()
