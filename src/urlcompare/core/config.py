"""Configuration loader for urlcompare.

This module loads display settings for the console renderer from a YAML
file. The parser and the comparison engine take no configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from urlcompare.core.constants import COMPONENT_STYLES, DEFAULTS
from urlcompare.core.exceptions import ConfigError


@dataclass
class DisplayConfig:
    """Settings for rendering parsed URLs and comparisons."""
    placeholder: str = DEFAULTS["placeholder"]
    mask_password: bool = DEFAULTS["mask_password"]
    password_mask: str = DEFAULTS["password_mask"]
    diff_style: str = DEFAULTS["diff_style"]
    absent_marker: str = DEFAULTS["absent_marker"]
    styles: dict[str, str] = field(default_factory=lambda: dict(COMPONENT_STYLES))

    def style_for(self, component: str) -> str:
        """Get rich style for a component field, empty if none."""
        return self.styles.get(component, "")


# ============================================================================
# Configuration Paths
# ============================================================================

def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to configs directory (./configs relative to project root)
    """
    # core/ -> urlcompare/ -> src/ -> root
    project_root = Path(__file__).parent.parent.parent.parent
    return project_root / "configs"


# ============================================================================
# Display Configuration Loader
# ============================================================================

def load_display_config(config_file: Path | str | None = None) -> DisplayConfig:
    """Load display configuration from YAML file.

    Args:
        config_file: Path to display YAML file. If None, returns defaults

    Returns:
        DisplayConfig with validated settings

    Raises:
        ConfigError: If file not found, YAML parsing fails or values are invalid
    """
    if config_file is None:
        return DisplayConfig()

    config_path = Path(config_file)

    if not config_path.exists():
        raise ConfigError(f"Display config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse display YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read display config: {e}") from e

    if not data:
        return DisplayConfig()

    if not isinstance(data, dict):
        raise ConfigError("Display configuration must be a mapping")

    display = data.get("display", data)
    if not isinstance(display, dict):
        raise ConfigError("'display' section must be a mapping")

    config = DisplayConfig()

    for name in ("placeholder", "password_mask", "diff_style", "absent_marker"):
        if name in display:
            if not isinstance(display[name], str):
                raise ConfigError(f"'{name}' must be a string")
            setattr(config, name, display[name])

    if "mask_password" in display:
        if not isinstance(display["mask_password"], bool):
            raise ConfigError("'mask_password' must be true or false")
        config.mask_password = display["mask_password"]

    styles = display.get("styles", {})
    if not isinstance(styles, dict):
        raise ConfigError("'styles' must be a mapping")

    for component, style in styles.items():
        if component not in COMPONENT_STYLES:
            available = ", ".join(COMPONENT_STYLES)
            raise ConfigError(
                f"Unknown component '{component}' in styles. Available components: {available}"
            )
        if not isinstance(style, str):
            raise ConfigError(f"Style for '{component}' must be a string")
        config.styles[component] = style

    return config


def load_default_config() -> DisplayConfig:
    """Load configs/display.yaml when present, otherwise built-in defaults."""
    default_path = get_config_dir() / "display.yaml"
    if default_path.exists():
        return load_display_config(default_path)
    return DisplayConfig()
