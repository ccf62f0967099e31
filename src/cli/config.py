"""Configuration loading and management."""

from pathlib import Path
from typing import Optional

import yaml

from .config_models import HowdyConfig

# Default config dict
DEFAULT_CONFIG = HowdyConfig().to_dict()


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "howdy.yaml",
        Path.home() / ".howdy" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from file or defaults.

    Returns dict. Use load_config_model() for typed access.
    """
    model = load_config_model(config_path)
    return model.to_dict()


def load_config_model(config_path: Optional[Path] = None) -> HowdyConfig:
    """Load configuration as Pydantic model with validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
    elif config_path:
        raise ValueError(f"Config file not found: {config_path}")

    if not isinstance(base_config, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(base_config).__name__}")

    try:
        return HowdyConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def get_paths(config: dict, journal_file: Optional[Path] = None) -> dict:
    """Get expanded paths from config; `journal_file` overrides the configured one."""
    paths = config.get("paths", DEFAULT_CONFIG["paths"])
    log_file = paths.get("log_file")
    return {
        "journal_file": Path(journal_file or paths["journal_file"]).expanduser(),
        "log_file": Path(log_file).expanduser() if log_file else None,
    }
