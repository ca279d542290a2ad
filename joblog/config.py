"""Defaults for joblog from ~/.joblog/config.yaml (or $JOBLOG_CONFIG) and the environment."""
import logging
import os
from pathlib import Path

import yaml

from joblog.styled import ColorChoice

logger = logging.getLogger(__name__)

_JOBLOG_DATA_DIR = os.path.expanduser(os.environ.get("JOBLOG_DATA_DIR", "~/.joblog"))
CONFIG_PATH = os.environ.get("JOBLOG_CONFIG") or os.path.join(_JOBLOG_DATA_DIR, "config.yaml")

DEFAULTS = {"color": "auto", "all": False, "step": ""}


class ConfigError(Exception):
    """Config file is unreadable or has invalid values."""


def load_config(path: str | None = None) -> dict:
    """
    Load config as {color: ColorChoice, all: bool, step: str}.
    A missing file gives the defaults. JOBLOG_COLOR overrides the file's color.
    """
    path = Path(path or CONFIG_PATH).expanduser()
    config = dict(DEFAULTS)
    if path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Can't read config {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path}: expected a mapping")
        unknown = set(data) - set(DEFAULTS)
        if unknown:
            logger.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(sorted(unknown)))
        config.update({k: v for k, v in data.items() if k in DEFAULTS})
        logger.debug("Loaded config from %s", path)

    color = os.environ.get("JOBLOG_COLOR") or config["color"]
    try:
        config["color"] = ColorChoice(str(color).lower())
    except ValueError as e:
        raise ConfigError(f"Invalid color {color!r}: expected auto, always or never") from e
    if not isinstance(config["all"], bool):
        raise ConfigError(f"Invalid 'all' value {config['all']!r}: expected true or false")
    config["step"] = str(config["step"] or "")
    return config
