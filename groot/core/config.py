"""
Configuration for groot.

All components receive their base directory and tool settings from a single
GrootConfig instance. Values come from built-in defaults, optionally overlaid
by a YAML file (~/.groot.yaml by default) and finally by command-line
overrides.

Example ~/.groot.yaml:

    base_dir: /opt/groot
    initial_tags:
      - go1.8
      - go1.9
    timeout: 60
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from groot.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

UPSTREAM_URL = "https://go.googlesource.com/go"
DEFAULT_INITIAL_TAGS = ["go1.7", "go1.9"]
CONFIG_FILE_NAME = ".groot.yaml"


def get_home_dir() -> Path:
    """
    Get the invoking user's home directory.

    Raises:
        ConfigurationError: If the home directory cannot be determined.
    """
    try:
        home = Path.home()
    except (KeyError, RuntimeError) as e:
        raise ConfigurationError(
            f"Unable to determine user's home directory: {e}"
        ) from e
    if not str(home) or str(home) == ".":
        raise ConfigurationError("Unable to determine user's home directory.")
    return home


def get_default_base_dir() -> Path:
    """Default workspace root: ~/.groot"""
    return get_home_dir() / ".groot"


def get_default_config_file() -> Path:
    """Default configuration file: ~/.groot.yaml"""
    return get_home_dir() / CONFIG_FILE_NAME


@dataclass
class GrootConfig:
    """Settings threaded into every groot component."""

    base_dir: Path
    upstream_url: str = UPSTREAM_URL
    initial_tags: List[str] = field(default_factory=lambda: list(DEFAULT_INITIAL_TAGS))
    timeout: int = 30
    git: str = "git"
    build_script: str = "./make.bash"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GrootConfig":
        """
        Build a configuration from a mapping, filling in defaults.

        Raises:
            ConfigurationError: If the mapping has unknown keys or bad values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}"
            )

        values = dict(data)
        base_dir = values.pop("base_dir", None)
        values["base_dir"] = (
            Path(base_dir).expanduser() if base_dir else get_default_base_dir()
        )

        tags = values.get("initial_tags")
        if tags is not None:
            if not isinstance(tags, list) or not tags:
                raise ConfigurationError("initial_tags must be a non-empty list")
            values["initial_tags"] = [str(tag) for tag in tags]

        timeout = values.get("timeout")
        if timeout is not None:
            if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout <= 0:
                raise ConfigurationError("timeout must be a positive integer")

        return cls(**values)


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, or is not
            a YAML mapping.
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration in {config_file} must be a mapping")
    return config


def load_config(
    config_file: Optional[Path] = None, base_dir: Optional[Path] = None
) -> GrootConfig:
    """
    Resolve the effective configuration.

    Args:
        config_file: Explicit configuration file (must exist). When None,
            ~/.groot.yaml is used if present.
        base_dir: Override for the workspace root.
    """
    if config_file is not None:
        data = load_yaml_config(Path(config_file), required=True)
    else:
        data = load_yaml_config(get_default_config_file())

    config = GrootConfig.from_dict(data)
    if base_dir is not None:
        config.base_dir = Path(base_dir).expanduser()

    config.base_dir = config.base_dir.absolute()
    logger.debug(f"Using base directory: {config.base_dir}")
    return config
