"""
Shared utilities for CLI commands.
"""

import logging

from groot.core.config import load_config
from groot.toolchain.manager import GrootManager

logger = logging.getLogger(__name__)


def get_manager(args) -> GrootManager:
    """
    Build a GrootManager from the global --config and --base-dir options.

    Raises:
        ConfigurationError: If the configuration cannot be loaded
    """
    config = load_config(
        config_file=getattr(args, "config", None),
        base_dir=getattr(args, "base_dir", None),
    )
    return GrootManager(config)
