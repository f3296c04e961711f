"""Loading of the optional daemon config file.

Expected format (every key optional):
{
    "poll_interval": 2,
    "stability_threshold": 2,
    "topic_aliases": {"invoice": "billing"},
    "topic_stop_words": ["acme"]
}
"""

from __future__ import annotations

import json
import logging
import os

from pydantic import ValidationError

from .constants import CONFIG_ENV_VAR, CONFIG_PATH
from .schemas import DaemonConfig

logger = logging.getLogger(__name__)


def resolve_config_path(path: str | None = None) -> str:
    """Explicit path, then ``$TMUX_AI_STATUS_CONFIG``, then the default."""
    return path or os.environ.get(CONFIG_ENV_VAR) or CONFIG_PATH


def load_config(path: str | None = None) -> DaemonConfig:
    """Load and validate the config; any problem falls back to defaults."""
    config_path = resolve_config_path(path)
    if not os.path.exists(config_path):
        return DaemonConfig()
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return DaemonConfig()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_path)
        return DaemonConfig()
    try:
        return DaemonConfig.model_validate(data)
    except ValidationError as e:
        logger.warning("Ignoring invalid config %s: %s", config_path, e)
        return DaemonConfig()
