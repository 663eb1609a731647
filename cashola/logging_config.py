from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from cashola.config import load_config


def configure_logging(config_path: Optional[Path] = None) -> logging.Logger:
    """Configure root logging for the cashola command line tools.

    The level is taken from `log_level` in the YAML config (default
    `cashola.yml`) and falls back to WARNING when the file is missing,
    unreadable or names an unknown level. Returns a module logger.
    """
    default_level = logging.WARNING
    try:
        lvl = load_config(config_path).log_level
        if lvl:
            numeric = getattr(logging, lvl.upper(), None)
            if isinstance(numeric, int):
                default_level = numeric
    except Exception:
        # If config parse fails, fall back to default level
        default_level = logging.WARNING

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=default_level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)
    logger.debug('Log level set to: %s', logging.getLevelName(default_level))
    return logger
