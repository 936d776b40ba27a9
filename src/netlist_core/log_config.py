# --- src/netlist_core/log_config.py ---
import logging
import os
import sys
from typing import Optional, Union

#: Environment variable consulted when no explicit level is passed.
LOG_LEVEL_ENV_VAR = "NETLIST_CORE_LOG_LEVEL"


def resolve_log_level(level: Optional[Union[int, str]] = None) -> int:
    """
    Resolves a logging level from an int, a level name ('debug', 'INFO'), or
    the NETLIST_CORE_LOG_LEVEL environment variable. Falls back to INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, logging.INFO)
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if isinstance(resolved, int):
        return resolved
    raise ValueError(f"Unknown logging level '{level}'.")


def setup_logging(level: Optional[Union[int, str]] = None):
    """ Configures basic logging to stdout. """
    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    root_logger = logging.getLogger() # Get the root logger

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(resolve_log_level(level))
    root_logger.addHandler(console_handler)
    logging.debug("Logging configured.")
