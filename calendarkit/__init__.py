"""calendarkit - event materialization core for calendar front ends.

Recurrence expansion, per-day occurrence lookup, timezone conversion,
JSON/CSV/ICS import and export, and reminder scheduling. The package keeps
imports light; submodules pull in pydantic, dateutil and icalendar.
"""

__version__ = "0.1.0"

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config_loader import Config


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Installs a colorized console handler when the root logger has none and
    sets the root level. CALENDARKIT_DEBUG (truthy values: "1", "true",
    "yes", "on") forces DEBUG verbosity.
    """
    import logging
    import os
    import sys

    from colorlog import ColoredFormatter

    debug_env = os.environ.get("CALENDARKIT_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    # Only configure basic handler if no handlers are present to avoid duplicate output.
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        # HH:MM:SS  LEVEL   logger.name: message
        fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors))
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


def setup(config_path: Optional[str] = None) -> "Config":
    """Load configuration and initialize logging from it.

    Returns:
        The loaded Config
    """
    from .config_loader import load_config
    from .logging_config import configure_logging

    cfg = load_config(config_path)
    _init_logging(cfg.log_level)
    configure_logging(debug_mode=cfg.log_level == "DEBUG", level_name=cfg.log_level)
    return cfg
