"""
Central logging configuration for calendarkit.

Keeps calendarkit module loggers at INFO (or DEBUG when requested) and quiets
third-party libraries used for parsing and date handling.
"""

import logging
import os

CALENDARKIT_MODULES = [
    "calendarkit",
    "calendarkit.calendar.recurrence",
    "calendarkit.calendar.occurrence_index",
    "calendarkit.codec",
    "calendarkit.core.timezone_utils",
    "calendarkit.domain.notifications",
    "calendarkit.domain.event_store",
]

THIRD_PARTY_LEVELS: dict[str, int] = {
    "asyncio": logging.WARNING,  # Event loop debug logs
    "icalendar": logging.INFO,  # Keep some ICS parsing info
}


def configure_logging(
    debug_mode: bool = False,
    force_debug: bool | None = None,
    level_name: str | None = None,
) -> None:
    """
    Configure logging levels for calendarkit.

    Args:
        debug_mode: Whether to enable debug logging for calendarkit modules
        force_debug: Override debug mode setting (None to use env var detection)
        level_name: Configured root level name, used unless debug or the env overrides it

    Environment Variables:
        CALENDARKIT_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        CALENDARKIT_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("CALENDARKIT_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("CALENDARKIT_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if not final_debug and level_name:
        configured = getattr(logging, level_name.upper(), None)
        if isinstance(configured, int):
            root_level = configured
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    logger_config = dict(THIRD_PARTY_LEVELS)
    module_level = logging.DEBUG if final_debug else logging.INFO
    for module in CALENDARKIT_MODULES:
        logger_config[module] = module_level

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.info("Debug logging enabled for calendarkit modules")
    else:
        root_logger.debug("Production logging configuration applied")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in ["calendarkit", *THIRD_PARTY_LEVELS]:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
