"""
Log setup for the Bundle Wizard API.

Everything under the ``bundle_wizard`` logger goes to stdout at the level
named by LOG_LEVEL (INFO when unset or unrecognised). Wizard confirmations
and catalog edits log at INFO; rejected wizard transitions only show at
DEBUG, which also lets SQL and access-log chatter through.

    from bundle_wizard.logging_config import setup_logging
    setup_logging()  # once, when the app module loads
"""
import logging
import os
import sys

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Silenced to WARNING unless running at DEBUG
QUIET_LOGGERS = ("httpx", "uvicorn.access", "sqlalchemy.engine")


def resolve_level(level: str = None) -> str:
    """Normalise a level name, falling back to LOG_LEVEL and then INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()
    return level if level in VALID_LEVELS else "INFO"


def setup_logging(level: str = None) -> None:
    level = resolve_level(level)
    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger("bundle_wizard").setLevel(numeric_level)

    if level != "DEBUG":
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
