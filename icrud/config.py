"""Environment-driven configuration.

Set ``ICRUD_DEBUG=1`` to route icrud's step-by-step driver logging to the
application's loguru sinks:

    export ICRUD_DEBUG=1
"""

from __future__ import annotations

import os

from loguru import logger

DEBUG_ENV_VAR = "ICRUD_DEBUG"


def is_debug_enabled() -> bool:
    """Check whether driver logging was requested through the environment."""
    return os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes")


def configure_logging() -> bool:
    """Enable or disable the ``icrud`` loguru namespace from the environment.

    Returns whether logging ended up enabled.
    """
    if is_debug_enabled():
        logger.enable("icrud")
        return True
    logger.disable("icrud")
    return False


__all__ = ["DEBUG_ENV_VAR", "configure_logging", "is_debug_enabled"]
