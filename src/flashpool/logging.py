"""
The package logger. Records are written to stderr by its own handler and are not passed on to the
root logger. The level is set from the `logging.level` setting when `flashpool.config` is imported.
"""

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("flashpool")
logger.propagate = False
logger.setLevel(logging.INFO)

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(LOG_FORMAT))
logger.addHandler(_handler)
