"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_NAME = "postboard"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Attach a single stream handler to the root logger and set its level.

    Calling this more than once only updates the level.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


__all__ = ["LOG_FORMAT", "configure_logging"]
