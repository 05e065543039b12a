"""Logging setup shared by the API process and command line tools."""

from __future__ import annotations

import logging
import sys

_HANDLER_ATTR = "_game_media"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Attach a single stream handler to the root logger.

    Safe to call more than once; Alembic's ``fileConfig()`` may drop the
    handler, in which case it is added again.
    """
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    for handler in root.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)
