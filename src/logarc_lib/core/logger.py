# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return a logger writing colored records to stderr.

    The logger emits debug records only if logarc debug mode is enabled.
    Time is shown if `show_time` is set or in debug mode.
    """
    logger = logging.getLogger(name)

    debug_mode = os.environ.get(CFG.env_vars.debug_mode) is not None
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)

    # avoid duplicated output when a module is imported repeatedly
    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
            show_level=True,
            show_time=show_time or debug_mode,
            log_time_format=CFG.date_formats.standard,
            tracebacks_width=None,
            tracebacks_code_width=None,
        )
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.propagate = False

    return logger
