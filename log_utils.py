# -*- coding: utf-8 -*-
"""
Logger setup for the dashboard.
- init_logger(name, level)
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def init_logger(name=None, level="INFO"):
    # name=None configures the root logger so module loggers propagate to it
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not logger.handlers:
        sh = logging.StreamHandler(sys.stdout)
        sh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(sh)
    return logger
