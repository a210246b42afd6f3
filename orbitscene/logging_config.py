"""
Logging setup shared by the Streamlit app and the scripts.

Modules log through ``logging.getLogger(__name__)``; entry points call
``configure_logging`` once.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: logging level, e.g. logging.DEBUG
        log_file: optional path; when given, records also go to this file
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    # force=True so Streamlit reruns don't stack handlers or keep a stale level
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
