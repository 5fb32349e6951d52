"""Logging configuration shared by the API server and the batch pipeline."""

import os
import logging
from datetime import datetime
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> Optional[str]:
    """
    Configure root logging to the console and, when log_dir is given, a file.

    Returns the log file path, or None for console-only logging.
    """
    handlers = [logging.StreamHandler()]
    log_path = None

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = os.path.join(log_dir, f"scrape_{timestamp}.log")
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    return log_path
