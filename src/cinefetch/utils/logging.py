"""
Logging utilities.
"""

import logging
import time

logger = logging.getLogger("cinefetch")


def log_timed(msg: str, start_time: float | None = None, level: int = logging.INFO) -> None:
    """Log a message prefixed with elapsed seconds since start_time.

    Args:
        msg: Message to log
        start_time: Start time from time.time(), or None for [START]
        level: Logging level (default INFO)
    """
    elapsed = f"[{time.time() - start_time:.1f}s]" if start_time else "[START]"
    logger.log(level, f"{elapsed} {msg}")
