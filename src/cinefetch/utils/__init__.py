"""
Utility functions for cinefetch.
"""

from cinefetch.utils.logging import log_timed

__all__ = [
    "log_timed",
]
