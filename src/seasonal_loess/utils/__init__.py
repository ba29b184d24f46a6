"""Utility modules for Seasonal LOESS."""

from seasonal_loess.utils.logging import setup_logger, shutdown_logger
from seasonal_loess.utils.profiling import StepTimer, time_it

__all__ = [
    "setup_logger",
    "shutdown_logger",
    "StepTimer",
    "time_it",
]
