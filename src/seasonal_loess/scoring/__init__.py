"""Seasonal LOESSのスコアリングモジュール"""

from seasonal_loess.scoring.metrics import (
    sample_variance,
    strength,
    strength_summary,
)

__all__ = [
    "sample_variance",
    "strength",
    "strength_summary",
]
