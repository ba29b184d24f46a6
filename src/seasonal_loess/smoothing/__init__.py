"""LOESS平滑化の基本演算モジュール"""

from seasonal_loess.smoothing.loess import local_fit, loess_smooth
from seasonal_loess.smoothing.filters import moving_average, low_pass_filter
from seasonal_loess.smoothing.robust import robustness_weights

__all__ = [
    "local_fit",
    "loess_smooth",
    "moving_average",
    "low_pass_filter",
    "robustness_weights",
]
