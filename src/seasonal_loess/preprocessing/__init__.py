"""Seasonal LOESSの前処理モジュール"""

from seasonal_loess.preprocessing.transform import (
    BOX_COX_EPSILON,
    box_cox,
    inv_box_cox,
)

__all__ = [
    "BOX_COX_EPSILON",
    "box_cox",
    "inv_box_cox",
]
