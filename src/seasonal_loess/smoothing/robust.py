"""残差からのバイスクエア・ロバスト重み。"""

from __future__ import annotations

import numpy as np


def robustness_weights(y: np.ndarray, fit: np.ndarray) -> np.ndarray:
    """残差 ``|y - fit|`` からバイスクエア重みを計算する。

    尺度には絶対残差の中央値の6倍を使う。系列長が偶数のときは
    中央の2つの順序統計量の和の3倍になる。

    Args:
        y: 観測系列。
        fit: 当てはめ値（トレンド + 季節成分）。

    Returns:
        各点の重み（0以上1以下）。
    """
    residuals = np.abs(y - fit)
    n = len(residuals)

    ordered = np.sort(residuals)
    cmad = 3.0 * (ordered[(n - 1) // 2] + ordered[n // 2])

    weights = np.zeros(n)
    near = residuals <= 0.001 * cmad
    mid = ~near & (residuals <= 0.999 * cmad)
    weights[near] = 1.0
    weights[mid] = (1.0 - (residuals[mid] / cmad) ** 2) ** 2

    return weights
