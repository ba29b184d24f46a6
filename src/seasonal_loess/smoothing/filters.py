"""移動平均とローパスフィルタ。"""

from __future__ import annotations

import numpy as np


def moving_average(x: np.ndarray, window: int) -> np.ndarray:
    """長さ ``window`` の移動平均を計算する。

    最初の窓の合計を求め、以降は1つ落として1つ足すことで更新する。

    Args:
        x: 入力系列。
        window: 窓の長さ。

    Returns:
        長さ ``len(x) - window + 1`` の配列。
    """
    count = len(x) - window + 1
    averages = np.empty(count)

    total = float(np.sum(x[:window]))
    averages[0] = total / window
    for j in range(1, count):
        total = total - x[j - 1] + x[j + window - 1]
        averages[j] = total / window

    return averages


def low_pass_filter(x: np.ndarray, period: int) -> np.ndarray:
    """周期長・周期長・3の移動平均を順に適用する。

    出力は入力より ``2 * period`` 短くなる。
    """
    return moving_average(moving_average(moving_average(x, period), period), 3)
