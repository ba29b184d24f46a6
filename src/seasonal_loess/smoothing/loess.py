"""トライキューブ重み付き局所回帰（LOESS）の基本演算。

位置はすべて0始まりのインデックスで扱う。窓 ``[left, right]`` は両端を含む。
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def local_fit(
    y: np.ndarray,
    length: int,
    degree: int,
    xs: float,
    left: int,
    right: int,
    weights: Optional[np.ndarray] = None,
) -> Optional[float]:
    """位置 ``xs`` における局所多項式（0次または1次）の当てはめ値を返す。

    Args:
        y: 入力系列。
        length: 平滑化窓の長さ。系列長を超える場合は半幅を広げる。
        degree: 局所多項式の次数（0または1）。
        xs: 評価位置（窓の外でもよい）。
        left: 窓の左端インデックス。
        right: 窓の右端インデックス。
        weights: ロバスト重み（オプション）。

    Returns:
        当てはめ値。窓内の重みの合計が0以下の場合はNone。
    """
    n = len(y)
    h = max(xs - left, right - xs)
    if length > n:
        h += (length - n) // 2

    positions = np.arange(left, right + 1, dtype=float)
    r = np.abs(positions - xs)

    w = np.zeros(len(positions))
    near = r <= 0.001 * h
    mid = ~near & (r <= 0.999 * h)
    w[near] = 1.0
    w[mid] = (1.0 - (r[mid] / h) ** 3) ** 3
    if weights is not None:
        w *= weights[left:right + 1]

    total = w.sum()
    if total <= 0.0:
        return None
    w /= total

    if h > 0.0 and degree > 0:
        center = np.dot(w, positions)
        spread = np.dot(w, (positions - center) ** 2)
        # 点が十分に散らばっている場合のみ傾きを推定する
        if np.sqrt(spread) > 0.001 * (n - 1):
            slope = (xs - center) / spread
            w *= slope * (positions - center) + 1.0

    return float(np.dot(w, y[left:right + 1]))


def loess_smooth(
    y: np.ndarray,
    length: int,
    degree: int,
    jump: int,
    weights: Optional[np.ndarray] = None,
) -> np.ndarray:
    """系列全体をLOESSで平滑化する。

    ``jump`` おきの位置だけで局所回帰を評価し、その間は線形補間する。
    局所回帰が失敗した位置では入力値をそのまま使う。

    Args:
        y: 入力系列。
        length: 平滑化窓の長さ。
        degree: 局所多項式の次数（0または1）。
        jump: 評価位置の間隔（系列長-1を上限に切り詰める）。
        weights: ロバスト重み（オプション）。

    Returns:
        入力と同じ長さの平滑化済み配列。
    """
    n = len(y)
    smoothed = np.empty(n)
    if n < 2:
        smoothed[0] = y[0]
        return smoothed

    def fit_at(i: int, left: int, right: int) -> None:
        value = local_fit(y, length, degree, float(i), left, right, weights)
        smoothed[i] = y[i] if value is None else value

    jump = min(jump, n - 1)
    left = right = 0

    if length >= n:
        left, right = 0, n - 1
        for i in range(0, n, jump):
            fit_at(i, left, right)
    elif jump == 1:
        half = (length + 1) // 2
        left, right = 0, length - 1
        for i in range(n):
            if i + 1 > half and right != n - 1:
                left += 1
                right += 1
            fit_at(i, left, right)
    else:
        half = (length + 1) // 2
        for i in range(0, n, jump):
            if i + 1 < half:
                left, right = 0, length - 1
            elif i + 1 >= n - half + 1:
                left, right = n - length, n - 1
            else:
                left = i + 1 - half
                right = i + length - half
            fit_at(i, left, right)

    if jump != 1:
        for i in range(0, n - jump, jump):
            delta = (smoothed[i + jump] - smoothed[i]) / jump
            smoothed[i + 1:i + jump] = smoothed[i] + delta * np.arange(1, jump)

        # 最後の端数区間は末尾を直接評価して補間する
        last = ((n - 1) // jump) * jump
        if last != n - 1:
            fit_at(n - 1, left, right)
            if last != n - 2:
                delta = (smoothed[n - 1] - smoothed[last]) / (n - 1 - last)
                smoothed[last + 1:n - 1] = smoothed[last] + delta * np.arange(1, n - 1 - last)

    return smoothed
