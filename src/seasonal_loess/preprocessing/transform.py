"""分解前に適用するべき変換（Box-Cox型）"""

from __future__ import annotations

import numpy as np

# λをゼロとみなす許容誤差
BOX_COX_EPSILON = 1e-4


def box_cox(values: np.ndarray, lmbda: float) -> np.ndarray:
    """Box-Cox型のべき変換を適用

    λがほぼ0なら自然対数、それ以外は ``(x^λ - 1) / λ`` を返す。

    Args:
        values: 入力系列
        lmbda: 変換パラメータ

    Returns:
        変換後の新しい配列
    """
    values = np.asarray(values, dtype=np.float64)

    if abs(lmbda) < BOX_COX_EPSILON:
        if np.any(values <= 0):
            raise ValueError("power transform requires positive values")
        return np.log(values)

    if np.any(values < 0):
        raise ValueError("power transform requires positive values")
    return (np.power(values, lmbda) - 1.0) / lmbda


def inv_box_cox(values: np.ndarray, lmbda: float) -> np.ndarray:
    """Box-Cox型変換を元のスケールに戻す

    Args:
        values: 変換後の系列
        lmbda: 変換に使ったパラメータ

    Returns:
        元のスケールの新しい配列
    """
    values = np.asarray(values, dtype=np.float64)

    if abs(lmbda) < BOX_COX_EPSILON:
        return np.exp(values)
    return np.power(lmbda * values + 1.0, 1.0 / lmbda)
