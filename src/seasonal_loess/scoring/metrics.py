"""分解成分の強度メトリクス。"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np


def sample_variance(values: np.ndarray) -> float:
    """不偏標本分散 ``Σ(x - mean)² / (count - 1)`` を計算します。"""
    values = np.asarray(values, dtype=np.float64)
    mean = values.sum() / len(values)
    return float(np.sum((values - mean) ** 2) / (len(values) - 1))


def strength(component: np.ndarray, remainder: np.ndarray) -> float:
    """成分が系列の変動をどれだけ説明するかを0-1の範囲で返します。

    ``max(0, 1 - Var(remainder) / Var(component + remainder))``

    Args:
        component: 季節成分またはトレンド成分
        remainder: 残差成分

    Returns:
        成分の強度。成分+残差の分散が0の場合は0.0
    """
    remainder = np.asarray(remainder, dtype=np.float64)
    total = sample_variance(np.asarray(component, dtype=np.float64) + remainder)
    if total == 0.0:
        return 0.0
    return max(0.0, 1.0 - sample_variance(remainder) / total)


def strength_summary(result: Any) -> Dict[str, Any]:
    """分解結果の強度をフラットな辞書に集約します。

    Args:
        result: StlResultまたはMstlResult

    Returns:
        ``seasonal_strength_<周期>`` と ``trend_strength`` を含む辞書。
        同じ周期が重複する場合は2つ目以降のキーに ``_<位置>`` を付ける
    """
    summary: Dict[str, Any] = {}

    if hasattr(result, "periods"):
        for i, (period, value) in enumerate(zip(result.periods, result.seasonal_strength())):
            key = f"seasonal_strength_{period}"
            if key in summary:
                key = f"{key}_{i}"
            summary[key] = value
    else:
        summary[f"seasonal_strength_{result.period}"] = result.seasonal_strength()

    summary["trend_strength"] = result.trend_strength()

    return summary
