"""STL（Loessを使用した季節-トレンド分解）。

Cleveland, R. B., Cleveland, W. S., McRae, J. E., & Terpenning, I. (1990).
STL: A Seasonal-Trend Decomposition Procedure Based on Loess.
Journal of Official Statistics, 6(1), 3-33.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
from loguru import logger

from seasonal_loess.config import StlParams
from seasonal_loess.decomposition.base import BaseDecomposer, StlResult
from seasonal_loess.smoothing.filters import low_pass_filter
from seasonal_loess.smoothing.loess import local_fit, loess_smooth
from seasonal_loess.smoothing.robust import robustness_weights
from seasonal_loess.utils.profiling import time_it


@dataclass(frozen=True)
class ResolvedParameters:
    """既定値を適用した後のSTLパラメータ。"""

    period: int
    seasonal_length: int
    trend_length: int
    low_pass_length: int
    seasonal_degree: int
    trend_degree: int
    low_pass_degree: int
    seasonal_jump: int
    trend_jump: int
    low_pass_jump: int
    inner_loops: int
    outer_loops: int


def _force_odd(value: int) -> int:
    return value + 1 if value % 2 == 0 else value


def resolve_parameters(n: int, period: int, params: Optional[StlParams] = None) -> ResolvedParameters:
    """周期と系列長から未指定のパラメータを導出する。

    Args:
        n: 系列長。
        period: 季節周期。
        params: ユーザー指定のパラメータ。

    Returns:
        すべての値が埋まったResolvedParameters。

    Raises:
        ValueError: 周期が2未満、または系列が2周期分に満たない場合。
    """
    params = params or StlParams()

    if period < 2:
        raise ValueError("period must be at least 2")
    if n < 2 * period:
        raise ValueError("series has less than two periods")

    seasonal_length = params.seasonal_length if params.seasonal_length is not None else period
    seasonal_length = _force_odd(max(seasonal_length, 3))

    if params.trend_length is not None:
        trend_length = params.trend_length
    else:
        trend_length = math.ceil((1.5 * period) / (1.0 - 1.5 / seasonal_length))
    trend_length = _force_odd(max(trend_length, 3))

    # 明示的に指定された偶数のlow_pass_lengthは補正せず検証で弾く
    if params.low_pass_length is not None:
        low_pass_length = params.low_pass_length
    else:
        low_pass_length = _force_odd(period)

    low_pass_degree = params.low_pass_degree if params.low_pass_degree is not None else params.trend_degree

    def default_jump(jump: Optional[int], length: int) -> int:
        return jump if jump is not None else math.ceil(length / 10.0)

    if params.inner_loops is not None:
        inner_loops = params.inner_loops
    else:
        inner_loops = 1 if params.robust else 2

    if params.outer_loops is not None:
        outer_loops = params.outer_loops
    else:
        outer_loops = 15 if params.robust else 0

    return ResolvedParameters(
        period=period,
        seasonal_length=seasonal_length,
        trend_length=trend_length,
        low_pass_length=low_pass_length,
        seasonal_degree=params.seasonal_degree,
        trend_degree=params.trend_degree,
        low_pass_degree=low_pass_degree,
        seasonal_jump=default_jump(params.seasonal_jump, seasonal_length),
        trend_jump=default_jump(params.trend_jump, trend_length),
        low_pass_jump=default_jump(params.low_pass_jump, low_pass_length),
        inner_loops=inner_loops,
        outer_loops=outer_loops,
    )


def validate_parameters(p: ResolvedParameters) -> None:
    """解決済みパラメータを検証する。"""
    if p.seasonal_length < 3:
        raise ValueError("seasonal_length must be at least 3")
    if p.trend_length < 3:
        raise ValueError("trend_length must be at least 3")
    if p.low_pass_length < 3:
        raise ValueError("low_pass_length must be at least 3")
    if p.period < 2:
        raise ValueError("period must be at least 2")

    if p.seasonal_degree not in (0, 1):
        raise ValueError("seasonal_degree must be 0 or 1")
    if p.trend_degree not in (0, 1):
        raise ValueError("trend_degree must be 0 or 1")
    if p.low_pass_degree not in (0, 1):
        raise ValueError("low_pass_degree must be 0 or 1")

    if p.seasonal_length % 2 != 1:
        raise ValueError("seasonal_length must be odd")
    if p.trend_length % 2 != 1:
        raise ValueError("trend_length must be odd")
    if p.low_pass_length % 2 != 1:
        raise ValueError("low_pass_length must be odd")

    if p.seasonal_jump < 1:
        raise ValueError("seasonal_jump must be at least 1")
    if p.trend_jump < 1:
        raise ValueError("trend_jump must be at least 1")
    if p.low_pass_jump < 1:
        raise ValueError("low_pass_jump must be at least 1")

    if p.inner_loops < 1:
        raise ValueError("inner_loops must be at least 1")
    if p.outer_loops < 0:
        raise ValueError("outer_loops must not be negative")


def cyclic_subseries_smooth(
    y: np.ndarray,
    period: int,
    length: int,
    degree: int,
    jump: int,
    weights: Optional[np.ndarray] = None,
) -> np.ndarray:
    """同じ位相のサブシリーズごとに平滑化し、前後1周期ずつ延長する。

    Args:
        y: トレンド除去済みの系列。
        period: 季節周期。
        length: 季節スムーザーの窓長。
        degree: 局所多項式の次数。
        jump: 評価間隔。
        weights: ロバスト重み（オプション）。

    Returns:
        長さ ``len(y) + 2 * period`` の季節成分。
    """
    season = np.empty(len(y) + 2 * period)

    for phase in range(period):
        subseries = y[phase::period]
        sub_weights = weights[phase::period] if weights is not None else None
        k = len(subseries)

        smoothed = np.empty(k + 2)
        smoothed[1:k + 1] = loess_smooth(subseries, length, degree, jump, sub_weights)

        before = local_fit(subseries, length, degree, -1.0, 0, min(length, k) - 1, sub_weights)
        smoothed[0] = smoothed[1] if before is None else before

        after = local_fit(subseries, length, degree, float(k), max(0, k - length), k - 1, sub_weights)
        smoothed[k + 1] = smoothed[k] if after is None else after

        season[phase::period] = smoothed

    return season


def inner_loop(
    y: np.ndarray,
    trend: np.ndarray,
    p: ResolvedParameters,
    weights: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """内側ループを ``inner_loops`` 回実行する。

    Returns:
        (季節成分, トレンド成分) のタプル。
    """
    n = len(y)
    seasonal = np.zeros(n)

    for _ in range(p.inner_loops):
        cycle = cyclic_subseries_smooth(
            y - trend, p.period, p.seasonal_length, p.seasonal_degree, p.seasonal_jump, weights
        )
        low_pass = loess_smooth(
            low_pass_filter(cycle, p.period), p.low_pass_length, p.low_pass_degree, p.low_pass_jump
        )
        seasonal = cycle[p.period:p.period + n] - low_pass
        trend = loess_smooth(y - seasonal, p.trend_length, p.trend_degree, p.trend_jump, weights)

    return seasonal, trend


def run_stl(y: np.ndarray, p: ResolvedParameters) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """外側ループを回してSTL分解を実行する。

    Args:
        y: 入力系列（float64）。
        p: 解決済みパラメータ。

    Returns:
        (季節成分, トレンド成分, ロバスト重み) のタプル。
    """
    validate_parameters(p)

    trend = np.zeros(len(y))
    weights: Optional[np.ndarray] = None

    passes = 0
    while True:
        seasonal, trend = inner_loop(y, trend, p, weights)
        passes += 1
        if passes > p.outer_loops:
            break
        weights = robustness_weights(y, trend + seasonal)
        logger.debug(f"外側ループ {passes}/{p.outer_loops}: 重みの最小値 {weights.min():.4f}")

    if p.outer_loops <= 0 or weights is None:
        weights = np.ones(len(y))

    return seasonal, trend, weights


class STLDecomposer(BaseDecomposer):
    """単一周期のSTL分解器。"""

    method_name = "stl"

    def __init__(self, params: Optional[StlParams] = None):
        """STL分解器を初期化する。

        Args:
            params: STLパラメータ。Noneの場合は既定値。
        """
        self.params = params or StlParams()

    @time_it(name="STL")
    def fit(self, series: Any, period: int) -> StlResult:
        """系列を季節・トレンド・残差に分解する。

        Args:
            series: 入力系列（リスト、numpy配列、pandas Series）。
            period: 季節周期。

        Returns:
            StlResult。
        """
        y, dtype, index = self._validate_series(series)
        p = resolve_parameters(len(y), period, self.params)
        logger.debug(f"STLパラメータ: {p}")

        seasonal, trend, weights = run_stl(y, p)
        remainder = y - seasonal - trend

        return StlResult(
            seasonal=seasonal.astype(dtype),
            trend=trend.astype(dtype),
            remainder=remainder.astype(dtype),
            weights=weights.astype(dtype),
            period=period,
            index=index,
        )


def decompose(series: Any, period: int, params: Optional[StlParams] = None) -> StlResult:
    """STL分解のショートカット。"""
    return STLDecomposer(params).fit(series, period)
