"""MSTL（複数の季節周期を持つ系列のSTL分解）。

周期を昇順に1つずつSTLで取り除くことを ``iterations`` 回繰り返す。
途中の成分はすべてfloat64で保持し、最後に入力のdtypeへ戻す。
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np
from loguru import logger

from seasonal_loess.config import MstlParams, StlParams
from seasonal_loess.decomposition.base import BaseDecomposer, MstlResult
from seasonal_loess.decomposition.stl import resolve_parameters, run_stl, validate_parameters
from seasonal_loess.preprocessing.transform import box_cox
from seasonal_loess.utils.profiling import time_it


class MSTLDecomposer(BaseDecomposer):
    """複数周期のMSTL分解器。"""

    method_name = "mstl"

    def __init__(self, params: Optional[MstlParams] = None):
        """MSTL分解器を初期化する。

        Args:
            params: MSTLパラメータ。Noneの場合は既定値。
        """
        self.params = params or MstlParams()

    def _validate_periods(self, n: int, periods: Sequence[int]) -> None:
        """周期と変換パラメータを検証する。"""
        if len(periods) == 0:
            raise ValueError("periods must not be empty")

        for period in periods:
            if period < 2:
                raise ValueError("periods must be at least 2")
            if n < 2 * period:
                raise ValueError("series has less than two periods")

        lmbda = self.params.lambda_
        if lmbda is not None and (lmbda < 0.0 or lmbda > 1.0):
            raise ValueError("lambda must be between 0 and 1")

        lengths = self.params.seasonal_lengths
        if lengths is not None and len(lengths) != len(periods):
            raise ValueError("seasonal_lengths must have the same length as periods")

        if len(periods) > 1 and self.params.iterations < 1:
            raise ValueError("iterations must be at least 1")

    def _stl_params_for(self, idx: int, rank: int) -> StlParams:
        """周期ごとに使うSTLパラメータを選ぶ。

        Args:
            idx: 呼び出し側の順序での周期の位置。
            rank: 昇順に並べたときの周期の位置。
        """
        stl_params = self.params.stl
        if self.params.seasonal_lengths is not None:
            return stl_params.model_copy(update={"seasonal_length": self.params.seasonal_lengths[idx]})
        if stl_params.seasonal_length is not None:
            return stl_params
        return stl_params.model_copy(update={"seasonal_length": 7 + 4 * (rank + 1)})

    @time_it(name="MSTL")
    def fit(self, series: Any, periods: Sequence[int]) -> MstlResult:
        """系列を複数の季節成分・トレンド・残差に分解する。

        Args:
            series: 入力系列（リスト、numpy配列、pandas Series）。
            periods: 季節周期のリスト。

        Returns:
            呼び出し側の周期順に季節成分を並べたMstlResult。
        """
        y, dtype, index = self._validate_series(series)
        periods = list(periods)
        self._validate_periods(len(y), periods)

        order = sorted(range(len(periods)), key=lambda i: periods[i])
        iterations = 1 if len(periods) == 1 else self.params.iterations

        resolved = [
            resolve_parameters(len(y), periods[idx], self._stl_params_for(idx, rank))
            for rank, idx in enumerate(order)
        ]
        for p in resolved:
            validate_parameters(p)

        if self.params.lambda_ is not None:
            deseasonalized = box_cox(y, self.params.lambda_)
        else:
            deseasonalized = y.copy()

        seasonality: List[Optional[np.ndarray]] = [None] * len(periods)
        trend = np.zeros(len(y))

        for iteration in range(iterations):
            for rank, idx in enumerate(order):
                if iteration > 0:
                    deseasonalized = deseasonalized + seasonality[idx]

                seasonal, trend, _ = run_stl(deseasonalized, resolved[rank])

                seasonality[idx] = seasonal
                deseasonalized = deseasonalized - seasonal

            logger.debug(f"MSTL反復 {iteration + 1}/{iterations} 完了（周期: {periods}）")

        remainder = deseasonalized - trend

        return MstlResult(
            seasonal=[s.astype(dtype) for s in seasonality],
            trend=trend.astype(dtype),
            remainder=remainder.astype(dtype),
            periods=periods,
            index=index,
        )


def decompose_multi(
    series: Any,
    periods: Sequence[int],
    params: Optional[MstlParams] = None,
) -> MstlResult:
    """MSTL分解のショートカット。"""
    return MSTLDecomposer(params).fit(series, periods)
