"""季節-トレンド分解のための基底クラスと結果型。"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from seasonal_loess.scoring.metrics import strength


@dataclass
class StlResult:
    """単一周期STL分解の結果。"""

    seasonal: np.ndarray
    trend: np.ndarray
    remainder: np.ndarray
    weights: np.ndarray
    period: int
    index: Optional[pd.Index] = None

    def seasonal_strength(self) -> float:
        """季節成分の強度を計算する。"""
        return strength(self.seasonal, self.remainder)

    def trend_strength(self) -> float:
        """トレンド成分の強度を計算する。"""
        return strength(self.trend, self.remainder)

    def to_frame(self) -> pd.DataFrame:
        """成分をDataFrameに変換する。"""
        return pd.DataFrame(
            {
                "seasonal": self.seasonal,
                "trend": self.trend,
                "remainder": self.remainder,
                "weights": self.weights,
            },
            index=self.index,
        )

    def to_dict(self) -> Dict[str, Any]:
        """辞書に変換する。"""
        return {
            "period": self.period,
            "seasonal": self.seasonal.tolist(),
            "trend": self.trend.tolist(),
            "remainder": self.remainder.tolist(),
            "weights": self.weights.tolist(),
        }


@dataclass
class MstlResult:
    """複数周期MSTL分解の結果。

    ``seasonal`` と ``periods`` は呼び出し側が指定した順序に並ぶ。
    """

    seasonal: List[np.ndarray]
    trend: np.ndarray
    remainder: np.ndarray
    periods: List[int] = field(default_factory=list)
    index: Optional[pd.Index] = None

    def seasonal_strength(self) -> List[float]:
        """各周期の季節成分の強度を計算する。"""
        return [strength(s, self.remainder) for s in self.seasonal]

    def trend_strength(self) -> float:
        """トレンド成分の強度を計算する。"""
        return strength(self.trend, self.remainder)

    def to_frame(self) -> pd.DataFrame:
        """成分をDataFrameに変換する。"""
        columns: Dict[str, np.ndarray] = {}
        for i, (period, seasonal) in enumerate(zip(self.periods, self.seasonal)):
            name = f"seasonal_{period}"
            if name in columns:
                name = f"{name}_{i}"
            columns[name] = seasonal
        columns["trend"] = self.trend
        columns["remainder"] = self.remainder
        return pd.DataFrame(columns, index=self.index)

    def to_dict(self) -> Dict[str, Any]:
        """辞書に変換する。"""
        return {
            "periods": list(self.periods),
            "seasonal": [s.tolist() for s in self.seasonal],
            "trend": self.trend.tolist(),
            "remainder": self.remainder.tolist(),
        }


class BaseDecomposer(ABC):
    """分解器の抽象基底クラス。"""

    method_name: str = "base"

    @abstractmethod
    def fit(self, series: Any, *args: Any) -> Any:
        """時系列データを分解する。"""
        pass

    def _validate_series(self, series: Any) -> Tuple[np.ndarray, np.dtype, Optional[pd.Index]]:
        """入力系列を検証し、float64配列・出力dtype・インデックスを返す。"""
        index = series.index if isinstance(series, pd.Series) else None

        values = np.asarray(series)
        if values.ndim != 1:
            raise ValueError("series must be one-dimensional")

        dtype = values.dtype if np.issubdtype(values.dtype, np.floating) else np.dtype(np.float64)
        y = values.astype(np.float64)

        if np.isnan(y).any():
            raise ValueError("series must not contain missing values")

        return y, dtype, index
