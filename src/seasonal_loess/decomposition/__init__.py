"""Seasonal LOESSの季節-トレンド分解モジュール"""

from seasonal_loess.decomposition.base import (
    BaseDecomposer,
    StlResult,
    MstlResult,
)
from seasonal_loess.decomposition.stl import (
    ResolvedParameters,
    STLDecomposer,
    decompose,
    resolve_parameters,
    run_stl,
)
from seasonal_loess.decomposition.mstl import MSTLDecomposer, decompose_multi

__all__ = [
    "BaseDecomposer",
    "StlResult",
    "MstlResult",
    "ResolvedParameters",
    "STLDecomposer",
    "MSTLDecomposer",
    "decompose",
    "decompose_multi",
    "resolve_parameters",
    "run_stl",
]
