"""Seasonal LOESS - LOESSによる季節-トレンド分解（STL / MSTL）"""

__version__ = "0.1.0"
__author__ = "Seasonal LOESS Team"

from seasonal_loess.config import (
    StlParams,
    MstlParams,
    DecompositionConfig,
    DataConfig,
    OutputConfig,
)
from seasonal_loess.decomposition import (
    StlResult,
    MstlResult,
    STLDecomposer,
    MSTLDecomposer,
    decompose,
    decompose_multi,
)

__all__ = [
    "__version__",
    "StlParams",
    "MstlParams",
    "DecompositionConfig",
    "DataConfig",
    "OutputConfig",
    "StlResult",
    "MstlResult",
    "STLDecomposer",
    "MSTLDecomposer",
    "decompose",
    "decompose_multi",
]
