"""分解結果の可視化モジュール。"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from loguru import logger

from seasonal_loess.decomposition.base import MstlResult, StlResult


def _components(result: Union[StlResult, MstlResult]) -> List[Tuple[str, np.ndarray, str]]:
    """プロットするパネル（ラベル、値、色）を並べる。"""
    panels = [("Trend", result.trend, "green")]
    if isinstance(result, MstlResult):
        for period, seasonal in zip(result.periods, result.seasonal):
            panels.append((f"Seasonal ({period})", seasonal, "red"))
    else:
        panels.append((f"Seasonal ({result.period})", result.seasonal, "red"))
    panels.append(("Remainder", result.remainder, "gray"))
    return panels


def plot_decomposition(
    observed: Union[pd.Series, np.ndarray],
    result: Union[StlResult, MstlResult],
    title: Optional[str] = None,
    figsize: tuple = (14, 10),
    save_path: Optional[Path] = None,
    dpi: int = 150,
    observed_label: str = "Observed",
) -> plt.Figure:
    """観測値と分解成分をパネルごとにプロットします。

    Args:
        observed: 分解した元の系列。
        result: 分解結果。
        title: プロットのタイトル。
        figsize: 図のサイズ。
        save_path: 図を保存するパス。
        dpi: 図の解像度。
        observed_label: 観測値パネルのラベル。変換後の系列を渡すときに使う。

    Returns:
        Matplotlib Figureオブジェクト。
    """
    if isinstance(observed, pd.Series):
        x = observed.index
    elif result.index is not None:
        x = result.index
    else:
        x = np.arange(len(observed))

    panels = [(observed_label, np.asarray(observed, dtype=float), "blue")] + _components(result)

    fig, axes = plt.subplots(len(panels), 1, figsize=figsize, sharex=True)

    for ax, (name, data, color) in zip(axes, panels):
        ax.plot(x, data, color=color, linewidth=0.8)
        ax.set_ylabel(name)
        ax.grid(True, alpha=0.3)

    if isinstance(result, StlResult) and not np.all(result.weights == 1.0):
        # ロバスト重みが小さい点を観測値パネルに重ねる
        outliers = result.weights < 0.5
        axes[0].scatter(np.asarray(x)[outliers], np.asarray(observed, dtype=float)[outliers],
                        color="orange", s=12, zorder=3, label="weight < 0.5")
        axes[0].legend(loc="upper right", fontsize=8)

    if title:
        fig.suptitle(title, fontsize=12, y=1.02)
    elif isinstance(result, MstlResult):
        fig.suptitle(f"MSTL decomposition (periods={result.periods})", fontsize=12, y=1.02)
    else:
        fig.suptitle(f"STL decomposition (period={result.period})", fontsize=12, y=1.02)

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=dpi, bbox_inches="tight")
        logger.info(f"分解プロットを保存しました: {save_path}")

    return fig
