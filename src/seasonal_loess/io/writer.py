"""Seasonal LOESSの出力書き込みユーティリティ"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np
import pandas as pd
from loguru import logger

from seasonal_loess.config import OutputConfig
from seasonal_loess.decomposition.base import MstlResult, StlResult


def ensure_output_dirs(config: OutputConfig) -> Dict[str, Path]:
    """すべての出力ディレクトリが存在することを確認

    Args:
        config: 出力設定

    Returns:
        ディレクトリ名からパスへのマッピング辞書
    """
    dirs = {
        "results": config.base_dir / config.results_dir,
        "figures": config.base_dir / config.figures_dir,
        "logs": config.base_dir / config.logs_dir,
    }

    for path in dirs.values():
        path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"ディレクトリを確保しました: {path}")

    return dirs


def save_components(
    result: Union[StlResult, MstlResult],
    output_dir: Path | str,
    prefix: str = "decomposition",
    observed: pd.Series | None = None,
) -> Path:
    """分解成分をCSVに保存

    Args:
        result: 分解結果
        output_dir: 出力ディレクトリ
        prefix: ファイル名プレフィックス
        observed: 観測値（指定すると先頭列に含める）

    Returns:
        保存されたファイルのパス
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    frame = result.to_frame()
    if observed is not None:
        frame.insert(0, "observed", np.asarray(observed, dtype=float))

    path = output_dir / f"{prefix}_components.csv"
    frame.to_csv(path)
    logger.info(f"成分を保存しました: {path}")

    return path


def save_summary(summary: Dict[str, Any], path: Path | str) -> Path:
    """サマリー辞書をJSONに保存

    Args:
        summary: 強度やパラメータを含む辞書
        path: 出力ファイルパス

    Returns:
        保存されたファイルのパス
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(_make_json_serializable(summary), f, indent=2, ensure_ascii=False)
    logger.info(f"サマリーを保存しました: {path}")

    return path


def _make_json_serializable(obj: Any) -> Any:
    """オブジェクトをJSONシリアライズ可能な形式に変換"""
    if isinstance(obj, dict):
        return {str(k): _make_json_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_make_json_serializable(item) for item in obj]
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, np.generic):
        return obj.item()
    elif isinstance(obj, (pd.Timestamp, datetime)):
        return obj.isoformat()
    elif isinstance(obj, Path):
        return str(obj)
    elif hasattr(obj, "model_dump"):  # Pydanticモデル
        return obj.model_dump(mode="json", by_alias=True)
    else:
        return obj
