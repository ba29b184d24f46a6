"""分解処理のための計時ユーティリティ。"""

from __future__ import annotations

import functools
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from loguru import logger


class StepTimer:
    """CLIの処理ステップごとの所要時間を記録する。"""

    def __init__(self):
        self.steps: List[Tuple[str, float]] = []

    @contextmanager
    def step(self, name: str) -> Iterator[None]:
        """ステップの計時用コンテキストマネージャ。

        Args:
            name: ステップ名。
        """
        logger.debug(f"ステップを開始: {name}")
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.steps.append((name, elapsed))
            logger.debug(f"ステップ '{name}' を完了: {elapsed:.3f}秒")

    def summary(self) -> Dict[str, float]:
        """ステップ名から所要秒数への辞書を返す。"""
        summary: Dict[str, float] = {}
        for name, elapsed in self.steps:
            summary[name] = summary.get(name, 0.0) + elapsed
        return summary

    def print_summary(self) -> None:
        """タイミングサマリーをロガーに出力する。"""
        total = sum(elapsed for _, elapsed in self.steps)
        logger.info(f"合計時間: {total:.3f}秒")
        for name, elapsed in self.summary().items():
            percent = elapsed / total * 100 if total > 0 else 0.0
            logger.info(f"  {name}: {elapsed:.3f}秒 ({percent:.1f}%)")


def time_it(func: Optional[Callable] = None, *, name: Optional[str] = None):
    """関数実行時間をDEBUGレベルで記録するデコレータ。

    Args:
        func: デコレートする関数。
        name: ログ用のオプション名。

    Returns:
        デコレートされた関数。
    """
    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            label = name or f.__name__
            start = time.perf_counter()
            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.debug(f"{label} が {time.perf_counter() - start:.3f}秒 後に失敗: {e}")
                raise
            logger.debug(f"{label} が {time.perf_counter() - start:.3f}秒 で完了")
            return result
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
