"""分解処理のためのロギングユーティリティ。"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    console: bool = True,
) -> dict[str, int]:
    """loguru ロガーを設定する。

    Args:
        log_file: ログファイルへのパス。Noneの場合、ファイルログは無効化される。
        level: ログレベル（DEBUG、INFO、WARNING、ERROR）。
        rotation: ログローテーション設定。
        retention: ログ保持設定。
        console: コンソールログを有効化するかどうか。

    Returns:
        登録したシンクIDの辞書。
    """
    logger.remove()

    sink_ids: dict[str, int] = {}

    if console:
        sink_ids["console"] = logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink_ids["file"] = logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    return sink_ids


def shutdown_logger(sink_ids: dict[str, int] | None = None) -> None:
    """シンクを削除してファイルハンドルを閉じる。

    Loguruはシンクが削除されるまでファイルハンドルを開いたままにするため、
    :func:`setup_logger` が登録したシンクを明示的に削除する。

    Args:
        sink_ids: ``setup_logger`` が返す辞書。
    """
    if not sink_ids:
        return

    for sink_id in sink_ids.values():
        try:
            logger.remove(sink_id)
        except ValueError:
            # 既に削除済み
            continue
