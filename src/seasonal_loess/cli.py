"""Seasonal LOESSのCLIインターフェース"""

from __future__ import annotations

import dataclasses
import gc
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from loguru import logger

from seasonal_loess import __version__


@click.group()
@click.version_option(version=__version__)
def main():
    """Seasonal LOESS - LOESSによる季節-トレンド分解"""
    pass


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="設定YAMLファイルのパス",
)
@click.option(
    "--data", "-d",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="入力CSVデータファイルのパス",
)
@click.option(
    "--column",
    type=str,
    default=None,
    help="分解する列名（デフォルト: 最初の数値列）",
)
@click.option(
    "--period", "-p",
    "periods",
    type=int,
    multiple=True,
    help="季節周期（複数指定でMSTL）",
)
@click.option(
    "--robust",
    is_flag=True,
    help="ロバスト推定を使用",
)
@click.option(
    "--lambda", "lmbda",
    type=float,
    default=None,
    help="分解前に適用するべき変換のλ（0以上1以下）",
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=Path("outputs"),
    help="出力ディレクトリ",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="ログレベル",
)
@click.option(
    "--no-figures",
    is_flag=True,
    help="図の生成をスキップ",
)
def decompose(
    config: Optional[Path],
    data: Path,
    column: Optional[str],
    periods: Tuple[int, ...],
    robust: bool,
    lmbda: Optional[float],
    output: Path,
    log_level: str,
    no_figures: bool,
):
    """CSVの系列を季節・トレンド・残差に分解"""
    import pandas as pd

    from seasonal_loess.config import load_config
    from seasonal_loess.decomposition.mstl import MSTLDecomposer
    from seasonal_loess.decomposition.stl import STLDecomposer, resolve_parameters
    from seasonal_loess.io.loader import load_series
    from seasonal_loess.io.writer import ensure_output_dirs, save_components, save_summary
    from seasonal_loess.preprocessing.transform import box_cox
    from seasonal_loess.scoring.metrics import strength_summary
    from seasonal_loess.utils.logging import setup_logger, shutdown_logger
    from seasonal_loess.utils.profiling import StepTimer

    output = Path(output)
    log_file = output / "logs" / f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    sinks = setup_logger(log_file=log_file, level=log_level)

    logger.info(f"Seasonal LOESS v{__version__}")
    logger.info(f"Data file: {data}")
    logger.info(f"Config file: {config or 'default'}")

    overrides: Dict[str, Any] = {"output": {"base_dir": str(output)}}
    if column:
        overrides["data"] = {"value_column": column}
    if periods:
        overrides["periods"] = list(periods)
    if robust:
        overrides.setdefault("mstl", {})["stl"] = {"robust": True}
    if lmbda is not None:
        overrides.setdefault("mstl", {})["lambda"] = lmbda

    timer = StepTimer()

    try:
        with timer.step("load_config"):
            cfg = load_config(config, overrides)
            logger.info(f"Periods: {cfg.periods}")

        dirs = ensure_output_dirs(cfg.output)

        with timer.step("load_data"):
            series = load_series(data, cfg.data)

        with timer.step("decompose"):
            if cfg.is_multi_seasonal:
                result = MSTLDecomposer(cfg.mstl).fit(series, cfg.periods)
                method = "mstl"
            else:
                result = STLDecomposer(cfg.stl).fit(series, cfg.periods[0])
                method = "stl"

        # 変換した場合、成分の和は変換後の系列になる
        observed = series
        observed_label = "Observed"
        if method == "mstl" and cfg.mstl.lambda_ is not None:
            observed = pd.Series(
                box_cox(series.to_numpy(), cfg.mstl.lambda_),
                index=series.index,
                name=series.name,
            )
            observed_label = f"Observed (Box-Cox λ={cfg.mstl.lambda_:g})"

        with timer.step("save_results"):
            summary: Dict[str, Any] = {
                "method": method,
                "column": series.name,
                "length": len(series),
                "periods": cfg.periods,
                "strength": strength_summary(result),
                "config": cfg.mstl,
            }
            if method == "stl":
                resolved = resolve_parameters(len(series), cfg.periods[0], cfg.stl)
                summary["parameters"] = dataclasses.asdict(resolved)
            components_path = save_components(result, dirs["results"], prefix=method, observed=observed)
            save_summary(summary, dirs["results"] / f"{method}_summary.json")

        if not no_figures:
            with timer.step("visualization"):
                try:
                    import matplotlib
                    matplotlib.use("Agg")  # 非対話的バックエンド
                    import matplotlib.pyplot as plt

                    from seasonal_loess.visualization.decomposition import plot_decomposition

                    figure_path = dirs["figures"] / f"{method}_decomposition.{cfg.output.figure_format}"
                    fig = plot_decomposition(
                        observed,
                        result,
                        save_path=figure_path,
                        dpi=cfg.output.figure_dpi,
                        observed_label=observed_label,
                    )
                    plt.close(fig)
                except Exception as e:
                    logger.warning(f"可視化に失敗しました: {e}")

        timer.print_summary()

        click.echo("\n=== 分解完了 ===")
        click.echo(f"手法: {method.upper()}  周期: {cfg.periods}")
        for key, value in summary["strength"].items():
            click.echo(f"  {key}: {value:.4f}")
        click.echo(f"\n成分の保存先: {components_path}")
        click.echo(f"ログ保存先: {log_file}")

    except Exception as e:
        logger.exception(f"分解に失敗しました: {e}")
        click.echo(f"エラー: {e}", err=True)
        sys.exit(1)

    finally:
        shutdown_logger(sinks)
        gc.collect()


@main.command()
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=Path("config"),
    help="設定ファイルの出力ディレクトリ",
)
def init(output: Path):
    """設定ファイルを初期化"""
    from seasonal_loess.config import DecompositionConfig, MstlParams, StlParams

    output = Path(output)
    output.mkdir(parents=True, exist_ok=True)

    default_path = output / "default.yaml"
    DecompositionConfig().to_yaml(default_path)
    click.echo(f"Created: {default_path}")

    robust_config = DecompositionConfig(mstl=MstlParams(stl=StlParams(robust=True)))
    robust_path = output / "robust.yaml"
    robust_config.to_yaml(robust_path)
    click.echo(f"Created: {robust_path}")

    click.echo(f"\n設定ファイル作成先: {output}")


if __name__ == "__main__":
    main()
