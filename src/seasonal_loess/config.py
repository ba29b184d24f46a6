"""Pydanticベースの分解パラメータと設定モデル"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class StlParams(BaseModel):
    """単一周期STL分解のパラメータ

    未指定（None）の項目は適合時に周期から既定値を導出する。
    値の範囲チェックは適合時に行う。
    """

    model_config = ConfigDict(frozen=True)

    seasonal_length: Optional[int] = Field(default=None, description="季節スムーザーの窓長（奇数、3以上）")
    trend_length: Optional[int] = Field(default=None, description="トレンドスムーザーの窓長（奇数、3以上）")
    low_pass_length: Optional[int] = Field(default=None, description="ローパスフィルタの窓長（奇数、3以上）")
    seasonal_degree: int = Field(default=0, description="季節スムーザーの局所多項式次数（0または1）")
    trend_degree: int = Field(default=1, description="トレンドスムーザーの局所多項式次数（0または1）")
    low_pass_degree: Optional[int] = Field(default=None, description="ローパスフィルタの次数。Noneの場合はtrend_degree")
    seasonal_jump: Optional[int] = Field(default=None, description="季節スムーザーの評価間隔")
    trend_jump: Optional[int] = Field(default=None, description="トレンドスムーザーの評価間隔")
    low_pass_jump: Optional[int] = Field(default=None, description="ローパスフィルタの評価間隔")
    inner_loops: Optional[int] = Field(default=None, description="内側ループの反復回数")
    outer_loops: Optional[int] = Field(default=None, description="ロバスト化のための外側ループの反復回数")
    robust: bool = Field(default=False, description="ロバスト推定を使用")


class MstlParams(BaseModel):
    """複数周期MSTL分解のパラメータ"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    iterations: int = Field(default=2, description="全周期を通した反復回数（周期が1つなら常に1）")
    lambda_: Optional[float] = Field(
        default=None,
        alias="lambda",
        description="分解前に適用するべき変換のλ（0以上1以下）",
    )
    seasonal_lengths: Optional[List[int]] = Field(
        default=None,
        description="周期ごとの季節スムーザー窓長。periodsと同じ長さであること",
    )
    stl: StlParams = Field(default_factory=StlParams, description="各周期に使うSTLパラメータ")


class DataConfig(BaseModel):
    """CSV読み込みの設定"""

    date_column: Optional[str] = Field(default="date", description="インデックスに使う日付列名（オプション）")
    value_column: Optional[str] = Field(
        default=None,
        description="分解する値の列名。Noneの場合は最初の数値列を使用",
    )


class OutputConfig(BaseModel):
    """出力ファイルとディレクトリの設定"""

    base_dir: Path = Field(default=Path("outputs"), description="ベース出力ディレクトリ")
    results_dir: str = Field(default="results", description="結果ファイルのサブディレクトリ")
    figures_dir: str = Field(default="figures", description="図ファイルのサブディレクトリ")
    logs_dir: str = Field(default="logs", description="ログファイルのサブディレクトリ")
    figure_format: Literal["png", "svg", "pdf"] = Field(default="png", description="図の出力形式")
    figure_dpi: int = Field(default=150, description="図の出力DPI")

    @field_validator("base_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v: Any) -> Path:
        if isinstance(v, str):
            return Path(v)
        return v


class DecompositionConfig(BaseModel):
    """CLIから使う分解処理のメイン設定モデル"""

    data: DataConfig = Field(default_factory=DataConfig)
    periods: List[int] = Field(default=[7], description="分解する季節周期")
    mstl: MstlParams = Field(default_factory=MstlParams)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def stl(self) -> StlParams:
        """単一周期の分解に使うSTLパラメータ"""
        return self.mstl.stl

    @property
    def is_multi_seasonal(self) -> bool:
        """MSTLで分解すべき設定かどうか"""
        return (
            len(self.periods) != 1
            or self.mstl.lambda_ is not None
            or self.mstl.seasonal_lengths is not None
        )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "DecompositionConfig":
        """YAMLファイルから設定を読み込む"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"設定ファイルが見つかりません: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    def to_yaml(self, path: Path | str) -> None:
        """設定をYAMLファイルに保存"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json", by_alias=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def merge_with(self, override: Dict[str, Any]) -> "DecompositionConfig":
        """現在の設定とオーバーライド辞書をマージ"""
        current = self.model_dump(by_alias=True)
        _deep_merge(current, override)
        return DecompositionConfig.model_validate(current)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """オーバーライド辞書をベース辞書に深くマージ"""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def load_config(
    path: Optional[Path | str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> DecompositionConfig:
    """ファイルから設定を読み込み、オプションでオーバーライドを適用

    Args:
        path: YAML設定ファイルのパス。Noneの場合はデフォルト設定を使用
        overrides: オーバーライド値の辞書

    Returns:
        DecompositionConfigインスタンス
    """
    if path is not None:
        config = DecompositionConfig.from_yaml(path)
    else:
        config = DecompositionConfig()

    if overrides:
        config = config.merge_with(overrides)

    return config
