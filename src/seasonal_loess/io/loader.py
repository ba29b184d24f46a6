"""Data loading utilities for Seasonal LOESS."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
from loguru import logger

from seasonal_loess.config import DataConfig


def select_value_column(df: pd.DataFrame, column: Optional[str] = None) -> str:
    """Pick the column to decompose.

    Args:
        df: Input DataFrame.
        column: Explicit column name. If None, the first numeric column is used.

    Returns:
        Column name.

    Raises:
        ValueError: If the column is missing or no numeric column exists.
    """
    if column is not None:
        if column not in df.columns:
            raise ValueError(f"Value column '{column}' not found in data")
        return column

    numeric = df.select_dtypes(include="number").columns
    if len(numeric) == 0:
        raise ValueError("No numeric column found in data")
    return numeric[0]


def load_series(
    path: Path | str,
    config: Optional[DataConfig] = None,
) -> pd.Series:
    """Load a single regularly-sampled series from a CSV file.

    Args:
        path: Path to CSV file.
        config: Data configuration. If None, uses defaults.

    Returns:
        Series indexed by the date column when present, otherwise by row number.

    Raises:
        FileNotFoundError: If file does not exist.
        ValueError: If the value column is missing or contains missing values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    config = config or DataConfig()

    logger.info(f"Loading data from: {path}")
    df = pd.read_csv(path)
    logger.debug(f"Loaded {len(df)} records with columns: {list(df.columns)}")

    if config.date_column and config.date_column in df.columns:
        df[config.date_column] = pd.to_datetime(df[config.date_column])
        df = df.set_index(config.date_column).sort_index()

    column = select_value_column(df, config.value_column)
    series = df[column].astype(float)

    n_missing = int(series.isna().sum())
    if n_missing:
        raise ValueError(f"Column '{column}' has {n_missing} missing values; impute them before decomposing")

    series.name = column
    return series
