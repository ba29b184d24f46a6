"""Seasonal LOESSのIOモジュール"""

from seasonal_loess.io.loader import load_series, select_value_column
from seasonal_loess.io.writer import ensure_output_dirs, save_components, save_summary

__all__ = [
    "load_series",
    "select_value_column",
    "ensure_output_dirs",
    "save_components",
    "save_summary",
]
