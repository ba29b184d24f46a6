"""Visualization module for Seasonal LOESS."""

from seasonal_loess.visualization.decomposition import plot_decomposition

__all__ = [
    "plot_decomposition",
]
