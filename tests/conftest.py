"""Pytest fixtures for Seasonal LOESS tests."""

import tempfile
from pathlib import Path

import numpy as np
import pytest

from tests.data.synthetic import generate_csv_file, generate_seasonal_series, reference_series


@pytest.fixture
def series():
    """The 30-point reference series."""
    return reference_series()


@pytest.fixture
def max_seasonal_series():
    """A purely periodic series (period 7)."""
    return [float(i % 7) for i in range(30)]


@pytest.fixture
def max_trend_series():
    """A purely linear series."""
    return [float(i) for i in range(30)]


@pytest.fixture
def weekly_series():
    """Noisy daily series with a weekly cycle and a linear trend."""
    return generate_seasonal_series(n_days=140, periods=[7], noise_level=0.01)


@pytest.fixture
def noisy_values():
    """Plain numpy noise for property checks."""
    rng = np.random.default_rng(7)
    return rng.standard_normal(60) * 3 + 10


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_csv_file(temp_output_dir):
    """Create a CSV file with a date column and one weekly series."""
    path = temp_output_dir / "input.csv"
    generate_csv_file(str(path), n_days=120, periods=[7])
    return path


@pytest.fixture
def multi_csv_file(temp_output_dir):
    """Create a CSV file whose series has weekly and 30-day cycles."""
    path = temp_output_dir / "multi.csv"
    generate_csv_file(str(path), n_days=180, periods=[7, 30])
    return path
