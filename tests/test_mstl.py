"""Tests for MSTL decomposition."""

import numpy as np
import pandas as pd
import pytest

from seasonal_loess.config import MstlParams, StlParams
from seasonal_loess.decomposition.mstl import MSTLDecomposer, decompose_multi
from seasonal_loess.decomposition.stl import decompose
from seasonal_loess.preprocessing.transform import box_cox

SEASONAL_6 = [0.28318232, 0.70529824, -1.980384, 2.1643379, -2.3356874]
SEASONAL_10 = [1.4130436, 1.6048906, 0.050958008, -1.8706754, -1.7704514]
TREND = [5.139485, 5.223691, 5.3078976, 5.387292, 5.4666862]
REMAINDER = [-1.835711, 1.4661198, -1.3784716, 3.319045, -1.3605475]


def _first(values, n=5):
    return np.asarray(values)[:n]


class TestMSTLReference:
    """Reference values for the 30-point series."""

    def test_works(self, series):
        """Test periods 6 and 10."""
        result = decompose_multi(series, [6, 10])

        np.testing.assert_allclose(_first(result.seasonal[0]), SEASONAL_6, atol=1e-3)
        np.testing.assert_allclose(_first(result.seasonal[1]), SEASONAL_10, atol=1e-3)
        np.testing.assert_allclose(_first(result.trend), TREND, atol=1e-3)
        np.testing.assert_allclose(_first(result.remainder), REMAINDER, atol=1e-3)

    def test_unsorted_periods(self, series):
        """Test results follow the caller's period order."""
        result = decompose_multi(series, [10, 6])

        assert result.periods == [10, 6]
        np.testing.assert_allclose(_first(result.seasonal[0]), SEASONAL_10, atol=1e-3)
        np.testing.assert_allclose(_first(result.seasonal[1]), SEASONAL_6, atol=1e-3)
        np.testing.assert_allclose(_first(result.trend), TREND, atol=1e-3)
        np.testing.assert_allclose(_first(result.remainder), REMAINDER, atol=1e-3)

    def test_order_invariance(self, series):
        """Test swapping the period order only swaps the outputs."""
        forward = decompose_multi(series, [6, 10])
        backward = decompose_multi(series, [10, 6])

        np.testing.assert_array_equal(forward.seasonal[0], backward.seasonal[1])
        np.testing.assert_array_equal(forward.seasonal[1], backward.seasonal[0])
        np.testing.assert_array_equal(forward.trend, backward.trend)

    def test_lambda(self, series):
        """Test power transform with lambda 0.5."""
        result = decompose_multi(series, [6, 10], MstlParams(lambda_=0.5))

        np.testing.assert_allclose(
            _first(result.seasonal[0]),
            [0.43371448, 0.10503793, -0.7178911, 1.2356076, -1.8253292],
            atol=1e-3,
        )
        np.testing.assert_allclose(
            _first(result.seasonal[1]),
            [1.0437742, 0.8650516, 0.07303603, -1.428663, -1.1990008],
            atol=1e-3,
        )
        np.testing.assert_allclose(
            _first(result.trend),
            [2.0748303, 2.1291165, 2.1834028, 2.2330272, 2.2826517],
            atol=1e-3,
        )
        np.testing.assert_allclose(
            _first(result.remainder),
            [-1.0801829, 0.900794, -0.7101207, 1.9600279, -1.2583216],
            atol=1e-3,
        )

    def test_lambda_zero(self, series):
        """Test log transform when lambda is zero."""
        shifted = [v + 1 for v in series]
        result = decompose_multi(shifted, [6, 10], MstlParams(lambda_=0.0))

        np.testing.assert_allclose(
            _first(result.seasonal[0]),
            [0.18727916, 0.029921893, -0.2716494, 0.47748315, -0.7320051],
            atol=1e-3,
        )
        np.testing.assert_allclose(
            _first(result.seasonal[1]),
            [0.42725056, 0.32145387, -0.019030934, -0.56607914, -0.46765903],
            atol=1e-3,
        )
        np.testing.assert_allclose(
            _first(result.trend),
            [1.592807, 1.6144379, 1.6360688, 1.6559447, 1.6758206],
            atol=1e-3,
        )
        np.testing.assert_allclose(
            _first(result.remainder),
            [-0.41557717, 0.33677137, -0.24677622, 0.7352363, -0.47615635],
            atol=1e-3,
        )

    def test_seasonal_strength(self, series):
        """Test seasonal strength with a single period."""
        params = MstlParams(stl=StlParams(seasonal_length=7))
        result = decompose_multi(series, [7], params)

        assert result.seasonal_strength()[0] == pytest.approx(0.284111676315015, abs=1e-3)

    def test_seasonal_strength_max(self, max_seasonal_series):
        """Test seasonal strength of a purely periodic series."""
        params = MstlParams(stl=StlParams(seasonal_length=7))
        result = decompose_multi(max_seasonal_series, [7], params)

        assert result.seasonal_strength()[0] == pytest.approx(1.0, abs=1e-3)

    def test_trend_strength(self, series):
        """Test trend strength with a single period."""
        params = MstlParams(stl=StlParams(seasonal_length=7))
        result = decompose_multi(series, [7], params)

        assert result.trend_strength() == pytest.approx(0.16384245231864702, abs=1e-3)

    def test_trend_strength_max(self, max_trend_series):
        """Test trend strength of a linear series."""
        params = MstlParams(stl=StlParams(seasonal_length=7))
        result = decompose_multi(max_trend_series, [7], params)

        assert result.trend_strength() == pytest.approx(1.0, abs=1e-3)


class TestMSTLBehaviour:
    """Tests for orchestration details."""

    def test_single_period_matches_stl(self, series):
        """Test one period runs a single STL pass."""
        params = MstlParams(iterations=5, stl=StlParams(seasonal_length=7))
        multi = decompose_multi(series, [7], params)
        single = decompose(series, 7)

        np.testing.assert_allclose(multi.seasonal[0], single.seasonal)
        np.testing.assert_allclose(multi.trend, single.trend)
        np.testing.assert_allclose(multi.remainder, single.remainder)

    def test_components_sum_to_series(self, series):
        """Test all seasonal components, trend and remainder add up."""
        result = decompose_multi(series, [6, 10])
        total = sum(result.seasonal) + result.trend + result.remainder

        np.testing.assert_allclose(total, series, atol=1e-9)

    def test_components_sum_to_transformed_series(self, series):
        """Test components add up to the transformed series."""
        result = decompose_multi(series, [6, 10], MstlParams(lambda_=0.5))
        total = sum(result.seasonal) + result.trend + result.remainder

        np.testing.assert_allclose(total, box_cox(series, 0.5), atol=1e-9)

    def test_rank_derived_seasonal_lengths(self, series):
        """Test default seasonal lengths are 7 + 4 * (rank + 1)."""
        default = decompose_multi(series, [10, 6])
        explicit = decompose_multi(series, [10, 6], MstlParams(seasonal_lengths=[15, 11]))

        np.testing.assert_allclose(default.seasonal[0], explicit.seasonal[0])
        np.testing.assert_allclose(default.seasonal[1], explicit.seasonal[1])

    def test_shared_seasonal_length(self, series):
        """Test a shared seasonal length overrides the rank-derived default."""
        shared = decompose_multi(series, [6, 10], MstlParams(stl=StlParams(seasonal_length=7)))
        explicit = decompose_multi(series, [6, 10], MstlParams(seasonal_lengths=[7, 7]))
        default = decompose_multi(series, [6, 10])

        np.testing.assert_allclose(shared.seasonal[0], explicit.seasonal[0])
        assert not np.allclose(shared.seasonal[0], default.seasonal[0])

    def test_recovers_two_cycles(self):
        """Test each seasonal component tracks its own sine wave."""
        t = np.arange(240)
        weekly = 5.0 * np.sin(2 * np.pi * t / 7)
        monthly = 8.0 * np.sin(2 * np.pi * t / 30)
        values = 50.0 + 0.05 * t + weekly + monthly

        result = decompose_multi(values, [30, 7])

        assert np.corrcoef(result.seasonal[0], monthly)[0, 1] > 0.9
        assert np.corrcoef(result.seasonal[1], weekly)[0, 1] > 0.9

    def test_pandas_index_kept(self, weekly_series):
        """Test a pandas Series keeps its index and names frame columns by period."""
        result = MSTLDecomposer().fit(weekly_series, [7, 30])
        frame = result.to_frame()

        assert list(frame.columns) == ["seasonal_7", "seasonal_30", "trend", "remainder"]
        pd.testing.assert_index_equal(frame.index, weekly_series.index)

    def test_float32_preserved(self, series):
        """Test float32 input yields float32 output."""
        result = decompose_multi(np.array(series, dtype=np.float32), [6, 10])

        assert all(s.dtype == np.float32 for s in result.seasonal)
        np.testing.assert_allclose(_first(result.trend), TREND, atol=1e-3)

    def test_float32_computed_in_float64(self, series):
        """Test float32 input is only rounded once, on the final components."""
        values32 = np.array(series, dtype=np.float32)

        narrow = decompose_multi(values32, [6, 10])
        wide = decompose_multi(values32.astype(np.float64), [6, 10])

        for s32, s64 in zip(narrow.seasonal, wide.seasonal):
            np.testing.assert_array_equal(s32, s64.astype(np.float32))
        np.testing.assert_array_equal(narrow.trend, wide.trend.astype(np.float32))
        np.testing.assert_array_equal(narrow.remainder, wide.remainder.astype(np.float32))

    def test_single_period_ignores_iterations(self, series):
        """Test iterations is forced to one for a single period."""
        params = MstlParams(stl=StlParams(seasonal_length=7))
        forced = decompose_multi(series, [7], params.model_copy(update={"iterations": 0}))
        default = decompose_multi(series, [7], params)

        np.testing.assert_array_equal(forced.seasonal[0], default.seasonal[0])
        np.testing.assert_array_equal(forced.trend, default.trend)
        np.testing.assert_array_equal(forced.remainder, default.remainder)

    def test_input_not_mutated(self, series):
        """Test the caller's buffer is left untouched."""
        values = np.array(series)
        original = values.copy()
        decompose_multi(values, [6, 10], MstlParams(lambda_=0.5))

        np.testing.assert_array_equal(values, original)


class TestMSTLValidation:
    """Tests for validation messages."""

    def test_lambda_out_of_range(self, series):
        """Test lambda above one."""
        with pytest.raises(ValueError, match="lambda must be between 0 and 1"):
            decompose_multi(series, [6, 10], MstlParams(lambda_=2.0))

    def test_negative_lambda(self, series):
        """Test lambda below zero."""
        with pytest.raises(ValueError, match="lambda must be between 0 and 1"):
            decompose_multi(series, [6, 10], MstlParams(lambda_=-0.5))

    def test_empty_periods(self, series):
        """Test no periods."""
        with pytest.raises(ValueError, match="periods must not be empty"):
            decompose_multi(series, [])

    def test_period_one(self, series):
        """Test a period below two."""
        with pytest.raises(ValueError, match="periods must be at least 2"):
            decompose_multi(series, [1])

    def test_too_few_periods(self, series):
        """Test series shorter than twice a period."""
        with pytest.raises(ValueError, match="series has less than two periods"):
            decompose_multi(series, [16])

    def test_seasonal_lengths_mismatch(self, series):
        """Test per-period lengths must match the periods."""
        with pytest.raises(ValueError, match="seasonal_lengths must have the same length as periods"):
            decompose_multi(series, [6, 10], MstlParams(seasonal_lengths=[7]))

    def test_zero_iterations(self, series):
        """Test iterations below one."""
        with pytest.raises(ValueError, match="iterations must be at least 1"):
            decompose_multi(series, [6, 10], MstlParams(iterations=0))

    def test_bad_stl_parameters_raised_upfront(self, series):
        """Test nested STL parameters are validated."""
        params = MstlParams(stl=StlParams(seasonal_degree=2))
        with pytest.raises(ValueError, match="seasonal_degree must be 0 or 1"):
            decompose_multi(series, [6, 10], params)

    def test_log_of_zero(self, series):
        """Test the log transform refuses non-positive values."""
        with pytest.raises(ValueError, match="power transform requires positive values"):
            decompose_multi(series, [6, 10], MstlParams(lambda_=0.0))
