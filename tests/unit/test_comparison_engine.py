"""Unit tests for the comparison engine."""

import pytest

from src.abtest.comparison_engine import ComparisonEngine, SIMILAR_PERFORMANCE_REASON
from src.abtest.models import Classification
from tests.conftest import make_summary
from tests.test_const import (
    CLEAR_AVG_A, CLEAR_AVG_B, CLEAR_MEDIAN_A, CLEAR_MEDIAN_B, ENDPOINT1_ID, ENDPOINT2_ID, TEST_NAME_1, TEST_NAME_2
)


def summary_a(**kwargs):
    return make_summary(endpoint_id=ENDPOINT1_ID, label=TEST_NAME_1, **kwargs)


def summary_b(**kwargs):
    return make_summary(endpoint_id=ENDPOINT2_ID, label=TEST_NAME_2, **kwargs)


class TestScore:
    """Test the weighted score."""

    def test_default_weights(self):
        """Test score = 0.7 * avg + 0.3 * median."""
        engine = ComparisonEngine()
        assert engine.score(summary_a(avg=100.0, median=50.0)) == pytest.approx(85.0)

    def test_custom_weights(self):
        """Test weights are taken from construction, not fixed."""
        engine = ComparisonEngine(avg_weight=1.0, median_weight=0.0)
        assert engine.score(summary_a(avg=100.0, median=50.0)) == pytest.approx(100.0)

    @pytest.mark.parametrize("base", [0.0, 10.0, 250.0])
    def test_monotonic_in_avg_and_median(self, base):
        """Test raising avg or median never lowers the score."""
        engine = ComparisonEngine()
        reference = engine.score(summary_a(avg=base, median=base))
        assert engine.score(summary_a(avg=base + 1, median=base)) >= reference
        assert engine.score(summary_a(avg=base, median=base + 1)) >= reference

    def test_negative_weights_rejected(self):
        """Test negative weights are refused."""
        with pytest.raises(ValueError):
            ComparisonEngine(avg_weight=-0.1)


class TestCompare:
    """Test verdict classification."""

    def test_clear_winner(self):
        """Test avg and median both favor A with a gap above the threshold."""
        engine = ComparisonEngine()
        verdict = engine.compare(
            summary_a(avg=CLEAR_AVG_A, median=CLEAR_MEDIAN_A),
            summary_b(avg=CLEAR_AVG_B, median=CLEAR_MEDIAN_B),
        )

        assert verdict.classification == Classification.CLEAR
        assert verdict.winner_label == TEST_NAME_1
        assert verdict.winner_endpoint_id == ENDPOINT1_ID
        assert verdict.avg_diff_ms == pytest.approx(30.0)
        assert verdict.avg_diff_percent == pytest.approx(30 / 130 * 100)
        assert "30.0% faster" in verdict.reason
        assert "statistically significant" in verdict.reason

    def test_marginal_winner(self):
        """Test a 0.5ms gap on 100ms is marginal and within variance."""
        engine = ComparisonEngine()
        verdict = engine.compare(summary_a(avg=100.0, median=100.0), summary_b(avg=100.5, median=100.5))

        assert verdict.classification == Classification.MARGINAL
        assert "within variance" in verdict.winner_label
        assert verdict.winner_label.startswith(TEST_NAME_1)
        assert verdict.reason.startswith("Only 0.5% difference")
        assert verdict.avg_diff_percent < 2.0

    def test_mixed_signal(self):
        """Test avg favors the winner but median does not."""
        engine = ComparisonEngine()
        verdict = engine.compare(summary_a(avg=100.0, median=110.0), summary_b(avg=120.0, median=100.0))

        assert verdict.classification == Classification.MIXED
        assert verdict.winner_label == f"{TEST_NAME_1} (faster avg)"
        assert verdict.reason == "16.7% faster on average"

    def test_gap_exactly_at_threshold_is_not_clear(self):
        """Test the clear-winner gap must strictly exceed the threshold."""
        engine = ComparisonEngine()
        verdict = engine.compare(summary_a(avg=98.0, median=90.0), summary_b(avg=100.0, median=95.0))

        assert verdict.avg_diff_percent == pytest.approx(2.0)
        assert verdict.classification == Classification.MIXED

    def test_fallback_when_score_winner_has_higher_avg(self):
        """Test a lower score driven by median alone gives the similar-performance verdict."""
        engine = ComparisonEngine()
        verdict = engine.compare(summary_a(avg=101.0, median=50.0), summary_b(avg=100.0, median=100.0))

        assert verdict.classification == Classification.FALLBACK
        assert verdict.winner_label == TEST_NAME_1
        assert verdict.reason == SIMILAR_PERFORMANCE_REASON

    def test_zero_summaries(self):
        """Test two empty runs compare without division by zero."""
        engine = ComparisonEngine()
        verdict = engine.compare(summary_a(), summary_b())

        assert verdict.classification == Classification.FALLBACK
        assert verdict.avg_diff_ms == 0.0
        assert verdict.avg_diff_percent == 0.0
        assert "similar performance" in verdict.reason.lower()

    def test_zero_avg_winner_improvement_is_finite(self):
        """Test an endpoint with zero average latency does not produce an infinite improvement."""
        engine = ComparisonEngine()
        verdict = engine.compare(summary_a(), summary_b(avg=50.0, median=50.0))

        assert verdict.classification == Classification.CLEAR
        assert "100.0% faster" in verdict.reason

    def test_custom_significance_threshold(self):
        """Test the significance threshold is configurable."""
        engine = ComparisonEngine(significance_threshold_percent=50.0)
        verdict = engine.compare(
            summary_a(avg=CLEAR_AVG_A, median=CLEAR_MEDIAN_A),
            summary_b(avg=CLEAR_AVG_B, median=CLEAR_MEDIAN_B),
        )
        assert verdict.classification == Classification.MARGINAL

    @pytest.mark.parametrize("avg_a, avg_b", [(0.0, 10.0), (1.0, 1000.0), (55.5, 55.6), (300.0, 1.0)])
    def test_avg_diff_percent_bounds(self, avg_a, avg_b):
        """Test the percent gap stays within [0, 100]."""
        engine = ComparisonEngine()
        verdict = engine.compare(summary_a(avg=avg_a, median=avg_a), summary_b(avg=avg_b, median=avg_b))
        assert 0.0 <= verdict.avg_diff_percent <= 100.0


class TestArgumentOrder:
    """Test swapping the two summaries."""

    @pytest.mark.parametrize("a_kwargs, b_kwargs", [
        ({"avg": 100.0, "median": 95.0}, {"avg": 130.0, "median": 120.0}),
        ({"avg": 100.0, "median": 100.0}, {"avg": 100.5, "median": 100.5}),
        ({"avg": 100.0, "median": 110.0}, {"avg": 120.0, "median": 100.0}),
        ({"avg": 101.0, "median": 50.0}, {"avg": 100.0, "median": 100.0}),
    ])
    def test_swap_keeps_winner_and_classification(self, a_kwargs, b_kwargs):
        """Test the order of arguments does not matter without a score tie."""
        engine = ComparisonEngine()
        first = engine.compare(summary_a(**a_kwargs), summary_b(**b_kwargs))
        swapped = engine.compare(summary_b(**b_kwargs), summary_a(**a_kwargs))

        assert first.winner_endpoint_id == swapped.winner_endpoint_id
        assert first.classification == swapped.classification
        assert first.avg_diff_percent == pytest.approx(swapped.avg_diff_percent)

    def test_score_tie_goes_to_second_argument(self):
        """Test an exact score tie always selects the second positional argument."""
        engine = ComparisonEngine()
        tied_a = summary_a(avg=100.0, median=100.0)
        tied_b = summary_b(avg=100.0, median=100.0)

        assert engine.compare(tied_a, tied_b).winner_endpoint_id == ENDPOINT2_ID
        assert engine.compare(tied_b, tied_a).winner_endpoint_id == ENDPOINT1_ID

    def test_score_tie_with_different_shapes(self):
        """Test a tie reached through different avg/median mixes still favors the second argument."""
        engine = ComparisonEngine(avg_weight=0.5, median_weight=0.5)
        tied_a = summary_a(avg=90.0, median=110.0)
        tied_b = summary_b(avg=110.0, median=90.0)

        verdict = engine.compare(tied_a, tied_b)
        assert verdict.winner_endpoint_id == ENDPOINT2_ID
        assert verdict.classification == Classification.FALLBACK

        swapped = engine.compare(tied_b, tied_a)
        assert swapped.winner_endpoint_id == ENDPOINT1_ID
        assert swapped.classification == Classification.MIXED


class TestErrorRateGap:
    """Test the optional reliability check on clear winners."""

    def test_disabled_by_default(self):
        """Test a less reliable endpoint can still be a clear winner when the check is off."""
        engine = ComparisonEngine()
        verdict = engine.compare(
            summary_a(avg=CLEAR_AVG_A, median=CLEAR_MEDIAN_A, error_rate=0.5),
            summary_b(avg=CLEAR_AVG_B, median=CLEAR_MEDIAN_B, error_rate=0.0),
        )
        assert verdict.classification == Classification.CLEAR

    def test_downgrades_less_reliable_winner(self):
        """Test a clear winner with a much higher error rate is downgraded."""
        engine = ComparisonEngine(max_error_rate_gap=0.05)
        verdict = engine.compare(
            summary_a(avg=CLEAR_AVG_A, median=CLEAR_MEDIAN_A, error_rate=0.2),
            summary_b(avg=CLEAR_AVG_B, median=CLEAR_MEDIAN_B, error_rate=0.01),
        )

        assert verdict.classification == Classification.MIXED
        assert verdict.winner_label == f"{TEST_NAME_1} (faster avg)"
        assert "error rate 20.0% vs 1.0%" in verdict.reason

    def test_gap_within_tolerance_keeps_clear_winner(self):
        """Test comparable error rates keep the clear verdict."""
        engine = ComparisonEngine(max_error_rate_gap=0.05)
        verdict = engine.compare(
            summary_a(avg=CLEAR_AVG_A, median=CLEAR_MEDIAN_A, error_rate=0.03),
            summary_b(avg=CLEAR_AVG_B, median=CLEAR_MEDIAN_B, error_rate=0.01),
        )
        assert verdict.classification == Classification.CLEAR
