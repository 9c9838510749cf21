"""Unit tests for threshold gating."""

from src.abtest.threshold_checker import ThresholdChecker
from tests.conftest import make_summary


class TestThresholdChecker:
    """Test p95 and error-rate limits."""

    def test_within_limits(self):
        results = ThresholdChecker().check(make_summary(p95=1200.0, error_rate=0.05, requests=100))

        assert [r.metric for r in results] == ["p95_latency_ms", "error_rate"]
        assert ThresholdChecker.all_passed(results)

    def test_limits_are_exclusive(self):
        """Test a value equal to the limit is a breach."""
        results = ThresholdChecker(max_p95_ms=1500.0, max_error_rate=0.1).check(
            make_summary(p95=1500.0, error_rate=0.1)
        )
        assert not any(r.passed for r in results)

    def test_custom_limits(self):
        checker = ThresholdChecker(max_p95_ms=100.0, max_error_rate=0.5)
        results = checker.check(make_summary(p95=150.0, error_rate=0.2))

        p95, error_rate = results
        assert not p95.passed
        assert p95.observed == 150.0
        assert p95.limit == 100.0
        assert error_rate.passed
        assert not ThresholdChecker.all_passed(results)

    def test_empty_summary_passes(self):
        assert ThresholdChecker.all_passed(ThresholdChecker().check(make_summary()))
