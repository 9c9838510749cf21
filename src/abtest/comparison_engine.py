"""Decides which of two endpoint summaries performed better."""
import logging
from typing import Optional

from .constants import ComparisonConstants
from .models import Classification, EndpointSummary, Verdict


# Configure logging
logger = logging.getLogger(__name__)

SIMILAR_PERFORMANCE_REASON = "Very similar performance - differences may be due to variance"


class ComparisonEngine:
    """
    Scores two summaries and classifies the gap between them.

    The score blends mean and median latency so a handful of slow outliers
    moves it less than the mean alone. Lower is better.

    On an exact score tie the second positional argument of compare() is
    treated as the best summary. Swapping the arguments therefore changes the
    winner only when the scores are equal.
    """

    def __init__(self, avg_weight: float = ComparisonConstants.AVG_WEIGHT,
                 median_weight: float = ComparisonConstants.MEDIAN_WEIGHT,
                 significance_threshold_percent: float = ComparisonConstants.SIGNIFICANCE_THRESHOLD_PERCENT,
                 max_error_rate_gap: Optional[float] = None):
        if avg_weight < 0 or median_weight < 0:
            raise ValueError("Score weights must be non-negative")
        self.avg_weight = avg_weight
        self.median_weight = median_weight
        self.significance_threshold_percent = significance_threshold_percent
        self.max_error_rate_gap = max_error_rate_gap

    def score(self, summary: EndpointSummary) -> float:
        return self.avg_weight * summary.avg_latency_ms + self.median_weight * summary.median_latency_ms

    def compare(self, summary_a: EndpointSummary, summary_b: EndpointSummary) -> Verdict:
        """
        Produce a verdict for two summaries.

        Args:
            summary_a: First candidate.
            summary_b: Second candidate; wins an exact score tie.

        Returns:
            Verdict with winner label, reason, absolute and relative avg difference.
        """
        if self.score(summary_a) < self.score(summary_b):
            best, second = summary_a, summary_b
        else:
            best, second = summary_b, summary_a

        avg_diff = abs(best.avg_latency_ms - second.avg_latency_ms)
        slowest_avg = max(best.avg_latency_ms, second.avg_latency_ms)
        avg_diff_percent = avg_diff / slowest_avg * 100 if slowest_avg > 0 else 0.0

        faster_avg = best.avg_latency_ms < second.avg_latency_ms
        faster_median = best.median_latency_ms < second.median_latency_ms
        threshold = self.significance_threshold_percent

        if faster_avg and faster_median and avg_diff_percent > threshold:
            classification = Classification.CLEAR
            winner = best.label
            reason = f"Faster avg ({self._improvement_percent(best, second, avg_diff_percent):.1f}% faster) and median, statistically significant"
        elif faster_avg and avg_diff_percent < threshold:
            classification = Classification.MARGINAL
            winner = f"{best.label} (marginally faster, within variance)"
            reason = f"Only {avg_diff_percent:.1f}% difference - results may vary between runs"
        elif faster_avg:
            classification = Classification.MIXED
            winner = f"{best.label} (faster avg)"
            reason = f"{avg_diff_percent:.1f}% faster on average"
        else:
            classification = Classification.FALLBACK
            winner = best.label
            reason = SIMILAR_PERFORMANCE_REASON

        if classification == Classification.CLEAR and self._less_reliable(best, second):
            logger.info(f"{best.label} is faster but its error rate {best.error_rate:.1%} "
                        f"exceeds {second.label}'s {second.error_rate:.1%}; not a clear winner")
            classification = Classification.MIXED
            winner = f"{best.label} (faster avg)"
            reason = (f"{avg_diff_percent:.1f}% faster on average, but error rate "
                      f"{best.error_rate * 100:.1f}% vs {second.error_rate * 100:.1f}%")

        logger.debug(f"Scores: {summary_a.label}={self.score(summary_a):.2f}, "
                     f"{summary_b.label}={self.score(summary_b):.2f}; {classification.value}")

        return Verdict(
            winner_label=winner,
            reason=reason,
            avg_diff_ms=avg_diff,
            avg_diff_percent=avg_diff_percent,
            classification=classification,
            winner_endpoint_id=best.endpoint_id,
        )

    @staticmethod
    def _improvement_percent(best: EndpointSummary, second: EndpointSummary, avg_diff_percent: float) -> float:
        if best.avg_latency_ms <= 0:
            return avg_diff_percent
        return (second.avg_latency_ms / best.avg_latency_ms - 1) * 100

    def _less_reliable(self, best: EndpointSummary, second: EndpointSummary) -> bool:
        if self.max_error_rate_gap is None:
            return False
        return best.error_rate - second.error_rate > self.max_error_rate_gap
