"""Pass/fail gating of endpoint summaries against latency and error-rate limits."""
import logging
from typing import Iterable, List

from .constants import ComparisonConstants
from .models import EndpointSummary, ThresholdResult


# Configure logging
logger = logging.getLogger(__name__)


class ThresholdChecker:
    """Checks p95 latency and error rate of each endpoint against fixed limits."""

    def __init__(self, max_p95_ms: float = ComparisonConstants.MAX_P95_MS,
                 max_error_rate: float = ComparisonConstants.MAX_ERROR_RATE):
        self.max_p95_ms = max_p95_ms
        self.max_error_rate = max_error_rate

    def check(self, summary: EndpointSummary) -> List[ThresholdResult]:
        results = [
            ThresholdResult(
                endpoint_id=summary.endpoint_id,
                metric="p95_latency_ms",
                limit=self.max_p95_ms,
                observed=summary.p95_latency_ms,
                passed=summary.p95_latency_ms < self.max_p95_ms,
            ),
            ThresholdResult(
                endpoint_id=summary.endpoint_id,
                metric="error_rate",
                limit=self.max_error_rate,
                observed=summary.error_rate,
                passed=summary.error_rate < self.max_error_rate,
            ),
        ]
        for result in results:
            if not result.passed:
                logger.warning(f"Threshold breached for {result.endpoint_id}: "
                               f"{result.metric}={result.observed:.4g} (limit {result.limit:.4g})")
        return results

    @staticmethod
    def all_passed(results: Iterable[ThresholdResult]) -> bool:
        return all(result.passed for result in results)
