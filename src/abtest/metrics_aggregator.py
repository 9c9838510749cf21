"""Reduces recorded samples into per-endpoint statistics."""
import logging
import math
from typing import Optional, Sequence

import numpy as np

from .constants import ComparisonConstants
from .metric_recorder import MetricRecorder
from .models import EndpointSummary, MedianSource, Sample


# Configure logging
logger = logging.getLogger(__name__)


class MetricsAggregator:
    """
    Computes count, mean, median, min, max, p90, p95 and error rate per endpoint.

    Latency statistics cover every sample, failed requests included. The median
    is either exact (numpy) or bucketed: the midpoint of the fixed-width bucket
    that holds the nearest-rank median, which is within bucket_width_ms / 2 of
    that nearest-rank median.
    """

    def __init__(self, recorder: MetricRecorder, median_source: MedianSource = MedianSource.EXACT,
                 bucket_width_ms: float = ComparisonConstants.MEDIAN_BUCKET_WIDTH_MS):
        if bucket_width_ms <= 0:
            raise ValueError("bucket_width_ms must be positive")
        self.recorder = recorder
        self.median_source = MedianSource(median_source)
        self.bucket_width_ms = bucket_width_ms

    def summarize(self, endpoint_id: str, label: Optional[str] = None) -> EndpointSummary:
        """
        Summarize all samples recorded for an endpoint.

        Args:
            endpoint_id: Endpoint to summarize.
            label: Display name carried into the summary. Defaults to endpoint_id.

        Returns:
            EndpointSummary; all numeric fields are zero when nothing was recorded.
        """
        if not self.recorder.frozen:
            logger.warning(f"Summarizing {endpoint_id} while recording is still open")
        return self.summarize_samples(endpoint_id, self.recorder.samples(endpoint_id), label)

    def summarize_samples(self, endpoint_id: str, samples: Sequence[Sample],
                          label: Optional[str] = None) -> EndpointSummary:
        label = label or endpoint_id
        request_count = len(samples)
        if request_count == 0:
            return EndpointSummary(endpoint_id=endpoint_id, label=label)

        fails = sum(1 for sample in samples if not sample.success)
        latencies = np.array([sample.latency_ms for sample in samples], dtype=float)
        latencies = latencies[np.isfinite(latencies)]

        if latencies.size == 0:
            return EndpointSummary(endpoint_id=endpoint_id, label=label, request_count=request_count,
                                   error_rate=fails / request_count)

        return EndpointSummary(
            endpoint_id=endpoint_id,
            label=label,
            request_count=request_count,
            avg_latency_ms=float(np.mean(latencies)),
            median_latency_ms=self._median(latencies),
            min_latency_ms=float(np.min(latencies)),
            max_latency_ms=float(np.max(latencies)),
            p90_latency_ms=float(np.percentile(latencies, 90)),
            p95_latency_ms=float(np.percentile(latencies, 95)),
            error_rate=fails / request_count,
        )

    def _median(self, latencies: np.ndarray) -> float:
        if self.median_source == MedianSource.EXACT:
            return float(np.median(latencies))
        return self._bucketed_median(latencies)

    def _bucketed_median(self, latencies: np.ndarray) -> float:
        width = self.bucket_width_ms
        low = float(np.min(latencies))
        rank = math.ceil(latencies.size / 2)
        nearest_rank = float(np.partition(latencies, rank - 1)[rank - 1])
        return low + (math.floor((nearest_rank - low) / width) + 0.5) * width
