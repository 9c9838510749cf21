"""Thread-safe collection of per-request outcomes."""
import logging
import math
import threading
from collections import defaultdict
from typing import Dict, List

from .models import Sample


# Configure logging
logger = logging.getLogger(__name__)


class MetricRecorder:
    """Collects one Sample per completed request, tagged by endpoint."""

    def __init__(self):
        self._lock = threading.Lock()
        self._samples: Dict[str, List[Sample]] = defaultdict(list)
        self._frozen = False

    def record(self, endpoint_id: str, latency_ms: float, success: bool) -> None:
        """
        Append one outcome. Safe to call from many worker threads at once.

        Args:
            endpoint_id: Identity of the endpoint the request was sent to.
            latency_ms: Request duration in milliseconds, timed-out requests included.
            success: Whether the request completed with a 2xx status.
        """
        try:
            latency = float(latency_ms)
        except (TypeError, ValueError):
            # Counted as a request, excluded from latency statistics
            logger.debug(f"Non-numeric latency {latency_ms!r} for {endpoint_id}")
            latency = math.nan
        sample = Sample(endpoint_id=endpoint_id, latency_ms=latency, success=bool(success))
        with self._lock:
            if self._frozen:
                logger.warning(f"Dropping sample for {endpoint_id}: recording is closed")
                return
            self._samples[endpoint_id].append(sample)

    def freeze(self) -> None:
        """Close recording. Later calls to record() are dropped."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        with self._lock:
            return self._frozen

    def samples(self, endpoint_id: str) -> List[Sample]:
        """Return a copy of the samples recorded for an endpoint."""
        with self._lock:
            return list(self._samples.get(endpoint_id, []))

    def all_samples(self) -> List[Sample]:
        """Return every recorded sample, grouped by endpoint in first-seen order."""
        with self._lock:
            return [sample for samples in self._samples.values() for sample in samples]

    def count(self, endpoint_id: str) -> int:
        with self._lock:
            return len(self._samples.get(endpoint_id, []))

    def endpoint_ids(self) -> List[str]:
        with self._lock:
            return list(self._samples.keys())
