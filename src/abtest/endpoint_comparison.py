"""Runs identical load against two endpoints and compares the outcome."""
import concurrent.futures
import logging
import time
from typing import Callable, Dict, Optional, Sequence

from .comparison_engine import ComparisonEngine
from .constants import ComparisonConstants
from .metric_recorder import MetricRecorder
from .metrics_aggregator import MetricsAggregator
from .models import ComparisonResult, Endpoint, RampStage
from .request_executor import Transport
from .scenario_runner import ScenarioRunner
from .threshold_checker import ThresholdChecker


# Configure logging
logger = logging.getLogger(__name__)


class EndpointComparison:
    """Drives both endpoints under the same ramp profile, then summarizes and compares them."""

    def __init__(self, endpoint1: Endpoint, endpoint2: Endpoint, stages: Sequence[RampStage],
                 transport: Transport, runner_factory: Callable[[str], ScenarioRunner],
                 engine: ComparisonEngine, aggregator_factory: Callable[[MetricRecorder], MetricsAggregator] = MetricsAggregator,
                 threshold_checker: Optional[ThresholdChecker] = None,
                 headers: Optional[Dict[str, str]] = None,
                 timeout_sec: float = ComparisonConstants.DEFAULT_TIMEOUT,
                 iteration_pause_sec: float = ComparisonConstants.DEFAULT_ITERATION_PAUSE,
                 sleep: Callable[[float], None] = time.sleep):
        self.endpoint1 = endpoint1
        self.endpoint2 = endpoint2
        self.stages = list(stages)
        self.transport = transport
        self.runner_factory = runner_factory
        self.engine = engine
        self.aggregator_factory = aggregator_factory
        self.threshold_checker = threshold_checker or ThresholdChecker()
        self.headers = dict(headers or {})
        self.timeout_sec = timeout_sec
        self.iteration_pause_sec = iteration_pause_sec
        self.sleep = sleep

    def make_iteration(self, endpoint: Endpoint, recorder: MetricRecorder) -> Callable[[], None]:
        """Build the per-worker loop body: one request, one sample, then the pacing pause."""
        def iteration() -> None:
            response = self.transport.issue_request(endpoint.url, self.headers, self.timeout_sec)
            recorder.record(endpoint.id, response.duration_ms, response.ok)
            if self.iteration_pause_sec > 0:
                self.sleep(self.iteration_pause_sec)
        return iteration

    def run(self) -> ComparisonResult:
        """
        Execute both scenarios in parallel and compare the results.

        Aggregation starts only after both scenarios have ramped down to zero
        workers and recording has been closed.

        Returns:
            ComparisonResult with summaries, verdict, threshold results and raw samples.
        """
        recorder = MetricRecorder()
        endpoints = [self.endpoint1, self.endpoint2]

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(endpoints)) as executor:
            futures = {
                executor.submit(self.runner_factory(endpoint.id).run_scenario, self.stages,
                                self.make_iteration(endpoint, recorder)): endpoint
                for endpoint in endpoints
            }
            for future in concurrent.futures.as_completed(futures):
                endpoint = futures[future]
                iterations = future.result()
                logger.info(f"Scenario for {endpoint.name} finished after {iterations} iterations")

        recorder.freeze()

        aggregator = self.aggregator_factory(recorder)
        summary1 = aggregator.summarize(self.endpoint1.id, self.endpoint1.name)
        summary2 = aggregator.summarize(self.endpoint2.id, self.endpoint2.name)
        verdict = self.engine.compare(summary1, summary2)

        thresholds = self.threshold_checker.check(summary1) + self.threshold_checker.check(summary2)

        return ComparisonResult(
            endpoint1=self.endpoint1,
            endpoint2=self.endpoint2,
            summary1=summary1,
            summary2=summary2,
            verdict=verdict,
            thresholds=thresholds,
            samples=recorder.all_samples(),
        )
