"""Shared test configuration and fixtures for all tests."""

from typing import Callable, Sequence
from unittest.mock import MagicMock

import pytest

from src.abtest.models import Endpoint, EndpointSummary, RampStage, TransportResponse
from src.abtest.scenario_runner import ScenarioRunner
from tests.test_const import (
    ENDPOINT1_ID, ENDPOINT2_ID, HTTP_SUCCESS, TEST_NAME_1, TEST_NAME_2, TEST_URL_1, TEST_URL_2
)


def make_summary(endpoint_id: str = ENDPOINT1_ID, label: str = None, avg: float = 0.0, median: float = 0.0,
                 minimum: float = 0.0, maximum: float = 0.0, requests: int = 0, error_rate: float = 0.0,
                 p95: float = 0.0) -> EndpointSummary:
    """Build a synthetic summary without recording any samples."""
    return EndpointSummary(
        endpoint_id=endpoint_id,
        label=label or endpoint_id,
        request_count=requests,
        avg_latency_ms=avg,
        median_latency_ms=median,
        min_latency_ms=minimum,
        max_latency_ms=maximum,
        p90_latency_ms=p95,
        p95_latency_ms=p95,
        error_rate=error_rate,
    )


class FixedIterationRunner(ScenarioRunner):
    """Runs the iteration function a fixed number of times on the calling thread."""

    def __init__(self, iterations: int):
        self.iterations = iterations
        self.stages_seen = None

    def run_scenario(self, stages: Sequence[RampStage], iteration_fn: Callable[[], None]) -> int:
        self.stages_seen = list(stages)
        for _ in range(self.iterations):
            iteration_fn()
        return self.iterations


@pytest.fixture
def endpoints():
    """The two candidate endpoints."""
    return (
        Endpoint(id=ENDPOINT1_ID, name=TEST_NAME_1, url=TEST_URL_1),
        Endpoint(id=ENDPOINT2_ID, name=TEST_NAME_2, url=TEST_URL_2),
    )


@pytest.fixture
def mock_transport():
    """Transport returning a fixed latency per URL and HTTP 200."""
    latencies = {TEST_URL_1: 100.0, TEST_URL_2: 130.0}
    transport = MagicMock()
    transport.issue_request.side_effect = lambda url, headers, timeout_sec: TransportResponse(
        status_code=HTTP_SUCCESS, duration_ms=latencies[url]
    )
    return transport


@pytest.fixture
def short_stages():
    """A single zero-length stage; enough for runners that ignore timing."""
    return [RampStage(duration=0, target=1)]
