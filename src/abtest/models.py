"""Data models for the endpoint comparison."""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Convert a stage duration to seconds.

    Accepts plain numbers (seconds) or k6-style strings such as "30s", "2m",
    "1h" and compound forms like "1m30s".
    """
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"Invalid duration: {value!r}")

    text = value.strip().lower()
    if not text:
        raise ValueError("Duration must not be empty")
    try:
        return float(text)
    except ValueError:
        pass

    position = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            raise ValueError(f"Invalid duration: {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if position != len(text):
        raise ValueError(f"Invalid duration: {value!r}")
    return total


class RampStage(BaseModel):
    """A (duration, target-concurrency) pair of the load profile."""
    duration: float = Field(ge=0)
    target: int = Field(ge=0)

    @field_validator("duration", mode="before")
    @classmethod
    def _parse_duration(cls, value):
        return parse_duration(value)


class MedianSource(str, Enum):
    """How the median of an endpoint's latencies is obtained."""
    EXACT = "exact"
    BUCKETED = "bucketed"


class Classification(str, Enum):
    """Outcome category of a comparison."""
    CLEAR = "clear"
    MARGINAL = "marginal"
    MIXED = "mixed"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Endpoint:
    """Identity, display name and URL of a candidate endpoint."""
    id: str
    name: str
    url: str


@dataclass(frozen=True)
class Sample:
    """Outcome of one completed or timed-out request."""
    endpoint_id: str
    latency_ms: float
    success: bool


@dataclass(frozen=True)
class TransportResponse:
    """Result of one HTTP request. status_code is None on transport failure."""
    status_code: Optional[int]
    duration_ms: float

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300


@dataclass(frozen=True)
class EndpointSummary:
    """Statistics reduced from every sample recorded for one endpoint."""
    endpoint_id: str
    label: str
    request_count: int = 0
    avg_latency_ms: float = 0.0
    median_latency_ms: float = 0.0
    min_latency_ms: float = 0.0
    max_latency_ms: float = 0.0
    p90_latency_ms: float = 0.0
    p95_latency_ms: float = 0.0
    error_rate: float = 0.0


@dataclass(frozen=True)
class Verdict:
    """Which endpoint performed better, why, and by how much."""
    winner_label: str
    reason: str
    avg_diff_ms: float
    avg_diff_percent: float
    classification: Classification
    winner_endpoint_id: str


@dataclass(frozen=True)
class ThresholdResult:
    """Pass/fail outcome of a single threshold for one endpoint."""
    endpoint_id: str
    metric: str
    limit: float
    observed: float
    passed: bool


@dataclass
class ComparisonResult:
    """Everything produced by one A/B run."""
    endpoint1: Endpoint
    endpoint2: Endpoint
    summary1: EndpointSummary
    summary2: EndpointSummary
    verdict: Verdict
    thresholds: List[ThresholdResult] = field(default_factory=list)
    samples: List[Sample] = field(default_factory=list)
