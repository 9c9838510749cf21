"""Endpoint A/B comparison package initialization."""
from .models import (
    Classification,
    ComparisonResult,
    Endpoint,
    EndpointSummary,
    MedianSource,
    RampStage,
    Sample,
    ThresholdResult,
    TransportResponse,
    Verdict,
)
from .constants import ComparisonConstants
from .exceptions import ComparisonExecutionError, ConfigurationError, ResultLoadError
from .metric_recorder import MetricRecorder
from .metrics_aggregator import MetricsAggregator
from .comparison_engine import ComparisonEngine
from .report_formatter import ReportFormatter
from .threshold_checker import ThresholdChecker
from .request_session_manager import RequestSessionManager, build_basic_auth_header
from .request_executor import RequestsTransport, Transport
from .scenario_runner import RampingScenarioRunner, ScenarioRunner
from .result_exporter import ResultExporter
from .visualization_generator import VisualizationGenerator
from .endpoint_comparison import EndpointComparison
from .runner import ComparisonRunner

__all__ = [
    'Classification',
    'ComparisonResult',
    'Endpoint',
    'EndpointSummary',
    'MedianSource',
    'RampStage',
    'Sample',
    'ThresholdResult',
    'TransportResponse',
    'Verdict',
    'ComparisonConstants',
    'ComparisonExecutionError',
    'ConfigurationError',
    'ResultLoadError',
    'MetricRecorder',
    'MetricsAggregator',
    'ComparisonEngine',
    'ReportFormatter',
    'ThresholdChecker',
    'RequestSessionManager',
    'build_basic_auth_header',
    'RequestsTransport',
    'Transport',
    'RampingScenarioRunner',
    'ScenarioRunner',
    'ResultExporter',
    'VisualizationGenerator',
    'EndpointComparison',
    'ComparisonRunner',
]
