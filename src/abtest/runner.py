"""Comparison runner to orchestrate a full A/B run and manage output."""
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional
import logging

from pydantic import ValidationError

from .comparison_engine import ComparisonEngine
from .constants import ComparisonConstants
from .endpoint_comparison import EndpointComparison
from .exceptions import ComparisonExecutionError, ConfigurationError
from .metrics_aggregator import MetricsAggregator
from .models import ComparisonResult, Endpoint, MedianSource, RampStage
from .report_formatter import ReportFormatter
from .request_executor import RequestsTransport, Transport
from .request_session_manager import RequestSessionManager, build_basic_auth_header
from .result_exporter import ResultExporter
from .scenario_runner import RampingScenarioRunner
from .threshold_checker import ThresholdChecker
from .visualization_generator import VisualizationGenerator

if TYPE_CHECKING:
    from src.shared.config import Config


logger = logging.getLogger(__name__)


class ComparisonRunner:
    """Builds the comparison from configuration, runs it, and writes the outputs."""

    def __init__(self, config: "Config", transport: Optional[Transport] = None, plot: bool = True):
        self.config = config
        self.plot = plot
        self.endpoint1, self.endpoint2 = self.build_endpoints(config)
        self.stages = self.build_stages(config.stages)
        self.transport = transport or RequestsTransport(
            RequestSessionManager.create_session(pool_size=self.pool_size(self.stages))
        )
        self.formatter = ReportFormatter(width=config.report_width)
        self.result_exporter = ResultExporter()
        self.visualization_generator = VisualizationGenerator()

    @staticmethod
    def build_endpoints(config: "Config") -> List[Endpoint]:
        missing = [name for name, url in (("endpoint1_url", config.endpoint1_url),
                                          ("endpoint2_url", config.endpoint2_url)) if not url]
        if missing:
            raise ConfigurationError(f"Missing endpoint URL: {', '.join(missing)}")
        return [
            Endpoint(id=ComparisonConstants.ENDPOINT1_ID, name=config.endpoint1_name, url=config.endpoint1_url),
            Endpoint(id=ComparisonConstants.ENDPOINT2_ID, name=config.endpoint2_name, url=config.endpoint2_url),
        ]

    @staticmethod
    def build_stages(raw_stages: List[dict]) -> List[RampStage]:
        if not raw_stages:
            raise ConfigurationError("At least one ramp stage is required")
        try:
            return [RampStage(**stage) for stage in raw_stages]
        except (TypeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid ramp stage list: {e}") from e

    @staticmethod
    def peak_workers(stages: List[RampStage]) -> int:
        return max(stage.target for stage in stages)

    @classmethod
    def pool_size(cls, stages: List[RampStage]) -> int:
        # Both scenarios share one session and may target the same host
        return max(1, 2 * cls.peak_workers(stages))

    def build_comparison(self) -> EndpointComparison:
        config = self.config
        try:
            median_source = MedianSource(config.median_source)
        except ValueError as e:
            raise ConfigurationError(f"Unknown median source: {config.median_source}") from e
        if config.median_bucket_width_ms <= 0:
            raise ConfigurationError(f"median_bucket_width_ms must be positive, got {config.median_bucket_width_ms}")

        headers = {}
        if config.http_username or config.http_password:
            headers.update(build_basic_auth_header(config.http_username, config.http_password))

        return EndpointComparison(
            endpoint1=self.endpoint1,
            endpoint2=self.endpoint2,
            stages=self.stages,
            transport=self.transport,
            runner_factory=lambda name: RampingScenarioRunner(name=name),
            engine=ComparisonEngine(
                avg_weight=config.avg_weight,
                median_weight=config.median_weight,
                significance_threshold_percent=config.significance_threshold_percent,
                max_error_rate_gap=config.max_error_rate_gap,
            ),
            aggregator_factory=partial(MetricsAggregator, median_source=median_source,
                                       bucket_width_ms=config.median_bucket_width_ms),
            threshold_checker=ThresholdChecker(max_p95_ms=config.max_p95_ms, max_error_rate=config.max_error_rate),
            headers=headers,
            timeout_sec=config.request_timeout_sec,
            iteration_pause_sec=config.iteration_pause_sec,
        )

    def write_outputs(self, result: ComparisonResult, output_dir: Path) -> str:
        """Write summary JSON, samples CSV and chart; return the console report."""
        args = (result.endpoint1, result.summary1, result.endpoint2, result.summary2, result.verdict)
        self.result_exporter.save_summary(self.formatter.to_dict(*args), output_dir / self.config.summary_file)
        self.result_exporter.save_samples_to_csv(result.samples, output_dir / self.config.samples_file)
        if self.plot:
            self.visualization_generator.plot_comparison(result, output_dir / self.config.chart_file)
        return self.formatter.render_text(*args)

    def run(self) -> ComparisonResult:
        """Run the complete comparison process."""
        try:
            output_dir = Path(self.config.output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

            logger.info(f"Comparing {self.endpoint1.name} ({self.endpoint1.url}) "
                        f"against {self.endpoint2.name} ({self.endpoint2.url})")
            result = self.build_comparison().run()

            report = self.write_outputs(result, output_dir)
            print(report)

            logger.info("Comparison completed successfully!")
            return result

        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Comparison failed: {e}", stack_info=True)
            raise ComparisonExecutionError("Comparison run failed") from e
        finally:
            self.transport.close()

    @staticmethod
    def exit_code(result: ComparisonResult) -> int:
        if ThresholdChecker.all_passed(result.thresholds):
            return ComparisonConstants.EXIT_PASS
        return ComparisonConstants.EXIT_THRESHOLD_BREACH
