import json
from pathlib import Path
from typing import Dict, Any, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.abtest.constants import ComparisonConstants
from src.abtest.models import MedianSource


class Config(BaseSettings):
    """Configuration settings for an endpoint A/B comparison run."""

    endpoint1_url: str = ""
    endpoint1_name: str = ComparisonConstants.ENDPOINT1_NAME
    endpoint2_url: str = ""
    endpoint2_name: str = ComparisonConstants.ENDPOINT2_NAME
    http_username: str = ""
    http_password: str = ""

    # k6-style stage list, validated into RampStage objects by the runner
    stages: List[Dict[str, Any]] = Field(
        default_factory=lambda: [dict(stage) for stage in ComparisonConstants.DEFAULT_STAGES]
    )
    request_timeout_sec: float = ComparisonConstants.DEFAULT_TIMEOUT
    iteration_pause_sec: float = ComparisonConstants.DEFAULT_ITERATION_PAUSE

    avg_weight: float = ComparisonConstants.AVG_WEIGHT
    median_weight: float = ComparisonConstants.MEDIAN_WEIGHT
    significance_threshold_percent: float = ComparisonConstants.SIGNIFICANCE_THRESHOLD_PERCENT
    max_error_rate_gap: Optional[float] = None
    median_source: str = MedianSource.EXACT.value
    median_bucket_width_ms: float = ComparisonConstants.MEDIAN_BUCKET_WIDTH_MS

    max_p95_ms: float = ComparisonConstants.MAX_P95_MS
    max_error_rate: float = ComparisonConstants.MAX_ERROR_RATE

    report_width: int = ComparisonConstants.REPORT_WIDTH
    output_dir: Path = Path("results")
    summary_file: str = "summary.json"
    samples_file: str = "samples.csv"
    chart_file: str = "comparison.png"

    log_level: str = "INFO"
    library_log_levels: Dict[str, str] = {
        "urllib3": "WARNING",
        "matplotlib": "WARNING",
    }

    model_config = SettingsConfigDict(
        env_prefix='AB_COMPARE_',
    )

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from config.json file."""
        config_path = Path("config.json")
        if config_path.exists():
            with open(config_path, 'r') as f:
                config = json.load(f)
                # Convert output_dir to Path if it's a string
                if "output_dir" in config:
                    config["output_dir"] = Path(config["output_dir"])
                return config
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Environment variables
        2. Init settings (kwargs passed to constructor)
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            env_settings,
            init_settings,
            json_source,
        )
