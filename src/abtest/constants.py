"""Constants for the endpoint comparison."""


class ComparisonConstants:
    """Centralized defaults for comparison configuration."""
    ENDPOINT1_ID = "endpoint1"
    ENDPOINT2_ID = "endpoint2"
    ENDPOINT1_NAME = "Test"
    ENDPOINT2_NAME = "Baseline"

    DEFAULT_STAGES = [
        {"duration": "30s", "target": 10},
        {"duration": "2m", "target": 10},
        {"duration": "30s", "target": 0},
    ]
    DEFAULT_TIMEOUT = 30  # seconds
    DEFAULT_ITERATION_PAUSE = 1  # seconds
    DEFAULT_TICK = 0.1  # seconds between worker count adjustments

    AVG_WEIGHT = 0.7
    MEDIAN_WEIGHT = 0.3
    SIGNIFICANCE_THRESHOLD_PERCENT = 2.0
    MEDIAN_BUCKET_WIDTH_MS = 1.0

    MAX_P95_MS = 1500.0
    MAX_ERROR_RATE = 0.1

    REPORT_WIDTH = 66
    VALUE_WIDTH = 10
    BANNER_CHAR = "═"

    LATENCY_UNIT = "ms"
    PERCENT_UNIT = "%"

    EXIT_PASS = 0
    EXIT_THRESHOLD_BREACH = 1
    EXIT_RUN_FAILED = 2
