# Entry point for an endpoint A/B comparison run
# Endpoints, credentials and the ramp profile come from AB_COMPARE_* environment
# variables or config.json

import sys

from pydantic import ValidationError

from src.abtest import ComparisonConstants, ComparisonExecutionError, ComparisonRunner, ConfigurationError
from src.shared.config import Config
from src.shared.logging import LoggingManager


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    # Chart generation can be skipped on headless CI agents
    plot = not any(arg.lower() in ['--no-plot', '--no-chart'] for arg in argv)

    try:
        config = Config()
    except ValidationError as e:
        LoggingManager.setup_logging()
        LoggingManager.get_logger(__name__).error(f"Invalid configuration: {e}")
        return ComparisonConstants.EXIT_RUN_FAILED

    LoggingManager.setup_logging(config.log_level, config.library_log_levels)
    logger = LoggingManager.get_logger(__name__)

    try:
        runner = ComparisonRunner(config, plot=plot)
        result = runner.run()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return ComparisonConstants.EXIT_RUN_FAILED
    except ComparisonExecutionError:
        return ComparisonConstants.EXIT_RUN_FAILED

    return ComparisonRunner.exit_code(result)


if __name__ == "__main__":
    sys.exit(main())
