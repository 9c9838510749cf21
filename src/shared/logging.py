import logging
import sys
from typing import Dict, Optional


class LoggingManager:
    """Manager for logging setup and logger retrieval."""

    @classmethod
    def setup_logging(cls, level: str = "INFO", library_log_levels: Optional[Dict[str, str]] = None) -> None:
        """Setup logging for a comparison run.

        Log records go to stderr so the text report on stdout stays clean.
        Worker threads are named per endpoint, so the thread name is included.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            library_log_levels: Per-library levels for noisy dependencies
        """
        numeric_level = getattr(logging, level.upper(), logging.INFO)

        formatter = logging.Formatter(
            fmt="%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        handler.setLevel(numeric_level)

        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)
        root_logger.addHandler(handler)

        # urllib3 logs every pooled connection at DEBUG
        for logger_name, library_level in (library_log_levels or {}).items():
            logging.getLogger(logger_name).setLevel(getattr(logging, library_level.upper(), logging.WARNING))

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return the named logger."""
        return logging.getLogger(name)
