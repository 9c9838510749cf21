"""Handles exporting comparison results to JSON and CSV."""
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from .exceptions import ResultLoadError
from .models import Sample


# Configure logging
logger = logging.getLogger(__name__)

SAMPLE_COLUMNS = ["endpoint_id", "latency_ms", "success"]


class ResultExporter:
    """Handles exporting comparison results to various formats."""

    @staticmethod
    def save_summary(summary: Dict[str, Any], output_path: Union[Path, str]) -> None:
        """
        Save the structured comparison record as indented JSON.

        Args:
            summary: Record produced by ReportFormatter.to_dict.
            output_path: Path to save JSON.
        """
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)
        logger.info(f"Summary saved: {output_path}")

    @staticmethod
    def load_summary(input_path: Union[Path, str]) -> Dict[str, Any]:
        """
        Load a structured comparison record without running a new comparison.

        Raises:
            ResultLoadError: If the file is missing or not valid JSON.
        """
        try:
            with open(input_path, "r", encoding="utf-8") as f:
                summary = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load summary: {e}")
            raise ResultLoadError(f"Unable to load summary from {input_path}") from e
        logger.info(f"Summary loaded: {input_path}")
        return summary

    @staticmethod
    def save_samples_to_csv(samples: List[Sample], output_path: Union[Path, str]) -> None:
        """
        Save raw per-request samples to CSV for spreadsheet analysis.

        Args:
            samples: Recorded samples of both endpoints.
            output_path: Path to save samples CSV.
        """
        if not samples:
            logger.warning("No samples available for CSV export")
        df = pd.DataFrame([asdict(sample) for sample in samples], columns=SAMPLE_COLUMNS)
        df.to_csv(output_path, index=False)
        logger.info(f"Samples saved to CSV: {output_path}")

    @staticmethod
    def load_samples_from_csv(input_path: Union[Path, str]) -> List[Sample]:
        """
        Load raw samples back from CSV.

        Raises:
            ResultLoadError: If the file is missing or lacks the expected columns.
        """
        try:
            df = pd.read_csv(input_path)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Failed to load samples: {e}")
            raise ResultLoadError(f"Unable to load samples from {input_path}") from e

        missing = [column for column in SAMPLE_COLUMNS if column not in df.columns]
        if missing:
            raise ResultLoadError(f"Samples file {input_path} is missing columns: {', '.join(missing)}")

        samples = [
            Sample(endpoint_id=str(row["endpoint_id"]), latency_ms=float(row["latency_ms"]), success=bool(row["success"]))
            for _, row in df.iterrows()
        ]
        logger.info(f"Samples loaded from CSV: {input_path}")
        return samples
