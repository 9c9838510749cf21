"""Unit tests for result export and reload."""

import json

import pytest

from src.abtest.exceptions import ResultLoadError
from src.abtest.models import Sample
from src.abtest.result_exporter import ResultExporter
from tests.test_const import ENDPOINT1_ID, ENDPOINT2_ID


class TestSummaryExport:
    """Test the JSON summary document."""

    def test_save_and_load(self, tmp_path):
        """Test the document is written as indented JSON and read back unchanged."""
        summary = {"endpoint1": {"avgResponseTime": "12.34ms"}, "winner": "Test", "winnerReason": "═ ok"}
        path = tmp_path / "summary.json"

        ResultExporter.save_summary(summary, path)

        assert path.read_text(encoding="utf-8").startswith("{\n  ")
        assert ResultExporter.load_summary(path) == summary

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ResultLoadError):
            ResultExporter.load_summary(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ResultLoadError):
            ResultExporter.load_summary(path)


class TestSamplesExport:
    """Test the raw sample CSV."""

    def test_save_and_load(self, tmp_path):
        """Test samples keep endpoint, latency and outcome."""
        samples = [
            Sample(ENDPOINT1_ID, 10.5, True),
            Sample(ENDPOINT2_ID, 30000.0, False),
            Sample(ENDPOINT1_ID, 11.25, True),
        ]
        path = tmp_path / "samples.csv"

        ResultExporter.save_samples_to_csv(samples, path)

        assert path.read_text().splitlines()[0] == "endpoint_id,latency_ms,success"
        assert ResultExporter.load_samples_from_csv(path) == samples

    def test_empty_samples_write_header_only(self, tmp_path):
        path = tmp_path / "samples.csv"
        ResultExporter.save_samples_to_csv([], path)

        assert path.read_text().strip() == "endpoint_id,latency_ms,success"
        assert ResultExporter.load_samples_from_csv(path) == []

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "samples.csv"
        path.write_text("endpoint_id,latency_ms\nendpoint1,1.0\n")
        with pytest.raises(ResultLoadError, match="success"):
            ResultExporter.load_samples_from_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResultLoadError):
            ResultExporter.load_samples_from_csv(tmp_path / "missing.csv")
