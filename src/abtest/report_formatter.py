"""Renders summaries and the verdict as a JSON-ready dict and a console report."""
from typing import Any, Dict, List

from .constants import ComparisonConstants
from .models import Endpoint, EndpointSummary, Verdict


def format_latency(value: float) -> str:
    return f"{value:.2f}{ComparisonConstants.LATENCY_UNIT}"


def format_percent(value: float) -> str:
    return f"{value:.1f}{ComparisonConstants.PERCENT_UNIT}"


def parse_value(text: str) -> float:
    """Parse a unit-decorated value such as "12.34ms" or "5.0%" back to a float."""
    text = text.strip()
    for unit in (ComparisonConstants.LATENCY_UNIT, ComparisonConstants.PERCENT_UNIT):
        if text.endswith(unit):
            text = text[:-len(unit)]
            break
    return float(text)


class ReportFormatter:
    """Produces the structured comparison record and the fixed-width text report."""

    def __init__(self, width: int = ComparisonConstants.REPORT_WIDTH,
                 value_width: int = ComparisonConstants.VALUE_WIDTH):
        self.width = width
        self.value_width = value_width

    def endpoint_record(self, endpoint: Endpoint, summary: EndpointSummary) -> Dict[str, Any]:
        return {
            "url": endpoint.url,
            "name": endpoint.name,
            "requests": summary.request_count,
            "avgResponseTime": format_latency(summary.avg_latency_ms),
            "medianResponseTime": format_latency(summary.median_latency_ms),
            "minResponseTime": format_latency(summary.min_latency_ms),
            "maxResponseTime": format_latency(summary.max_latency_ms),
            "p95ResponseTime": format_latency(summary.p95_latency_ms),
            "errorRate": format_percent(summary.error_rate * 100),
        }

    def to_dict(self, endpoint1: Endpoint, summary1: EndpointSummary,
                endpoint2: Endpoint, summary2: EndpointSummary, verdict: Verdict) -> Dict[str, Any]:
        """
        Build the machine-readable comparison record.

        Latency values are rendered as "<2 decimals>ms" strings and
        percentages as "<1 decimal>%" strings.
        """
        return {
            "endpoint1": self.endpoint_record(endpoint1, summary1),
            "endpoint2": self.endpoint_record(endpoint2, summary2),
            "comparison": {
                "avgDifference": format_latency(verdict.avg_diff_ms),
                "avgDifferencePercent": format_percent(verdict.avg_diff_percent),
            },
            "winner": verdict.winner_label,
            "winnerReason": verdict.reason,
        }

    def render_text(self, endpoint1: Endpoint, summary1: EndpointSummary,
                    endpoint2: Endpoint, summary2: EndpointSummary, verdict: Verdict) -> str:
        banner = ComparisonConstants.BANNER_CHAR * self.width
        label_width = self.width - len(" Winner: ")
        lines = [
            banner,
            "PERFORMANCE COMPARISON",
            banner,
            *self._endpoint_block(endpoint1, summary1),
            banner,
            *self._endpoint_block(endpoint2, summary2),
            banner,
            " Comparison:",
            f"   Avg Difference:    {self._value(verdict.avg_diff_ms)}ms ({format_percent(verdict.avg_diff_percent)})",
            banner,
            self._truncate(f" Winner: {verdict.winner_label.ljust(label_width)}"),
            self._truncate(f" Reason: {verdict.reason.ljust(label_width)}"),
            banner,
        ]
        return "\n".join(lines) + "\n"

    def _endpoint_block(self, endpoint: Endpoint, summary: EndpointSummary) -> List[str]:
        return [
            self._truncate(f" {endpoint.name}: {endpoint.url}"),
            self._line("Requests", str(summary.request_count).rjust(self.value_width)),
            self._line("Avg Response Time", self._value(summary.avg_latency_ms), "ms"),
            self._line("Median", self._value(summary.median_latency_ms), "ms"),
            self._line("Min", self._value(summary.min_latency_ms), "ms"),
            self._line("Max", self._value(summary.max_latency_ms), "ms"),
            self._line("Error Rate", self._value(summary.error_rate * 100), "%"),
        ]

    def _value(self, value: float) -> str:
        return f"{value:.2f}".rjust(self.value_width)

    def _line(self, label: str, value: str, suffix: str = "") -> str:
        return self._truncate(f"   {label}: {value}{suffix}")

    def _truncate(self, text: str) -> str:
        if len(text) <= self.width:
            return text
        if self.width <= 3:
            return text[:self.width]
        return text[:self.width - 3] + "..."
