"""Generates a latency comparison chart for the two endpoints."""
import logging
from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .models import ComparisonResult


# Configure logging
logger = logging.getLogger(__name__)

CHART_METRICS = {
    "Avg": "avg_latency_ms",
    "Median": "median_latency_ms",
    "P95": "p95_latency_ms",
    "Max": "max_latency_ms",
}


class VisualizationGenerator:
    """Generates visualizations from comparison results."""

    def plot_comparison(self, result: ComparisonResult, output_path: Union[Path, str]) -> None:
        """
        Save a grouped bar chart of avg/median/p95/max latency per endpoint.

        Args:
            result: Completed comparison.
            output_path: Path to save the PNG.
        """
        rows = []
        for summary in (result.summary1, result.summary2):
            for metric, attribute in CHART_METRICS.items():
                rows.append({
                    "endpoint": summary.label,
                    "metric": metric,
                    "latency_ms": getattr(summary, attribute),
                })
        df = pd.DataFrame(rows)

        fig, ax = plt.subplots(figsize=(10, 6))
        sns.barplot(data=df, x="metric", y="latency_ms", hue="endpoint", ax=ax)
        ax.set_title(f"Latency Comparison - Winner: {result.verdict.winner_label}")
        ax.set_xlabel("Metric")
        ax.set_ylabel("Latency (ms)")
        ax.grid(True, axis="y", alpha=0.3)

        # Add values on top of bars
        for container in ax.containers:
            ax.bar_label(container, fmt="%.0f", fontsize=8)

        fig.text(0.5, 0.01, result.verdict.reason, ha="center", va="bottom", fontsize=9)
        plt.tight_layout(rect=(0, 0.05, 1, 1))
        plt.savefig(output_path)
        plt.close(fig)
        logger.info(f"Graph saved: {output_path}")
