"""Benchmark stats aggregation and README rendering."""

from .aggregate import StatsAggregator, stats_frame, save_aggregated_stats
from .render_md import render_readme, write_readme

__all__ = [
    "StatsAggregator",
    "stats_frame",
    "save_aggregated_stats",
    "render_readme",
    "write_readme",
]
