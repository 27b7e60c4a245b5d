"""Aggregate raw benchmark records into per-cell statistics."""

import logging
import math
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from benchreport.config import Architecture, Library
from benchreport.loader import CONTEXTS, BenchmarkData
from benchreport.report.formatting import js_round, number_to_string

logger = logging.getLogger(__name__)

StatKey = Tuple[str, str]
Stats = Dict[StatKey, Any]

METRICS = ("build_size", "build_time", "memory", "system_memory", "start_time")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def average_memory(runs: List[dict], field: str) -> int:
    """Floored mean of memoryUsage[field] over all runs.

    Runs without the sample count as 0 but stay in the divisor, so
    [100, 200, None] averages to 100.
    """
    if not runs:
        return 0

    samples = pd.Series(
        [(run.get("memoryUsage") or {}).get(field) or 0 for run in runs],
        dtype="float64",
    )
    return math.floor(samples.sum() / len(runs))


def median_start_time(runs: List[dict]) -> int:
    """Upper-middle startTime of the runs, rounded half up.

    Values are ordered by their decimal string form, so 100 sorts before 20.
    """
    start_times = sorted(
        (run.get("startTime") for run in runs if _is_number(run.get("startTime"))),
        key=number_to_string,
    )
    if start_times:
        return js_round(start_times[len(start_times) // 2])

    return 0


class StatsAggregator:
    """Compute stats maps for one (app, architecture) pair.

    Every method returns a dict keyed by (library_id, context). Libraries
    without data are left out rather than mapped to zero or None.
    """

    def __init__(self, data: BenchmarkData, libraries: Dict[str, Library]):
        self.data = data
        self.libraries = libraries

    def _build_stat(
        self,
        app: str,
        architecture_id: str,
        field: str,
        format_value: Callable[[Any], Any] = lambda x: x,
    ) -> Stats:
        if not self.data.has_architecture(architecture_id):
            logger.debug(f"No benchmarks recorded for {architecture_id}")
            return {}

        stats = {}
        for library_id in self.libraries:
            record = self.data.record(architecture_id, app, library_id)
            if not record or not record.get(field):
                continue

            stats[(library_id, "Release")] = format_value(record[field])

        return stats

    def _stat_by_context(
        self,
        app: str,
        architecture_id: str,
        summarize: Callable[[List[dict]], Any],
    ) -> Stats:
        if not self.data.has_architecture(architecture_id):
            logger.debug(f"No benchmarks recorded for {architecture_id}")
            return {}

        stats = {}
        for library_id in self.libraries:
            for context in CONTEXTS:
                record = self.data.record(architecture_id, app, library_id, context)
                if record is None or record.get("benchmarks") is None:
                    continue

                stats[(library_id, context)] = summarize(record["benchmarks"])

        return stats

    def build_size_stats(self, app: str, architecture_id: str) -> Stats:
        """Raw build size in bytes, Release track only."""
        return self._build_stat(app, architecture_id, "buildSize")

    def build_time_stats(self, app: str, architecture_id: str) -> Stats:
        """Build time rounded to the millisecond, Release track only."""
        return self._build_stat(app, architecture_id, "buildTime", js_round)

    def memory_stats(self, app: str, architecture_id: str) -> Stats:
        return self._stat_by_context(app, architecture_id, lambda runs: average_memory(runs, "med"))

    def system_memory_stats(self, app: str, architecture_id: str) -> Stats:
        return self._stat_by_context(app, architecture_id, lambda runs: average_memory(runs, "sysMed"))

    def start_time_stats(self, app: str, architecture_id: str) -> Stats:
        return self._stat_by_context(app, architecture_id, median_start_time)

    def stats(self, metric: str, app: str, architecture_id: str) -> Stats:
        """Dispatch on one of METRICS."""
        if metric not in METRICS:
            raise ValueError(f"metric must be one of {METRICS}, got {metric!r}")

        return getattr(self, f"{metric}_stats")(app, architecture_id)


def stats_frame(
    aggregator: StatsAggregator,
    apps: List[str],
    architectures: List[Architecture],
    metrics: Optional[List[str]] = None,
) -> pd.DataFrame:
    """Flatten every aggregated stat into a long-format DataFrame.

    Args:
        aggregator: Aggregator over the loaded benchmarks
        apps: Apps to include, in report order
        architectures: Architectures to include, in report order
        metrics: Subset of METRICS (defaults to all)

    Returns:
        DataFrame with columns app, architecture, metric, library, context, value
    """
    rows = []
    for app in apps:
        for architecture in architectures:
            for metric in metrics or METRICS:
                for (library_id, context), value in aggregator.stats(metric, app, architecture.id).items():
                    rows.append({
                        "app": app,
                        "architecture": architecture.id,
                        "metric": metric,
                        "library": library_id,
                        "context": context,
                        "value": value,
                    })

    return pd.DataFrame(rows, columns=["app", "architecture", "metric", "library", "context", "value"])


def save_aggregated_stats(stats_df: pd.DataFrame, output_dir: Path) -> Tuple[Path, Path]:
    """Save aggregated stats to CSV and JSON lines."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / "stats.csv"
    stats_df.to_csv(csv_file, index=False)

    jsonl_file = output_dir / "stats.jsonl"
    with open(jsonl_file, "w", encoding="utf-8") as f:
        for _, row in stats_df.iterrows():
            f.write(row.to_json(force_ascii=False) + "\n")

    logger.info(f"Aggregated {len(stats_df)} stats saved to {output_dir}")
    logger.info(f"  - CSV: {csv_file}")
    logger.info(f"  - JSONL: {jsonl_file}")
    return csv_file, jsonl_file
