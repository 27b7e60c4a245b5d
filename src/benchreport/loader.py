"""Load benchmark results, repository stats and README templates."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from benchreport.config import ReportConfig, ReportPaths

logger = logging.getLogger(__name__)

CONTEXTS = ("Debug", "Release")


@dataclass
class StarsEntry:
    """Repository popularity figures for one library."""

    stars: int
    forks: int
    last_update: str

    @classmethod
    def from_dict(cls, data: dict) -> "StarsEntry":
        """Create StarsEntry from a stats.json entry."""
        return cls(
            stars=data["stars"],
            forks=data["forks"],
            last_update=str(data["lastUpdate"]),
        )


def benchmark_key(
    app: str,
    library_id: str,
    context: Optional[str] = None,
    prefix: str = "../benchmark",
) -> str:
    """Build the benchmarkData key of an (app, library[, context]) record.

    Args:
        app: Benchmarked application id
        library_id: Library id
        context: "Debug", "Release" or None for build-level records
        prefix: Directory prefix used by the benchmark runner

    Returns:
        Key such as "../benchmark/calculator/tauri/Release"
    """
    for label, value in (("app", app), ("library", library_id)):
        if not value or "/" in value:
            raise ValueError(f"Invalid {label} id for benchmark key: {value!r}")

    if context is not None and context not in CONTEXTS:
        raise ValueError(f"context must be one of {CONTEXTS} or None, got {context!r}")

    parts = [prefix, app, library_id]
    if context is not None:
        parts.append(context)
    return "/".join(parts)


class BenchmarkData:
    """Typed access to the parsed benchmarks.json document."""

    def __init__(self, raw: Dict[str, Any], config: ReportConfig):
        self.raw = raw
        self.config = config

    def has_architecture(self, architecture_id: str) -> bool:
        """Whether any benchmark was recorded for this architecture."""
        return self.raw.get(architecture_id) is not None

    def record(
        self,
        architecture_id: str,
        app: str,
        library_id: str,
        context: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Return the raw benchmark record, or None when it was not recorded."""
        if app not in self.config.apps:
            raise ValueError(f"Unknown app: {app}")
        if library_id not in self.config.libraries:
            raise ValueError(f"Unknown library: {library_id}")

        if not self.has_architecture(architecture_id):
            return None

        key = benchmark_key(app, library_id, context, prefix=self.config.benchmark_key_prefix)
        benchmark_data = self.raw[architecture_id].get("benchmarkData") or {}
        return benchmark_data.get(key)


@dataclass
class ReportInputs:
    """Everything read from disk for one report run."""

    benchmarks: BenchmarkData
    stars: Dict[str, StarsEntry]
    template_begin: str
    template_end: str


def load_json(path: Path) -> Any:
    """Read and parse a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"JSON input not found: {path}")

    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_text(path: Path) -> str:
    """Read a text file verbatim."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template not found: {path}")

    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def load_inputs(config: ReportConfig, paths: Optional[ReportPaths] = None) -> ReportInputs:
    """Load every report input.

    Args:
        config: Report configuration
        paths: Resolved input paths (defaults to config.paths)

    Returns:
        ReportInputs ready for aggregation and rendering
    """
    paths = paths or config.paths

    raw_benchmarks = load_json(paths.benchmarks)
    logger.info(f"Loaded benchmarks for {len(raw_benchmarks)} architectures from {paths.benchmarks}")

    raw_stats = load_json(paths.stats)
    # Only configured libraries are parsed; missing ones fail at render time
    stars = {
        library_id: StarsEntry.from_dict(raw_stats[library_id])
        for library_id in config.libraries
        if library_id in raw_stats
    }
    logger.info(f"Loaded repository stats for {len(stars)} libraries from {paths.stats}")

    template_begin = load_text(paths.template_begin)
    template_end = load_text(paths.template_end)
    logger.info(f"Loaded templates {paths.template_begin.name} and {paths.template_end.name}")

    return ReportInputs(
        benchmarks=BenchmarkData(raw_benchmarks, config),
        stars=stars,
        template_begin=template_begin,
        template_end=template_end,
    )
