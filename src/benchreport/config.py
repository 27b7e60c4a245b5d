"""Configuration management for benchreport.

Static report configuration (libraries, architectures, apps, footnotes,
requested benchmarks) is loaded from configs/report.yaml. Env vars can point
at another YAML file or another working directory.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

import yaml
from dotenv import load_dotenv

load_dotenv()

# Root directories
PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = PROJECT_ROOT / "configs"

DEFAULT_SOURCE_URL_TEMPLATE = (
    "https://github.com/Elanis/web-to-desktop-framework-comparison/tree/main/benchmark/{app}/"
)


@dataclass
class Library:
    """A benchmarked library, one column of every table."""

    id: str
    name: str
    url: str


@dataclass
class Architecture:
    """A target platform, one row of every table."""

    id: str
    name: str


@dataclass
class CustomMessage:
    """Footnote replacing a stat cell for an (app, library) pair."""

    key: str
    value: str


@dataclass
class ReportPaths:
    """Input and output files, relative to the working directory."""

    benchmarks: Path = Path("benchmarks.json")
    stats: Path = Path("stats.json")
    template_begin: Path = Path("README.template.begin.md")
    template_end: Path = Path("README.template.end.md")
    output: Path = Path("../README.md")

    def resolve(self, workdir: Path) -> "ReportPaths":
        """Return a copy with every relative path anchored at workdir."""
        workdir = Path(workdir)
        return ReportPaths(
            benchmarks=workdir / self.benchmarks,
            stats=workdir / self.stats,
            template_begin=workdir / self.template_begin,
            template_end=workdir / self.template_end,
            output=workdir / self.output,
        )


@dataclass
class ReportConfig:
    """Report configuration.

    Dict ordering matters: `libraries` defines the column order and
    `architectures` the row order of every table.
    """

    apps: List[str]
    architectures: List[Architecture]
    libraries: Dict[str, Library]
    custom_messages: Dict[str, Dict[str, CustomMessage]] = field(default_factory=dict)
    requested_architectures: Dict[str, Dict[str, str]] = field(default_factory=dict)
    source_url_template: str = DEFAULT_SOURCE_URL_TEMPLATE
    benchmark_key_prefix: str = "../benchmark"
    paths: ReportPaths = field(default_factory=ReportPaths)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if not self.libraries:
            raise ValueError("At least one library must be configured")

        if not self.architectures:
            raise ValueError("At least one architecture must be configured")

        architecture_ids = [arch.id for arch in self.architectures]
        if len(set(architecture_ids)) != len(architecture_ids):
            raise ValueError(f"Duplicate architecture ids: {architecture_ids}")

        if len(set(self.apps)) != len(self.apps):
            raise ValueError(f"Duplicate apps: {self.apps}")

        for app, messages in self.custom_messages.items():
            if app not in self.apps:
                import warnings
                warnings.warn(f"Custom messages configured for unknown app '{app}'")
            for library_id in messages:
                if library_id not in self.libraries:
                    import warnings
                    warnings.warn(
                        f"Custom message for app '{app}' references unknown library '{library_id}'"
                    )

        for architecture_id, links in self.requested_architectures.items():
            if architecture_id not in architecture_ids:
                import warnings
                warnings.warn(f"Requested links configured for unknown architecture '{architecture_id}'")
            for library_id in links:
                if library_id not in self.libraries:
                    import warnings
                    warnings.warn(
                        f"Requested link for '{architecture_id}' references unknown library '{library_id}'"
                    )

    def custom_message(self, app: str, library_id: str) -> Optional[CustomMessage]:
        """Footnote overriding the (app, library) cell, if any."""
        return self.custom_messages.get(app, {}).get(library_id)

    def requested_url(self, architecture_id: str, library_id: str) -> Optional[str]:
        """Link to the benchmark request for (architecture, library), if any."""
        return self.requested_architectures.get(architecture_id, {}).get(library_id)

    def source_url(self, app: str) -> str:
        """Link to the sources of a benchmarked app."""
        return self.source_url_template.format(app=app)


def _find_config_file() -> Path:
    """Find report.yaml config file."""
    env_path = os.getenv("BENCHREPORT_CONFIG")
    if env_path:
        return Path(env_path)

    possible_paths = [
        CONFIG_DIR / "report.yaml",
        Path("configs/report.yaml"),
        Path("../configs/report.yaml"),
    ]

    for config_path in possible_paths:
        if config_path.exists():
            return config_path

    raise FileNotFoundError("Could not find configs/report.yaml")


def config_from_dict(data: Dict[str, Any]) -> ReportConfig:
    """Build a ReportConfig from the parsed YAML mapping.

    Ids are converted to str, so unquoted numeric ids such as `- 2048` work.
    """
    libraries = {
        str(library_id): Library(id=str(library_id), name=entry["name"], url=entry["url"])
        for library_id, entry in (data.get("libraries") or {}).items()
    }

    architectures = [
        Architecture(id=str(entry["id"]), name=entry["name"])
        for entry in (data.get("architectures") or [])
    ]

    custom_messages = {
        str(app): {
            str(library_id): CustomMessage(key=str(msg["key"]), value=msg["value"])
            for library_id, msg in messages.items()
        }
        for app, messages in (data.get("custom_messages") or {}).items()
    }

    requested_architectures = {
        str(architecture_id): {str(library_id): url for library_id, url in links.items()}
        for architecture_id, links in (data.get("requested_architectures") or {}).items()
    }

    paths_data = data.get("paths") or {}
    paths = ReportPaths(**{name: Path(value) for name, value in paths_data.items()})

    return ReportConfig(
        apps=[str(app) for app in data.get("apps") or []],
        architectures=architectures,
        libraries=libraries,
        custom_messages=custom_messages,
        requested_architectures=requested_architectures,
        source_url_template=data.get("source_url_template", DEFAULT_SOURCE_URL_TEMPLATE),
        benchmark_key_prefix=data.get("benchmark_key_prefix", "../benchmark"),
        paths=paths,
    )


def load_report_config(config_path: Optional[Path] = None) -> ReportConfig:
    """Load report configuration from YAML.

    Args:
        config_path: Explicit YAML file. Defaults to BENCHREPORT_CONFIG or
            configs/report.yaml.

    Returns:
        Validated ReportConfig
    """
    if config_path is None:
        config_path = _find_config_file()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return config_from_dict(data)


def default_workdir() -> Path:
    """Directory relative input/output paths are resolved from."""
    return Path(os.getenv("BENCHREPORT_WORKDIR", "."))
