"""Shared fixtures: a three-library config and matching benchmark inputs."""

import json

import pytest
import yaml

from benchreport.config import Architecture, CustomMessage, Library, ReportConfig
from benchreport.loader import BenchmarkData, ReportInputs, StarsEntry

TEMPLATE_BEGIN = (
    "# Web to desktop framework comparison\n"
    "\n"
    "| | Electron | Tauri | Wails |\n"
    "|---|---|---|---|\n"
    "| **Github stars** | 0 | 0 | 0 |\n"
    "| **Forks** | 0 | 0 | 0 |\n"
    "| **Last Update** | - | - | - |\n"
)

TEMPLATE_END = "\n# Contributing\n\nPRs welcome.\n"


@pytest.fixture
def report_config():
    return ReportConfig(
        apps=["calculator", "file-explorer"],
        architectures=[
            Architecture(id="windows", name="Windows"),
            Architecture(id="ubuntu", name="Linux"),
            Architecture(id="macos", name="MacOS"),
        ],
        libraries={
            "electron": Library("electron", "Electron", "https://github.com/electron/electron"),
            "tauri": Library("tauri", "Tauri", "https://github.com/tauri-apps/tauri"),
            "wails": Library("wails", "Wails", "https://github.com/wailsapp/wails"),
        },
        custom_messages={
            "file-explorer": {"wails": CustomMessage(key="1", value="Not supported")},
        },
        requested_architectures={
            "ubuntu": {"wails": "https://example.com/issues/2"},
            "macos": {"tauri": "https://example.com/issues/1"},
        },
        source_url_template="https://example.com/benchmark/{app}/",
    )


@pytest.fixture
def raw_benchmarks():
    return {
        "windows": {
            "benchmarkData": {
                "../benchmark/calculator/electron": {"buildSize": 2_500_000, "buildTime": 1234.4},
                "../benchmark/calculator/tauri": {"buildSize": 1500, "buildTime": 0},
                "../benchmark/calculator/electron/Debug": {
                    "benchmarks": [
                        {"memoryUsage": {"med": 100, "sysMed": 1000}, "startTime": 5},
                        {"memoryUsage": {"med": 200, "sysMed": 2000}, "startTime": 10},
                        {"memoryUsage": {"med": None}, "startTime": 200},
                    ]
                },
                "../benchmark/calculator/electron/Release": {
                    "benchmarks": [
                        {"memoryUsage": {"med": 5000, "sysMed": 6000}, "startTime": 42},
                    ]
                },
                "../benchmark/file-explorer/wails": {"buildSize": 999, "buildTime": 10},
                "../benchmark/file-explorer/wails/Release": {
                    "benchmarks": [
                        {"memoryUsage": {"med": 4000, "sysMed": 4000}, "startTime": 30},
                    ]
                },
            }
        },
        "ubuntu": {
            "benchmarkData": {
                "../benchmark/calculator/tauri/Release": {
                    "benchmarks": [
                        {"memoryUsage": {"med": 3000, "sysMed": 4000}, "startTime": 15.6},
                    ]
                },
            }
        },
    }


@pytest.fixture
def stars_data():
    return {
        "electron": {"stars": 113456, "forks": 15000, "lastUpdate": "2024-01-01"},
        "tauri": {"stars": 12345, "forks": 950, "lastUpdate": "2024-02-01"},
        "wails": {"stars": 24000, "forks": 1049, "lastUpdate": "2024-03-01"},
    }


@pytest.fixture
def benchmark_data(raw_benchmarks, report_config):
    return BenchmarkData(raw_benchmarks, report_config)


@pytest.fixture
def report_inputs(benchmark_data, stars_data):
    return ReportInputs(
        benchmarks=benchmark_data,
        stars={library_id: StarsEntry.from_dict(entry) for library_id, entry in stars_data.items()},
        template_begin=TEMPLATE_BEGIN,
        template_end=TEMPLATE_END,
    )


@pytest.fixture
def workdir(tmp_path, raw_benchmarks, stars_data):
    """Runner directory with every input file; the README lands in its parent."""
    runner = tmp_path / "runner"
    runner.mkdir()
    (runner / "benchmarks.json").write_text(json.dumps(raw_benchmarks), encoding="utf-8")
    (runner / "stats.json").write_text(json.dumps(stars_data), encoding="utf-8")
    (runner / "README.template.begin.md").write_text(TEMPLATE_BEGIN, encoding="utf-8")
    (runner / "README.template.end.md").write_text(TEMPLATE_END, encoding="utf-8")
    return runner


@pytest.fixture
def config_file(tmp_path):
    """YAML equivalent of report_config."""
    data = {
        "apps": ["calculator", "file-explorer"],
        "architectures": [
            {"id": "windows", "name": "Windows"},
            {"id": "ubuntu", "name": "Linux"},
            {"id": "macos", "name": "MacOS"},
        ],
        "libraries": {
            "electron": {"name": "Electron", "url": "https://github.com/electron/electron"},
            "tauri": {"name": "Tauri", "url": "https://github.com/tauri-apps/tauri"},
            "wails": {"name": "Wails", "url": "https://github.com/wailsapp/wails"},
        },
        "custom_messages": {
            "file-explorer": {"wails": {"key": 1, "value": "Not supported"}},
        },
        "requested_architectures": {
            "ubuntu": {"wails": "https://example.com/issues/2"},
            "macos": {"tauri": "https://example.com/issues/1"},
        },
        "source_url_template": "https://example.com/benchmark/{app}/",
    }
    path = tmp_path / "report.yaml"
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path
