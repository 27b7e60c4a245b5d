"""Render aggregated benchmark stats into the README markdown."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from benchreport.config import Architecture, ReportConfig
from benchreport.loader import ReportInputs, StarsEntry
from benchreport.report.aggregate import Stats, StatsAggregator
from benchreport.report.formatting import format_thousands, format_time, get_unit_from_memory

logger = logging.getLogger(__name__)


@dataclass
class MetricSection:
    """One table of an app block."""

    title: str
    metric: str
    format_stat: Callable[[Any], str]
    show_release_tag: bool = True


SECTIONS = [
    MetricSection("Build size  ", "build_size", get_unit_from_memory, show_release_tag=False),
    MetricSection("Build time  ", "build_time", format_time, show_release_tag=False),
    MetricSection(
        "Memory Usage - (Average of runs) Median of used memory for main process and children ones) ",
        "memory",
        get_unit_from_memory,
    ),
    MetricSection(
        "Memory Usage - (Average of runs) Median of difference between system measured "
        "free memory before execution and during execution)",
        "system_memory",
        get_unit_from_memory,
    ),
    MetricSection("Start duration  ", "start_time", format_time),
]

# Template line prefix -> (row label, value of a library's stats entry)
HEADER_ROWS = {
    "| **Github stars** |": ("Github stars", lambda entry: format_thousands(entry.stars)),
    "| **Forks** |": ("Forks", lambda entry: format_thousands(entry.forks)),
    "| **Last Update** |": ("Last Update", lambda entry: entry.last_update),
}


def _stars_entry(stars: Dict[str, StarsEntry], library_id: str) -> StarsEntry:
    if library_id not in stars:
        raise KeyError(f"No stats.json entry for library '{library_id}'")
    return stars[library_id]


def substitute_header(
    lines: List[str],
    template: str,
    library_ids: List[str],
    stars: Dict[str, StarsEntry],
) -> List[str]:
    """Copy the begin template, regenerating the stars/forks/last update rows."""
    for line in template.split("\n"):
        for prefix, (label, value_of) in HEADER_ROWS.items():
            if line.startswith(prefix):
                cells = "".join(
                    f"| {value_of(_stars_entry(stars, library_id))} " for library_id in library_ids
                )
                lines.append(f"| **{label}** {cells}|")
                break
        else:
            lines.append(line)

    return lines


def table_header(lines: List[str], config: ReportConfig) -> List[str]:
    """Blank line, library link row and centered separator row."""
    header = "|  |"
    separator = "|:---:|"
    for library in config.libraries.values():
        header += f" [{library.name}]({library.url}) |"
        separator += ":---:|"

    lines.extend(["", header, separator])
    return lines


def _format_stat_value(value: Any, format_stat: Callable[[Any], str], tag: Optional[str]) -> str:
    if value == "N/A":
        return value
    text = format_stat(value)
    return f"{text} ({tag})" if tag else text


def format_cell(
    app: str,
    architecture_id: str,
    library_id: str,
    stats: Stats,
    section: MetricSection,
    config: ReportConfig,
) -> str:
    """Markdown of one table cell, including its trailing pipe.

    Precedence: custom message, Debug/Release values, requested link, "?".
    Zero values count as missing.
    """
    message = config.custom_message(app, library_id)
    if message:
        return f" N/A<sup>{message.key}</sup>|"

    debug = stats.get((library_id, "Debug"))
    release = stats.get((library_id, "Release"))
    if debug or release:
        parts = []
        if debug:
            parts.append(_format_stat_value(debug, section.format_stat, "Debug"))
        if release:
            tag = "Release" if section.show_release_tag else None
            parts.append(_format_stat_value(release, section.format_stat, tag))
        return f" {' => '.join(parts)} |"

    requested_url = config.requested_url(architecture_id, library_id)
    if requested_url:
        return f" [Requested]({requested_url}) |"

    return " ? |"


def table_row(
    app: str,
    architecture: Architecture,
    stats: Stats,
    section: MetricSection,
    config: ReportConfig,
) -> str:
    row = f"| ***{architecture.name}*** |"
    for library_id in config.libraries:
        row += format_cell(app, architecture.id, library_id, stats, section, config)
    return row


def render_section(
    lines: List[str],
    app: str,
    section: MetricSection,
    aggregator: StatsAggregator,
    config: ReportConfig,
) -> List[str]:
    """Title and table of one metric; architectures without stats get no row."""
    lines.extend(["", f"### {section.title}"])
    table_header(lines, config)

    for architecture in config.architectures:
        stats = aggregator.stats(section.metric, app, architecture.id)
        if not stats:
            continue
        lines.append(table_row(app, architecture, stats, section, config))

    return lines


def render_footnotes(lines: List[str], app: str, config: ReportConfig) -> List[str]:
    messages = config.custom_messages.get(app)
    # An empty mapping still emits the (blank) footnote block
    if messages is None:
        return lines

    lines.append("")
    for message in messages.values():
        lines.append(f"**<sup>{message.key}</sup>**: {message.value}  ")
    lines.extend(["", ""])
    return lines


def render_app(
    lines: List[str],
    app: str,
    aggregator: StatsAggregator,
    config: ReportConfig,
) -> List[str]:
    """Title, source link, the five metric tables and footnotes of one app."""
    lines.extend([
        "",
        f"# {app}",
        "",
        f"See source in [benchmark/{app}]({config.source_url(app)}) folder.",
        "",
    ])

    for section in SECTIONS:
        render_section(lines, app, section, aggregator, config)

    return render_footnotes(lines, app, config)


def render_readme(inputs: ReportInputs, config: ReportConfig) -> str:
    """Generate the full README from loaded inputs.

    Args:
        inputs: Benchmarks, repository stats and templates
        config: Report configuration

    Returns:
        Markdown document as string
    """
    aggregator = StatsAggregator(inputs.benchmarks, config.libraries)

    lines = substitute_header([], inputs.template_begin, list(config.libraries), inputs.stars)
    for app in config.apps:
        render_app(lines, app, aggregator, config)
        logger.debug(f"Rendered tables for {app}")

    return "".join(line + "\n" for line in lines) + inputs.template_end


def write_readme(output_path: Path, content: str) -> Path:
    """Overwrite output_path with the rendered document."""
    output_path = Path(output_path)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)

    logger.info(f"README written to {output_path}")
    return output_path
