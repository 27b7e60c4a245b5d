"""CLI for benchreport."""

import argparse
import logging
from pathlib import Path

from benchreport.config import default_workdir, load_report_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _load(args):
    config = load_report_config(args.config)
    paths = config.paths.resolve(args.workdir)
    return config, paths


def cmd_generate(args):
    """Render the README from benchmarks.json, stats.json and templates."""
    from benchreport.loader import load_inputs
    from benchreport.report.render_md import render_readme, write_readme

    config, paths = _load(args)
    inputs = load_inputs(config, paths)

    # Nothing is written unless rendering succeeds
    readme = render_readme(inputs, config)
    output = write_readme(args.output or paths.output, readme)

    print(f"✓ README generated: {output}")
    print(f"  - Apps: {len(config.apps)}")
    print(f"  - Libraries: {len(config.libraries)}")


def cmd_stats(args):
    """Export aggregated stats as CSV and JSONL."""
    from benchreport.loader import BenchmarkData, load_json
    from benchreport.report.aggregate import StatsAggregator, save_aggregated_stats, stats_frame

    config, paths = _load(args)
    data = BenchmarkData(load_json(paths.benchmarks), config)

    aggregator = StatsAggregator(data, config.libraries)
    stats_df = stats_frame(aggregator, config.apps, config.architectures)
    save_aggregated_stats(stats_df, args.output_dir)

    print(f"✓ Stats exported: {len(stats_df)} values")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="benchreport: render framework benchmark results into the README"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=None, help="Report YAML config (default: configs/report.yaml)")
    common.add_argument("--workdir", type=Path, default=default_workdir(), help="Directory input paths are relative to")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # generate
    parser_gen = subparsers.add_parser("generate", parents=[common], help="Generate the README")
    parser_gen.add_argument("--output", type=Path, default=None, help="Output file (default: from config)")
    parser_gen.set_defaults(func=cmd_generate)

    # stats
    parser_stats = subparsers.add_parser("stats", parents=[common], help="Export aggregated stats")
    parser_stats.add_argument("--output-dir", type=Path, required=True, help="Directory for stats.csv/stats.jsonl")
    parser_stats.set_defaults(func=cmd_stats)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
