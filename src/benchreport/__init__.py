"""benchreport: benchmark results to README markdown."""

__version__ = "0.1.0"
