"""CLI tools for the countdown tracker."""

from countdown_tracker.cli.generate_report import main as generate_report_main
from countdown_tracker.cli.seed_targets import main as seed_targets_main

__all__ = [
    "generate_report_main",
    "seed_targets_main",
]
