from __future__ import annotations

"""
Shared action interface.

Actions implement a small protocol so the CLI can dynamically register arguments
and dispatch execution based on the selected subcommand.
"""

import argparse
from pathlib import Path
from typing import Any, Protocol

import yaml

from interview_ingest.config import IngestConfig


class Action(Protocol):
    """
    Interface for a CLI action (subcommand).

    Implementations are expected to:
    - Provide a `name` used as the subcommand.
    - Provide a short `help` string for `--help`.
    - Declare whether they read the YAML config.
    """

    name: str
    help: str
    uses_config: bool

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register action-specific CLI arguments.

        Args:
            parser:
                The subparser dedicated to this action.

        Returns:
            None
        """

    def run(self, args: argparse.Namespace, config: IngestConfig | None) -> None:
        """
        Execute the action.

        Args:
            args:
                Parsed arguments for this subcommand.
            config:
                Loaded configuration, if `uses_config` is True.

        Returns:
            None
        """


def write_report(report: dict[str, Any], output: str | None) -> None:
    """Write a YAML report to a file or to stdout."""

    text = yaml.safe_dump(report, sort_keys=False, allow_unicode=True)
    if not output:
        print(text, end="")
        return

    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    print(f"Wrote report: {out_path}")
