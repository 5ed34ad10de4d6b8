# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Template configuration generator.

This action writes a ready-to-edit `ingest.yaml` file into the current
directory (or a user-specified path).
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from interview_ingest.config import CONFIG_FILENAME, ConfigError, IngestConfig


@dataclass(frozen=True)
class TemplateAction:
    """
    `template` subcommand.

    This action does not read a YAML config because it produces one.
    """

    name: str = "template"
    help: str = "Write a template ingest.yaml config"
    uses_config: bool = False

    _TEMPLATE_YAML: str = "\n".join(
        [
            "# Timing inference (optional; defaults shown)",
            "timing:",
            "  # Used to estimate how long a turn lasts when no end time is known.",
            "  speech_rate_words_per_second: 3",
            "",
            "  # Only for transcripts with start times but (mostly) no end times:",
            "  #   false: a turn ends where the next turn starts",
            "  #   true:  a turn ends after its estimated duration, keeping gaps",
            "  preserve_gaps_between_turns: false",
            "",
            "# Manual transcript column mapping (optional)",
            "#",
            "# Columns are detected automatically (exact names first, then similar",
            "# names). Use this section if detection picks the wrong column or none.",
            "# Keys are the expected columns, values the header in your file",
            "# (case-insensitive). Use null to leave a column unmapped on purpose.",
            "# columns:",
            '#   speaker: "Name"',
            '#   content: "Utterance"',
            '#   start: "Begin"',
            "#   end: null",
            "",
        ]
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `template` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "path",
            nargs="?",
            default=CONFIG_FILENAME,
            help=f"Destination path for the template (default: ./{CONFIG_FILENAME})",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Allow overwriting an existing file",
        )

    def run(self, args: argparse.Namespace, config: IngestConfig | None) -> None:
        """
        Execute the template writer.

        Raises:
            ConfigError:
                If the destination exists and `--force` is not set.
        """

        _ = config
        dest = Path(args.path)
        if dest.exists() and not args.force:
            raise ConfigError(f"Refusing to overwrite existing file: {dest} (use --force)")

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(self._TEMPLATE_YAML, encoding="utf-8")
        print(f"Wrote template config to: {dest}")
