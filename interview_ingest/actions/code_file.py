# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Code file ingestion action.

Reads an annotation table, checks that it really is a code file, and writes a
YAML report with the detected format, code names and parsed entries.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from interview_ingest.actions.base import write_report
from interview_ingest.codes import (
    ParsedCodes,
    TimeCodes,
    TurnCodes,
    extract_code_names,
    get_code_format_label,
    parse_code_file,
    test_code_file,
)
from interview_ingest.config import ConfigError, IngestConfig
from interview_ingest.readers import read_table
from interview_ingest.time_utils import format_time


@dataclass(frozen=True)
class CodeFileAction:
    """
    `codes` subcommand.

    Parses a turn-based, turn-range or time-based code file.
    """

    name: str = "codes"
    help: str = "Parse a code (annotation) file (.csv, .tsv, .ods)"
    uses_config: bool = False

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `codes` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument("file", help="Code file")
        parser.add_argument(
            "-o",
            "--output",
            help="Write the YAML report to this file instead of stdout",
        )

    def run(self, args: argparse.Namespace, config: IngestConfig | None) -> None:
        """
        Parse the code file and write the report.

        Raises:
            ConfigError:
                If the file cannot be read or is not a usable code file.
            UnrecognizedFormatError:
                If the header set matches no supported shape.
        """

        _ = config
        path = Path(args.file)
        if not path.is_file():
            raise ConfigError(f"Code file not found: {path}")

        table = read_table(path)
        label = get_code_format_label(table.headers)
        if not test_code_file(table.rows, table.headers):
            raise ConfigError(
                f"Not a usable code file: {path} (format: {label}, {len(table.rows)} row(s))"
            )

        parsed = parse_code_file(table.rows, path.name, table.headers)
        names = extract_code_names(table.rows, table.headers, path.name)

        report: dict[str, Any] = {
            "source": {"path": str(path)},
            "format": label,
            "kind": parsed.kind,
            "codes": names,
            "skipped_rows": parsed.skipped_rows,
            "entries": self._entries(parsed),
        }
        write_report(report, args.output)

    def _entries(self, parsed: ParsedCodes) -> list[dict[str, Any]]:
        if isinstance(parsed, TurnCodes):
            return [{"code": e.code, "turns": list(e.turns)} for e in parsed.entries]
        if isinstance(parsed, TimeCodes):
            return [
                {
                    "code": e.code,
                    "start": format_time(e.start_time),
                    "end": format_time(e.end_time),
                    "start_seconds": e.start_time,
                    "end_seconds": e.end_time,
                }
                for e in parsed.entries
            ]
        raise TypeError(f"Unexpected code parse result: {type(parsed).__name__}")
