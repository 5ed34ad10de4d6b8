# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Transcript ingestion action.

Reads a transcript file, normalizes it and writes a YAML report with the turns,
speakers, timing mode and aggregate statistics.

Tables (`.csv`, `.tsv`, `.ods`) go through column mapping first. If a required
column cannot be resolved, the action stops and lists the available headers so
the user can add a manual mapping to the config.

Text files (`.txt`, `.md`) are read as `Speaker: content` lines by default, or
with the multi-format text parser (`--text-format`). Subtitles (`.srt`, `.vtt`)
become one timed turn per cue.
"""

import argparse
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from interview_ingest.actions.base import write_report
from interview_ingest.columns import (
    ColumnMatch,
    REQUIRED_HEADERS,
    all_required_mapped,
    build_final_mapping,
    map_columns,
    remap_data,
)
from interview_ingest.config import ConfigError, IngestConfig
from interview_ingest.export import write_transcript_csv
from interview_ingest.readers import is_subtitle_file, is_text_file, read_table, read_text, read_text_lines
from interview_ingest.stats import calculate_transcript_stats
from interview_ingest.time_utils import format_time
from interview_ingest.timing import apply_timing_mode, get_max_time
from interview_ingest.transcripts import (
    LINE_FORMATS,
    ParseResult,
    get_format_description,
    merge_same_speaker_turns,
    parse_csv_rows,
    parse_subtitle_text,
    parse_transcript_text,
    parse_txt_lines,
    test_transcript_rows,
)
from interview_ingest.words import WordPoint, expand_turns


TEXT_FORMAT_CHOICES: tuple[str, ...] = ("lines", "auto") + LINE_FORMATS


@dataclass(frozen=True)
class TranscriptAction:
    """
    `transcript` subcommand.

    Parses a transcript and reports the normalized result.
    """

    name: str = "transcript"
    help: str = "Parse a transcript file (.csv, .tsv, .ods, .txt, .md, .srt, .vtt)"
    uses_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `transcript` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument("file", help="Transcript file")
        parser.add_argument(
            "-o",
            "--output",
            help="Write the YAML report to this file instead of stdout",
        )
        parser.add_argument(
            "--text-format",
            choices=TEXT_FORMAT_CHOICES,
            default="lines",
            help=(
                "How to read .txt/.md files. 'lines': one 'Speaker: content' turn per line "
                "(default). 'auto': detect the format of every line. Or force one of: "
                + ", ".join(f"{f} ({get_format_description(f)})" for f in LINE_FORMATS)
            ),
        )
        parser.add_argument(
            "--merge-turns",
            action="store_true",
            help="Join consecutive turns of the same speaker",
        )
        parser.add_argument(
            "--csv",
            help="Also export the normalized transcript as speaker,content,start,end CSV",
        )

    def run(self, args: argparse.Namespace, config: IngestConfig | None) -> None:
        """
        Parse the transcript and write the report.

        Raises:
            ConfigError:
                If the file cannot be read, required columns are missing, or the
                file contains no usable turns.
        """

        config = config or IngestConfig()
        path = Path(args.file)
        if not path.is_file():
            raise ConfigError(f"Transcript file not found: {path}")

        matches: list[ColumnMatch] = []
        if is_subtitle_file(path):
            result = parse_subtitle_text(read_text(path))
        elif is_text_file(path):
            result = self._parse_text(path, args.text_format)
        else:
            result, matches = self._parse_table(path, config)

        if not result.turns:
            raise ConfigError(f"No usable transcript data found in: {path}")

        if args.merge_turns:
            result = merge_same_speaker_turns(result)

        timing = config.timing
        words = apply_timing_mode(
            expand_turns(result),
            result.detected_timing_mode,
            timing.speech_rate_words_per_second,
            timing.preserve_gaps_between_turns,
        )

        report = self._build_report(path, result, matches, words)
        write_report(report, args.output)

        if args.csv:
            csv_path = Path(args.csv)
            write_transcript_csv(words, result.detected_timing_mode, csv_path)
            print(f"Wrote transcript CSV: {csv_path}")

    def _parse_text(self, path: Path, text_format: str) -> ParseResult:
        if text_format == "lines":
            return parse_txt_lines(read_text_lines(path))
        return parse_transcript_text(read_text(path), None if text_format == "auto" else text_format)

    def _parse_table(self, path: Path, config: IngestConfig) -> tuple[ParseResult, list[ColumnMatch]]:
        """
        Map columns and parse a transcript table.

        Args:
            path:
                Table file.
            config:
                Loaded configuration (column overrides, speech rate).

        Returns:
            The parse result and the detected column matches.
        """

        table = read_table(path)
        matches = map_columns(table.headers)
        overrides = config.column_overrides

        if not all_required_mapped(matches, overrides):
            resolved = build_final_mapping(matches, overrides)
            missing = [h for h in REQUIRED_HEADERS if h not in resolved]
            available = ", ".join(table.headers) if table.headers else "(none)"
            raise ConfigError(
                f"Could not map required column(s) {', '.join(missing)} in {path}. "
                f"Available headers: {available}. Add a 'columns' section to the config."
            )

        mapping = build_final_mapping(matches, overrides)
        rows = remap_data(table.rows, mapping)
        if not test_transcript_rows(rows, mapping.keys()):
            raise ConfigError(f"No usable transcript data found in: {path}")

        result = parse_csv_rows(rows, config.timing.speech_rate_words_per_second)
        return result, matches

    def _build_report(
        self,
        path: Path,
        result: ParseResult,
        matches: list[ColumnMatch],
        words: list[WordPoint],
    ) -> dict[str, Any]:
        stats = calculate_transcript_stats(words)

        turns: list[dict[str, Any]] = []
        for number, turn in enumerate(result.turns, start=1):
            entry: dict[str, Any] = {"turn": number, "speaker": turn.speaker}
            if turn.start_time is not None:
                entry["start"] = format_time(turn.start_time)
            if turn.end_time is not None:
                entry["end"] = format_time(turn.end_time)
            entry["content"] = turn.content
            turns.append(entry)

        report: dict[str, Any] = {
            "source": {"path": str(path)},
            "detected_format": result.detected_format,
            "timing_mode": result.detected_timing_mode,
            "has_timestamps": result.has_timestamps,
            "total_line_count": result.total_line_count,
            "continuation_line_count": result.continuation_line_count,
            "speakers": list(result.speakers),
        }
        if matches:
            report["columns"] = [asdict(m) for m in matches]
        report["duration"] = get_max_time(words) if result.has_timestamps else None
        report["stats"] = asdict(stats)
        report["turns"] = turns
        return report
