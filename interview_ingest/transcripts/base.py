# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript parse result types."""

from dataclasses import dataclass, field
from typing import Literal


TimingMode = Literal["untimed", "startOnly", "startEnd"]
DetectedFormat = Literal["timestamped", "chat-log", "colon", "tab-separated", "mixed", "plain", "tabular"]

TIMING_MODES: tuple[str, ...] = ("untimed", "startOnly", "startEnd")

# Speaker assigned when the source names none (subtitles, plain text).
DEFAULT_SPEAKER = "SPEAKER 1"

# Formats the text parser can be forced into.
LINE_FORMATS: tuple[str, ...] = ("timestamped", "chat-log", "colon", "tab-separated", "plain")


@dataclass(frozen=True)
class ParsedTurn:
    """One speaker turn.

    Attributes:
        speaker:
            Normalized speaker name (trimmed, upper-cased).
        content:
            Turn text as found in the source (trimmed).
        start_time:
            Start in seconds, or None for untimed turns.
        end_time:
            End in seconds, or None for untimed turns.
    """

    speaker: str
    content: str
    start_time: float | None = None
    end_time: float | None = None


@dataclass(frozen=True)
class ParseResult:
    """Normalized transcript.

    Attributes:
        turns:
            Turns in input order (skipped rows/lines removed).
        detected_format:
            Dominant line format for text (`timestamped`, `chat-log`,
            `colon`, `tab-separated`, `mixed` or `plain`), `timestamped` for
            subtitles, `timestamped` or `tabular` for tables.
        has_timestamps:
            True if at least one start or end time was parsed.
        speakers:
            Distinct normalized speaker names in first-seen order.
        total_line_count:
            Number of input rows/lines the parser looked at.
        continuation_line_count:
            Text lines that matched no line format and were appended to the
            previous turn.
        detected_timing_mode:
            Transcript-wide timing mode.
    """

    turns: list[ParsedTurn] = field(default_factory=list)
    detected_format: DetectedFormat = "colon"
    has_timestamps: bool = False
    speakers: list[str] = field(default_factory=list)
    total_line_count: int = 0
    detected_timing_mode: TimingMode = "untimed"
    continuation_line_count: int = 0
