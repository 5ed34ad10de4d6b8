# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""SRT and WebVTT subtitle parser.

SRT:

    1
    00:00:01,000 --> 00:00:04,000
    Hello world

WebVTT:

    WEBVTT

    00:00:01.000 --> 00:00:04.000
    Hello world

Every cue becomes one turn of the default speaker with both bounds set, so
subtitle transcripts are always `startEnd`.
"""

from dataclasses import dataclass
import re

from interview_ingest.transcripts.base import DEFAULT_SPEAKER, ParsedTurn, ParseResult


_STAMP_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})(?:\.(\d{1,3}))?$")
_TIMING_RE = re.compile(r"^([\d:,.]+)\s*-->\s*([\d:,.]+)")
_TAG_RE = re.compile(r"<[^>]+>")
_CUE_NUMBER_RE = re.compile(r"^[0-9]+$")
_METADATA_PREFIXES = ("WEBVTT ", "WEBVTT\t", "NOTE", "STYLE", "REGION")


@dataclass(frozen=True)
class SubtitleCue:
    start_time: float
    end_time: float
    text: str


def parse_timestamp(stamp: str) -> float:
    """Convert `HH:MM:SS,mmm`, `MM:SS.mmm` (and friends) into seconds.

    Unparseable stamps count as 0.
    """

    match = _STAMP_RE.match(stamp.strip().replace(",", ".", 1))
    if match is None:
        return 0.0

    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2))
    seconds = int(match.group(3))
    millis = int(match.group(4).ljust(3, "0")) if match.group(4) else 0
    return hours * 3600 + minutes * 60 + seconds + millis / 1000


def parse_timing_line(line: str) -> tuple[float, float] | None:
    """Parse `start --> end`; cue settings after the end stamp are ignored."""

    match = _TIMING_RE.match(line)
    if match is None:
        return None
    return parse_timestamp(match.group(1)), parse_timestamp(match.group(2))


def _is_metadata(line: str) -> bool:
    return line == "WEBVTT" or line.startswith(_METADATA_PREFIXES) or bool(_CUE_NUMBER_RE.match(line))


def parse_cues(text: str) -> list[SubtitleCue]:
    """Split subtitle text into cues.

    A cue is a timing line followed by one or more text lines; a blank line or
    the next timing line ends it. Markup tags are removed from the text, and
    cues without any text are dropped.
    """

    cues: list[SubtitleCue] = []
    timing: tuple[float, float] | None = None
    lines: list[str] = []

    def flush() -> None:
        nonlocal timing, lines
        if timing is not None and lines:
            start, end = timing
            cues.append(SubtitleCue(start_time=start, end_time=max(start, end), text=" ".join(lines)))
        timing = None
        lines = []

    for raw in re.split(r"\r?\n", text.lstrip("\ufeff")):
        line = raw.strip()
        if _is_metadata(line):
            continue

        parsed = parse_timing_line(line)
        if parsed is not None:
            flush()
            timing = parsed
            continue

        if not line:
            flush()
            continue

        if timing is not None:
            clean = _TAG_RE.sub("", line)
            if clean:
                lines.append(clean)

    flush()
    return cues


def parse_subtitle_text(text: str) -> ParseResult:
    """Parse SRT or WebVTT content into a `startEnd` ParseResult."""

    turns = [
        ParsedTurn(speaker=DEFAULT_SPEAKER, content=cue.text, start_time=cue.start_time, end_time=cue.end_time)
        for cue in parse_cues(text)
    ]

    return ParseResult(
        turns=turns,
        detected_format="timestamped",
        has_timestamps=bool(turns),
        speakers=[DEFAULT_SPEAKER] if turns else [],
        total_line_count=len(turns),
        detected_timing_mode="startEnd",
    )
