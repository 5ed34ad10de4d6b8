# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Multi-format text transcript parser.

Transcripts copied out of meeting tools, video platforms or chat clients mix a
handful of line layouts. Each non-blank line is matched against these formats,
first match wins:

1. `Speaker:<TAB>HH:MM:SS<TAB>content`   (research transcripts)
2. `HH:MM:SS<TAB>Speaker<TAB>content`    (Zoom)
3. `[HH:MM:SS] Speaker: content`         (colon or tab after the speaker)
4. `[HH:MM:SS] content`                  (YouTube, no speaker)
5. `[h:mm AM/PM] Speaker: content`       (chat logs)
6. `Speaker: content`
7. `Speaker<TAB>content`

A line matching no format continues the previous turn. Chat-log times are
wall-clock times; they are shifted so the first chat line starts at 0 and a
time going backwards is read as a midnight rollover.
"""

from dataclasses import dataclass, field, replace
import re
from typing import Callable

from interview_ingest.string_utils import normalize_speaker_name
from interview_ingest.time_utils import to_seconds
from interview_ingest.transcripts.base import (
    DEFAULT_SPEAKER,
    LINE_FORMATS,
    DetectedFormat,
    ParsedTurn,
    ParseResult,
)


SECONDS_PER_DAY = 86_400

MAX_SPEAKER_LENGTH = 40

FORMAT_DESCRIPTIONS: dict[str, str] = {
    "timestamped": "[Timestamp] Speaker: content",
    "chat-log": "[Time AM/PM] Speaker: content",
    "colon": "Speaker: content",
    "tab-separated": "Speaker<tab>content",
    "mixed": "Mixed formats",
    "plain": "Plain text",
}

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_DIGITS_RE = re.compile(r"^\d+$")
_CHAT_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?\s*(AM|PM)", re.IGNORECASE)


def is_likely_speaker(text: str) -> bool:
    """Tell speaker labels apart from sentence fragments that contain a colon."""

    label = text.strip()
    if not label or len(label) > MAX_SPEAKER_LENGTH:
        return False
    # Leftover of a broken timestamp such as "[0" from "[0:00]".
    if label.startswith(("[", "]")):
        return False
    if "//" in label or "@" in label or "www." in label:
        return False
    if _DIGITS_RE.match(label):
        return False
    # More than four words is not a name.
    return len(re.findall(r"\s+", label)) <= 3


def parse_chat_time(text: str) -> float | None:
    """Convert `h:mm[:ss] AM/PM` into seconds after midnight."""

    match = _CHAT_TIME_RE.search(text)
    if match is None:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3)) if match.group(3) else 0
    is_pm = match.group(4).upper() == "PM"

    if hours < 1 or hours > 12 or minutes >= 60 or seconds >= 60:
        return None

    if is_pm and hours != 12:
        hours += 12
    if not is_pm and hours == 12:
        hours = 0

    return float(hours * 3600 + minutes * 60 + seconds)


def _stamp_seconds(stamp: str) -> float | None:
    """Seconds of a bracketed stamp; `.5` or `,5` adds a fraction."""

    clock, _, fraction = stamp.replace(",", ".").partition(".")
    seconds = to_seconds(clock)
    if seconds is None or not fraction:
        return seconds
    return seconds + float(f"0.{fraction}")


def _turn(speaker: str, content: str, start_time: float | None = None) -> ParsedTurn:
    return ParsedTurn(
        speaker=normalize_speaker_name(speaker),
        content=content.strip(),
        start_time=start_time,
    )


def _speaker_first_stamped(m: re.Match[str]) -> ParsedTurn | None:
    return _turn(m.group(1), m.group(3), to_seconds(m.group(2))) if is_likely_speaker(m.group(1)) else None


def _stamp_first_tabbed(m: re.Match[str]) -> ParsedTurn | None:
    return _turn(m.group(2), m.group(3), to_seconds(m.group(1))) if is_likely_speaker(m.group(2)) else None


def _bracketed_speaker(m: re.Match[str]) -> ParsedTurn | None:
    return _turn(m.group(2), m.group(3), _stamp_seconds(m.group(1))) if is_likely_speaker(m.group(2)) else None


def _bracketed_no_speaker(m: re.Match[str]) -> ParsedTurn | None:
    content = m.group(2)
    # "Speaker: content" after the stamp belongs to the previous format.
    if ":" in content and is_likely_speaker(content.split(":")[0]):
        return None
    if "\t" in content and is_likely_speaker(content.split("\t")[0]):
        return None
    return _turn(DEFAULT_SPEAKER, content, _stamp_seconds(m.group(1)))


def _chat_log(m: re.Match[str]) -> ParsedTurn | None:
    return _turn(m.group(2), m.group(3), parse_chat_time(m.group(1))) if is_likely_speaker(m.group(2)) else None


def _colon(m: re.Match[str]) -> ParsedTurn | None:
    return _turn(m.group(1), m.group(2)) if is_likely_speaker(m.group(1)) else None


def _tab_separated(m: re.Match[str]) -> ParsedTurn | None:
    return _turn(m.group(1), m.group(2)) if is_likely_speaker(m.group(1)) else None


@dataclass(frozen=True)
class LinePattern:
    """One supported line layout."""

    name: DetectedFormat
    pattern: re.Pattern[str]
    parse: Callable[[re.Match[str]], ParsedTurn | None]


_STAMP = r"\d{1,2}:\d{2}(?::\d{2})?"
_FRACTIONAL_STAMP = _STAMP + r"(?:[.,]\d{1,3})?"

LINE_PATTERNS: tuple[LinePattern, ...] = (
    LinePattern("timestamped", re.compile(rf"^([^:\t]+):\t({_STAMP})\t(.+)$"), _speaker_first_stamped),
    LinePattern("timestamped", re.compile(rf"^({_STAMP})\t([^\t]+)\t(.+)$"), _stamp_first_tabbed),
    LinePattern(
        "timestamped",
        re.compile(rf"^\[({_FRACTIONAL_STAMP})\]\s*([^:\t]+)[:\t]\s*(.+)$"),
        _bracketed_speaker,
    ),
    LinePattern("timestamped", re.compile(rf"^\[({_FRACTIONAL_STAMP})\]\s*(.+)$"), _bracketed_no_speaker),
    LinePattern(
        "chat-log",
        re.compile(rf"^\[({_STAMP}\s*[AP]M)\]\s*([^:]+):\s*(.+)$", re.IGNORECASE),
        _chat_log,
    ),
    LinePattern("colon", re.compile(r"^([^:]+):\s*(.+)$"), _colon),
    LinePattern("tab-separated", re.compile(r"^([^\t]+)\t(.+)$"), _tab_separated),
)


@dataclass
class TextParseState:
    """Accumulator for one `parse_transcript_text()` call."""

    turns: list[ParsedTurn] = field(default_factory=list)
    format_counts: dict[str, int] = field(default_factory=dict)
    chat_log_indices: set[int] = field(default_factory=set)
    continuation_line_count: int = 0
    total_line_count: int = 0


def match_line(line: str, patterns: tuple[LinePattern, ...] = LINE_PATTERNS) -> tuple[ParsedTurn, str] | None:
    """Return the turn and format name of the first matching pattern."""

    for candidate in patterns:
        match = candidate.pattern.match(line)
        if match is None:
            continue
        turn = candidate.parse(match)
        if turn is not None:
            return turn, candidate.name
    return None


def _add_turn(state: TextParseState, turn: ParsedTurn, fmt: str) -> None:
    if fmt == "chat-log":
        state.chat_log_indices.add(len(state.turns))
    state.turns.append(turn)
    state.format_counts[fmt] = state.format_counts.get(fmt, 0) + 1


def _append_to_last_turn(state: TextParseState, content: str) -> None:
    if state.turns:
        last = state.turns[-1]
        state.turns[-1] = replace(last, content=f"{last.content} {content}")
    else:
        state.turns.append(_turn(DEFAULT_SPEAKER, content))
    state.continuation_line_count += 1


def normalize_wall_clock_times(turns: list[ParsedTurn], indices: set[int]) -> list[ParsedTurn]:
    """Shift chat-log times so the first one is 0, handling midnight rollover.

    Only turns at `indices` are touched. Returns a new list.
    """

    result = list(turns)
    base: float | None = None
    previous: float | None = None
    day_offset = 0

    for idx, turn in enumerate(turns):
        if idx not in indices or turn.start_time is None:
            continue

        raw = turn.start_time
        if base is None:
            base = raw
        elif previous is not None and raw < previous:
            day_offset += SECONDS_PER_DAY

        result[idx] = replace(turn, start_time=raw + day_offset - base)
        previous = raw

    return result


def dominant_format(format_counts: dict[str, int]) -> DetectedFormat:
    """Most frequent format; `mixed` if several non-plain formats occur."""

    dominant = "plain"
    max_count = 0
    for fmt, count in format_counts.items():
        if count > max_count:
            dominant, max_count = fmt, count

    non_plain = [fmt for fmt in format_counts if fmt != "plain"]
    return "mixed" if len(non_plain) > 1 else dominant  # type: ignore[return-value]


def get_format_description(fmt: str) -> str:
    return FORMAT_DESCRIPTIONS.get(fmt, "Unknown format")


def parse_transcript_text(text: str, force_format: str | None = None) -> ParseResult:
    """Parse free-form transcript text.

    Args:
        text:
            The whole transcript.
        force_format:
            Restrict matching to one format from `LINE_FORMATS`. `plain` makes
            every line a turn of the default speaker. None or `mixed` tries
            all formats.

    Returns:
        A ParseResult. Timed transcripts only carry start times, so the timing
        mode is `startOnly` if any start was found and `untimed` otherwise.

    Raises:
        ValueError:
            If `force_format` is not a known format.
    """

    if force_format is not None and force_format != "mixed" and force_format not in LINE_FORMATS:
        raise ValueError(f"Unknown text format: {force_format!r}")

    if force_format in (None, "mixed", "plain"):
        patterns = LINE_PATTERNS
    else:
        patterns = tuple(p for p in LINE_PATTERNS if p.name == force_format)

    state = TextParseState()
    for raw in _LINE_SPLIT_RE.split(text):
        line = raw.strip()
        if not line:
            continue
        state.total_line_count += 1

        if force_format == "plain":
            _add_turn(state, _turn(DEFAULT_SPEAKER, line), "plain")
            continue

        matched = match_line(line, patterns)
        if matched is None:
            _append_to_last_turn(state, line)
        else:
            _add_turn(state, *matched)

    turns = state.turns
    if state.chat_log_indices:
        turns = normalize_wall_clock_times(turns, state.chat_log_indices)

    speakers: list[str] = []
    for turn in turns:
        if turn.speaker not in speakers:
            speakers.append(turn.speaker)

    has_timestamps = any(t.start_time is not None for t in turns)
    return ParseResult(
        turns=turns,
        detected_format=dominant_format(state.format_counts),
        has_timestamps=has_timestamps,
        speakers=speakers,
        total_line_count=state.total_line_count,
        detected_timing_mode="startOnly" if has_timestamps else "untimed",
        continuation_line_count=state.continuation_line_count,
    )
