# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Tabular transcript parser.

Rows are mappings keyed by the canonical headers `speaker`, `content`, `start`
and `end` (see `interview_ingest.columns` for mapping arbitrary headers).

Timing inference:
- As long as no row carried a start or end time, rows stay untimed.
- From the first timing signal on, every row gets a start and an end. Missing
  starts continue from the previous row; missing ends come from the next row's
  start or are estimated from the word count.

The running counters and "last valid time" trackers live in a `TableParseState`
that is created per call and handed to every step, so parses never share state.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from interview_ingest.string_utils import cell_text, normalize_speaker_name, split_into_words
from interview_ingest.time_utils import to_seconds
from interview_ingest.timing import DEFAULT_SPEECH_RATE, estimate_duration
from interview_ingest.transcripts.base import ParsedTurn, ParseResult, TimingMode
from interview_ingest.transcripts.validation import has_speaker_name_and_content


# Share of turns that must carry an explicit end time for `startEnd` mode.
START_END_RATIO = 0.5


@dataclass
class TableParseState:
    """Accumulator for one `parse_csv_rows()` call."""

    turns: list[ParsedTurn] = field(default_factory=list)
    speakers: list[str] = field(default_factory=list)
    rows_with_start_time: int = 0
    rows_with_end_time: int = 0
    last_valid_start_time: float | None = None
    last_valid_end_time: float | None = None


@dataclass(frozen=True)
class TableRow:
    """A usable transcript row with its cells already interpreted."""

    speaker: str
    content: str
    word_count: int
    start_time: float | None = None
    end_time: float | None = None
    next_start_time: float | None = None


def row_start_time(row: Mapping[str, Any]) -> float | None:
    """Start time of a row, counting only rows the parser would use."""

    if not has_speaker_name_and_content(row):
        return None
    if not split_into_words(cell_text(row.get("content")).strip()):
        return None
    return to_seconds(row.get("start"))


def add_row(state: TableParseState, row: TableRow, speech_rate: float) -> TableParseState:
    """Fold one usable row into the parse state and return the state."""

    has_start = row.start_time is not None
    has_end = row.end_time is not None

    if row.speaker not in state.speakers:
        state.speakers.append(row.speaker)
    if has_start:
        state.rows_with_start_time += 1
    if has_end:
        state.rows_with_end_time += 1

    untimed = (
        not has_start
        and not has_end
        and state.last_valid_start_time is None
        and state.last_valid_end_time is None
    )
    if untimed:
        state.turns.append(ParsedTurn(speaker=row.speaker, content=row.content))
        return state

    if row.start_time is not None:
        start = row.start_time
    elif state.last_valid_end_time is not None:
        start = state.last_valid_end_time
    elif state.last_valid_start_time is not None:
        start = state.last_valid_start_time
    else:
        start = 0.0

    if row.end_time is not None:
        end = row.end_time
    elif row.next_start_time is not None and row.next_start_time > start:
        end = row.next_start_time
    else:
        end = start + estimate_duration(row.word_count, speech_rate)

    if end <= start:
        end = start + estimate_duration(row.word_count, speech_rate)

    state.turns.append(
        ParsedTurn(speaker=row.speaker, content=row.content, start_time=start, end_time=end)
    )
    state.last_valid_start_time = start
    state.last_valid_end_time = end
    return state


def detect_timing_mode(state: TableParseState) -> TimingMode:
    if state.rows_with_end_time >= len(state.turns) * START_END_RATIO:
        return "startEnd"
    if state.rows_with_start_time > 0:
        return "startOnly"
    return "untimed"


def parse_csv_rows(
    rows: Sequence[Mapping[str, Any]],
    speech_rate_words_per_second: float = DEFAULT_SPEECH_RATE,
) -> ParseResult:
    """Parse canonical-keyed transcript rows.

    Args:
        rows:
            Table rows keyed by `speaker`, `content` and optionally `start`,
            `end`.
        speech_rate_words_per_second:
            Speech rate used to estimate missing end times.

    Returns:
        The normalized ParseResult. Rows without speaker or content words are
        skipped; an empty result is not an error.
    """

    state = TableParseState()

    for idx, row in enumerate(rows):
        if not has_speaker_name_and_content(row):
            continue

        content = cell_text(row.get("content")).strip()
        words = split_into_words(content)
        if not words:
            continue

        next_start = row_start_time(rows[idx + 1]) if idx + 1 < len(rows) else None
        table_row = TableRow(
            speaker=normalize_speaker_name(cell_text(row.get("speaker"))),
            content=content,
            word_count=len(words),
            start_time=to_seconds(row.get("start")),
            end_time=to_seconds(row.get("end")),
            next_start_time=next_start,
        )
        state = add_row(state, table_row, speech_rate_words_per_second)

    has_timestamps = state.rows_with_start_time > 0 or state.rows_with_end_time > 0

    return ParseResult(
        turns=state.turns,
        detected_format="timestamped" if has_timestamps else "tabular",
        has_timestamps=has_timestamps,
        speakers=state.speakers,
        total_line_count=len(rows),
        detected_timing_mode=detect_timing_mode(state),
    )
