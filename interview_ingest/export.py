# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript CSV export.

The export is built from the word sequence after timing recomputation, so it
carries the inferred end times. Its columns are the canonical transcript
headers, which makes the file a valid transcript input again.
"""

import csv
from pathlib import Path
from typing import Sequence

from interview_ingest.columns import TRANSCRIPT_HEADERS
from interview_ingest.string_utils import cell_text
from interview_ingest.time_utils import format_time
from interview_ingest.transcripts.base import TimingMode
from interview_ingest.words import WordPoint


def _export_time(seconds: float, timing_mode: TimingMode) -> str:
    # Untimed transcripts hold word positions, not seconds.
    if timing_mode == "untimed":
        return cell_text(seconds)
    return format_time(seconds)


def transcript_rows(words: Sequence[WordPoint], timing_mode: TimingMode) -> list[dict[str, str]]:
    """Group words back into one row per turn, ordered by turn number.

    A turn's speaker and times come from its first word.
    """

    turns: dict[int, tuple[WordPoint, list[str]]] = {}
    for wp in words:
        if wp.turn_number not in turns:
            turns[wp.turn_number] = (wp, [])
        turns[wp.turn_number][1].append(wp.word)

    rows: list[dict[str, str]] = []
    for turn_number in sorted(turns):
        first, tokens = turns[turn_number]
        rows.append(
            {
                "speaker": first.speaker,
                "content": " ".join(tokens),
                "start": _export_time(first.start_time, timing_mode),
                "end": _export_time(first.end_time, timing_mode),
            }
        )
    return rows


def write_transcript_csv(words: Sequence[WordPoint], timing_mode: TimingMode, path: Path) -> None:
    """Write the transcript as `speaker,content,start,end` CSV."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(TRANSCRIPT_HEADERS))
        writer.writeheader()
        writer.writerows(transcript_rows(words, timing_mode))
