# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Plain text transcript parser.

Rules:
- One turn per non-blank line.
- A line should read `Speaker: content`. The first colon separates the speaker
  from the content unless the line starts with a colon.
- Lines without a usable colon fall back to "first word is the speaker".
- Lines without a speaker or without any content word are skipped.

Text transcripts never carry timestamps. Word-count-based timing is applied
later on the word sequence (see `interview_ingest.timing`).
"""

import re
from typing import Iterable

from interview_ingest.string_utils import normalize_speaker_name, split_into_words
from interview_ingest.transcripts.base import ParsedTurn, ParseResult


_WHITESPACE_RE = re.compile(r"\s")


def _split_line(line: str) -> tuple[str, str] | None:
    colon = line.find(":")
    if colon > 0:
        return line[:colon], line[colon + 1 :].strip()

    ws = _WHITESPACE_RE.search(line)
    if ws is None:
        return None
    return line[: ws.start()], line[ws.start() :].strip()


def parse_txt_lines(lines: Iterable[str]) -> ParseResult:
    """Parse `Speaker: content` lines into an untimed ParseResult.

    Args:
        lines:
            Raw text lines. Non-string entries are counted but ignored.

    Returns:
        A ParseResult without any timing information.
    """

    lines = list(lines)
    turns: list[ParsedTurn] = []
    speakers: list[str] = []

    for line in lines:
        if not isinstance(line, str) or not line.strip():
            continue

        parts = _split_line(line.strip())
        if parts is None:
            continue

        speaker = normalize_speaker_name(parts[0])
        content = parts[1]
        if not speaker or not split_into_words(content):
            continue

        if speaker not in speakers:
            speakers.append(speaker)
        turns.append(ParsedTurn(speaker=speaker, content=content))

    return ParseResult(
        turns=turns,
        detected_format="colon",
        has_timestamps=False,
        speakers=speakers,
        total_line_count=len(lines),
        detected_timing_mode="untimed",
    )
