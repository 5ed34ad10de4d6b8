# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from dataclasses import replace

from interview_ingest.transcripts.base import ParsedTurn, ParseResult


def merge_same_speaker_turns(result: ParseResult) -> ParseResult:
    """Join consecutive turns of the same speaker into one turn.

    Contents are joined with a space. The merged turn keeps the first turn's
    start and takes the end of the last turn that has one.
    """

    if len(result.turns) <= 1:
        return result

    merged: list[ParsedTurn] = [result.turns[0]]
    for turn in result.turns[1:]:
        previous = merged[-1]
        if turn.speaker != previous.speaker:
            merged.append(turn)
            continue

        merged[-1] = replace(
            previous,
            content=f"{previous.content} {turn.content}",
            end_time=turn.end_time if turn.end_time is not None else previous.end_time,
        )

    return replace(result, turns=merged)
