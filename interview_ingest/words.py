# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Turn-to-word expansion.

Statistics and timing recomputation work on a flat word sequence rather than
on turns. `expand_turns()` explodes a ParseResult into that sequence.
"""

from dataclasses import dataclass

from interview_ingest.transcripts.base import ParseResult


@dataclass(frozen=True)
class WordPoint:
    """One word of a transcript.

    Attributes:
        speaker:
            Normalized speaker name.
        turn_number:
            1-based ordinal of the turn the word belongs to.
        word:
            Word token as written in the turn.
        start_time:
            Start in seconds (or word position for untimed transcripts).
        end_time:
            End in seconds (or word position + 1 for untimed transcripts).
    """

    speaker: str
    turn_number: int
    word: str
    start_time: float
    end_time: float


def expand_turns(result: ParseResult) -> list[WordPoint]:
    """Explode the turns of a ParseResult into WordPoints.

    Words are whitespace tokens. Turns without tokens are skipped and do not
    consume a turn number. Timed turns share their start/end across all of
    their words; untimed turns use the running word position.
    """

    words: list[WordPoint] = []
    position = 0
    turn_number = 0

    for turn in result.turns:
        tokens = turn.content.split()
        if not tokens:
            continue
        turn_number += 1

        for token in tokens:
            if turn.start_time is not None:
                start = turn.start_time
                end = turn.end_time if turn.end_time is not None else turn.start_time
            else:
                start = float(position)
                end = float(position + 1)
            words.append(
                WordPoint(
                    speaker=turn.speaker,
                    turn_number=turn_number,
                    word=token,
                    start_time=start,
                    end_time=end,
                )
            )
            position += 1

    return words
