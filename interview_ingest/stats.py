# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript statistics.

Aggregate counts derived from the flat word sequence. Visualizations use them
to calibrate their scales.
"""

from dataclasses import dataclass
from typing import Any, Iterable

from interview_ingest.string_utils import normalize_word


@dataclass(frozen=True)
class TranscriptStats:
    largest_turn_length: int = 0
    largest_num_of_words_by_a_speaker: int = 0
    largest_num_of_turns_by_a_speaker: int = 0
    max_count_of_most_repeated_word: int = 0
    most_frequent_word: str = ""


def calculate_transcript_stats(words: Iterable[Any]) -> TranscriptStats:
    """Calculate aggregate statistics for a word sequence.

    Args:
        words:
            Items with `speaker`, `turn_number` and `word` attributes (usually
            `WordPoint`).

    Returns:
        TranscriptStats. Empty input yields zeros and an empty word.
    """

    speaker_words: dict[str, int] = {}
    speaker_turns: dict[str, set[int]] = {}
    turn_words: dict[int, int] = {}
    frequency: dict[str, int] = {}
    max_count = 0
    most_frequent = ""

    for item in words:
        speaker_words[item.speaker] = speaker_words.get(item.speaker, 0) + 1
        speaker_turns.setdefault(item.speaker, set()).add(item.turn_number)
        turn_words[item.turn_number] = turn_words.get(item.turn_number, 0) + 1

        if item.word:
            key = normalize_word(item.word)
            frequency[key] = frequency.get(key, 0) + 1

            # Strictly greater: a later word only tying the maximum does not win.
            if frequency[key] > max_count:
                max_count = frequency[key]
                most_frequent = key

    return TranscriptStats(
        largest_turn_length=max(turn_words.values(), default=0),
        largest_num_of_words_by_a_speaker=max(speaker_words.values(), default=0),
        largest_num_of_turns_by_a_speaker=max((len(t) for t in speaker_turns.values()), default=0),
        max_count_of_most_repeated_word=max_count,
        most_frequent_word=most_frequent,
    )
