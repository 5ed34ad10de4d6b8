# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Timing recomputation.

The timing mode detected at load time decides how times are derived after the
word sequence changed (e.g. after edits):

- `untimed`: times are word positions, recomputed from scratch.
- `startOnly`: starts are kept, ends are derived from the next turn's start or
  estimated from the speech rate.
- `startEnd`: both bounds are authoritative, nothing is recomputed.

All functions return new sequences and never modify their input. Speech rate
and gap handling are explicit arguments.
"""

from dataclasses import replace
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from interview_ingest.transcripts.base import TimingMode
    from interview_ingest.words import WordPoint


DEFAULT_SPEECH_RATE = 3.0

# Lower bound for the speech rate so a zero/negative setting cannot blow up.
MIN_SPEECH_RATE = 0.1


def estimate_duration(word_count: float, speech_rate: float) -> float:
    """Estimate how long a turn takes to speak, never less than one second."""

    return max(1.0, word_count / max(speech_rate, MIN_SPEECH_RATE))


def recalculate_word_count_times(words: Sequence[WordPoint]) -> list[WordPoint]:
    """Assign word-position times for untimed transcripts.

    All words of a turn share the same range: the running word count entering
    the turn up to the count leaving it.
    """

    ranges: dict[int, list[int]] = {}
    count = 0
    for wp in words:
        if wp.turn_number not in ranges:
            ranges[wp.turn_number] = [count, count]
        count += 1
        ranges[wp.turn_number][1] = count

    return [
        replace(wp, start_time=float(ranges[wp.turn_number][0]), end_time=float(ranges[wp.turn_number][1]))
        for wp in words
    ]


def recalculate_end_times_from_starts(
    words: Sequence[WordPoint],
    speech_rate: float = DEFAULT_SPEECH_RATE,
    preserve_gaps: bool = False,
) -> list[WordPoint]:
    """Derive end times for `startOnly` transcripts.

    Args:
        words:
            Word sequence. A turn's start is the start of its first word.
        speech_rate:
            Words per second for the estimated durations.
        preserve_gaps:
            If False, a turn ends where the next turn starts. If True, every
            turn ends after its estimated duration. The last turn always uses
            the estimate.

    Returns:
        New word sequence with updated end times.
    """

    starts: dict[int, float] = {}
    counts: dict[int, int] = {}
    for wp in words:
        if wp.turn_number not in starts:
            starts[wp.turn_number] = wp.start_time
            counts[wp.turn_number] = 0
        counts[wp.turn_number] += 1

    ordered = sorted(starts)
    ends: dict[int, float] = {}
    for idx, turn_number in enumerate(ordered):
        is_last = idx == len(ordered) - 1
        if is_last or preserve_gaps:
            ends[turn_number] = starts[turn_number] + estimate_duration(counts[turn_number], speech_rate)
        else:
            ends[turn_number] = starts[ordered[idx + 1]]

    return [replace(wp, end_time=ends[wp.turn_number]) for wp in words]


def apply_timing_mode(
    words: Sequence[WordPoint],
    timing_mode: TimingMode,
    speech_rate: float = DEFAULT_SPEECH_RATE,
    preserve_gaps: bool = False,
) -> list[WordPoint]:
    """Recompute times according to the transcript's timing mode."""

    if timing_mode == "untimed":
        return recalculate_word_count_times(words)
    if timing_mode == "startOnly":
        return recalculate_end_times_from_starts(words, speech_rate, preserve_gaps)
    if timing_mode == "startEnd":
        return list(words)
    raise ValueError(f"Unknown timing mode: {timing_mode!r}")


def get_max_time(words: Sequence[WordPoint]) -> float:
    """Return the largest start/end time, at least 1."""

    return max([1.0] + [max(wp.start_time, wp.end_time) for wp in words])
