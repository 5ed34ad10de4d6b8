# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript column mapping.

Spreadsheet exports rarely use exactly the headers the transcript parser
expects. This module maps arbitrary source headers onto the canonical ones
(`speaker`, `content`, `start`, `end`):

1. Exact pass: identical header text.
2. Fuzzy pass: normalized Levenshtein similarity of at least
   `FUZZY_THRESHOLD`, assigned greedily from the best-scoring pair down.

Unresolved required headers are reported, never raised. The caller decides
whether to ask the user for a manual override.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from rapidfuzz.distance import Levenshtein


REQUIRED_HEADERS: tuple[str, ...] = ("speaker", "content")
OPTIONAL_HEADERS: tuple[str, ...] = ("start", "end")
TRANSCRIPT_HEADERS: tuple[str, ...] = REQUIRED_HEADERS + OPTIONAL_HEADERS

FUZZY_THRESHOLD = 0.6


@dataclass
class ColumnMatch:
    """Mapping result for one canonical header.

    Attributes:
        expected:
            Canonical header name.
        matched:
            Source header assigned to it, or None.
        is_exact:
            True if the source header is textually identical.
        score:
            Similarity in [0, 1]; 1 for exact matches, 0 if unmatched.
    """

    expected: str
    matched: str | None = None
    is_exact: bool = False
    score: float = 0.0


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between two strings."""

    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Return `1 - distance / max_length`, or 1 for two empty strings."""

    return Levenshtein.normalized_similarity(a, b)


def map_columns(source_columns: Iterable[str]) -> list[ColumnMatch]:
    """Map source headers onto the canonical transcript headers.

    Args:
        source_columns:
            Headers found in the input table. Blank headers are ignored.

    Returns:
        One ColumnMatch per canonical header, in canonical order.
    """

    columns = [c for c in source_columns if isinstance(c, str) and c.strip()]
    used: set[str] = set()
    results: list[ColumnMatch] = []

    for expected in TRANSCRIPT_HEADERS:
        exact = next((c for c in columns if c == expected and c not in used), None)
        if exact is not None:
            used.add(exact)
            results.append(ColumnMatch(expected=expected, matched=exact, is_exact=True, score=1.0))
        else:
            results.append(ColumnMatch(expected=expected))

    pairs: list[tuple[float, int, str]] = []
    for idx, match in enumerate(results):
        if match.matched is not None:
            continue
        for column in columns:
            if column in used:
                continue
            score = similarity(match.expected, column)
            if score >= FUZZY_THRESHOLD:
                pairs.append((score, idx, column))

    # Stable sort keeps canonical/source order among equal scores.
    pairs.sort(key=lambda p: p[0], reverse=True)

    for score, idx, column in pairs:
        if results[idx].matched is not None or column in used:
            continue
        used.add(column)
        results[idx].matched = column
        results[idx].score = score

    return results


def is_required(header: str) -> bool:
    """Return True for canonical headers a transcript cannot do without."""

    return header in REQUIRED_HEADERS


def all_required_mapped(
    matches: list[ColumnMatch],
    overrides: Mapping[str, str | None] | None = None,
) -> bool:
    """Check whether every required header is resolved.

    An override entry always wins over the detected match, including an
    override of None which deliberately leaves the header unmapped.
    """

    overrides = overrides or {}
    for header in REQUIRED_HEADERS:
        if header in overrides:
            if overrides[header] is None:
                return False
            continue
        match = next((m for m in matches if m.expected == header), None)
        if match is None or match.matched is None:
            return False
    return True


def build_final_mapping(
    matches: list[ColumnMatch],
    overrides: Mapping[str, str | None] | None = None,
) -> dict[str, str]:
    """Merge overrides over detected matches into `canonical -> source`."""

    overrides = overrides or {}
    mapping: dict[str, str] = {}
    for match in matches:
        source = overrides[match.expected] if match.expected in overrides else match.matched
        if source:
            mapping[match.expected] = source
    return mapping


def remap_data(
    rows: Iterable[Mapping[str, Any]],
    mapping: Mapping[str, str],
) -> list[dict[str, Any]]:
    """Project raw rows into canonical-keyed rows."""

    return [{expected: row.get(source) for expected, source in mapping.items()} for row in rows]
