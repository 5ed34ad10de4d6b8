# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Row validators for transcript tables.

All validators are plain functions: they receive everything they need as
arguments and can be tested on their own.
"""

import math
from typing import Any, Callable, Iterable, Mapping

from interview_ingest.columns import REQUIRED_HEADERS


RowValidator = Callable[[Mapping[str, Any]], bool]


def is_present_value(value: Any) -> bool:
    """Return True for non-blank strings, finite numbers and booleans."""

    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    return False


def has_speaker_name_and_content(row: Mapping[str, Any]) -> bool:
    """Return True if a row carries both a speaker and some content."""

    return is_present_value(row.get("speaker")) and is_present_value(row.get("content"))


def includes_all_headers(headers: Iterable[str], required: Iterable[str]) -> bool:
    present = set(headers)
    return all(h in present for h in required)


def has_one_clean_row(rows: Iterable[Mapping[str, Any]], validator: RowValidator) -> bool:
    return any(validator(row) for row in rows)


def test_transcript_rows(rows: list[Mapping[str, Any]], headers: Iterable[str]) -> bool:
    """Check whether a table looks like a usable speaker/content transcript.

    Args:
        rows:
            Canonical-keyed rows.
        headers:
            Headers present in the table.

    Returns:
        True if there is at least one row, both required headers exist and at
        least one row has a speaker and content.
    """

    return (
        len(rows) > 0
        and includes_all_headers(headers, REQUIRED_HEADERS)
        and has_one_clean_row(rows, has_speaker_name_and_content)
    )
