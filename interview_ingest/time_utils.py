# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Time literal helpers.

Transcripts and code files both carry time values as bare numbers, numeric
strings or clock strings. Everything that reads a time goes through
`to_seconds()` so the same literal always means the same number of seconds.
"""

import math
import re
from typing import Any


_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_CLOCK_RE = re.compile(r"^\d+(?::\d+){0,2}$")


def to_seconds(value: Any) -> float | None:
    """Convert a time literal into seconds.

    Supported inputs:
    - finite numbers (returned unchanged),
    - numeric strings (`"12"`, `"12.5"`),
    - clock strings `SS`, `MM:SS` or `HH:MM:SS` with non-negative integer parts.

    Args:
        value:
            Raw cell value.

    Returns:
        Seconds, or None if the value is not a time.
    """

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if _NUMBER_RE.match(text):
        number = float(text)
        return number if math.isfinite(number) else None

    if not _CLOCK_RE.match(text):
        return None

    seconds = 0
    for part in text.split(":"):
        seconds = seconds * 60 + int(part)

    return float(seconds)


def format_time(seconds: float) -> str:
    """Format seconds as `HH:MM:SS` (rounded to whole seconds)."""

    total = int(round(max(seconds, 0)))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
