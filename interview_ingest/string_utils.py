# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Text normalization shared by all parsers.

Speaker names and words are used as grouping keys in several places. They must
be normalized the same way everywhere, so every module imports these helpers
instead of calling `upper()`/`lower()` on its own.
"""

import re
from typing import Any


_WORD_SPLIT_RE = re.compile(r"\s+|[,?.!:;]+")


def normalize_speaker_name(name: str) -> str:
    """Return the grouping key for a speaker name (trimmed, upper-cased)."""

    return name.strip().upper()


def normalize_word(word: str) -> str:
    """Return the grouping key for a word (lower-cased)."""

    return word.lower()


def split_into_words(text: str) -> list[str]:
    """Split text into bare words, dropping whitespace and `,?.!:;` runs."""

    return [w for w in _WORD_SPLIT_RE.split(text) if w]


def cell_text(value: Any) -> str:
    """Render a table cell as text.

    Integral floats are written without the trailing `.0` so a speaker column
    holding `1` reads the same whether the reader produced `1` or `1.0`.
    """

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
