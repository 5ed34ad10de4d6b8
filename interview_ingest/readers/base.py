# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Table reader interface and shared cell handling."""

from dataclasses import dataclass, field
from pathlib import Path
import math
import re
from typing import Any, Iterable, Protocol, Sequence


Cell = str | int | float | bool | None


@dataclass(frozen=True)
class TableData:
    """A table as the parsers expect it.

    Attributes:
        headers:
            Lower-cased, trimmed header names (blank headers dropped).
        rows:
            One mapping per non-blank data row, keyed by `headers`.
    """

    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, Cell]] = field(default_factory=list)


class TableReader(Protocol):
    """Interface for table file readers.

    Implementations only extract cells. Interpreting them as transcripts or
    code files happens in the parsers.
    """

    def can_read(self, path: Path) -> bool:
        """Return True if this reader supports the given file."""

        raise NotImplementedError

    def read_table(self, path: Path) -> TableData:
        """Return headers and rows of the given file."""

        raise NotImplementedError


@dataclass(frozen=True)
class ParserError(RuntimeError):
    """Raised for file reading errors."""

    message: str
    path: Path | None = None
    line: int | None = None
    excerpt: str | None = None

    def __str__(self) -> str:  # pragma: no cover
        parts: list[str] = []

        if self.path is not None:
            if self.line is not None:
                parts.append(f"{self.path}:{self.line}: {self.message}")
            else:
                parts.append(f"{self.path}: {self.message}")
        else:
            parts.append(self.message)

        if isinstance(self.excerpt, str) and self.excerpt.strip():
            excerpt = self.excerpt.strip().replace("\n", " ")
            if len(excerpt) > 160:
                excerpt = excerpt[:157] + "..."
            parts.append(f"> {excerpt}")

        return "\n".join(parts)


_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")


def type_cell(value: Any) -> Cell:
    """Convert a raw cell into a typed value.

    Integers and decimals become numbers, `true`/`false` become booleans and
    blank cells become None. Everything else (including clock strings such as
    `01:30`) stays a string.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value if not (isinstance(value, float) and math.isnan(value)) else None

    text = str(value)
    stripped = text.strip()
    if not stripped:
        return None
    if stripped.lower() in {"true", "false"}:
        return stripped.lower() == "true"
    if _INT_RE.match(stripped):
        return int(stripped)
    if _FLOAT_RE.match(stripped):
        return float(stripped)
    return text


def normalize_header(value: Any) -> str:
    return "" if value is None else str(value).strip().lower()


def build_table(header_row: Sequence[Any], data_rows: Iterable[Sequence[Any]]) -> TableData:
    """Build TableData from a header row and raw data rows.

    Columns with a blank header are dropped; rows where every kept cell is
    blank are skipped.
    """

    columns = [(idx, normalize_header(h)) for idx, h in enumerate(header_row)]
    columns = [(idx, name) for idx, name in columns if name]

    headers: list[str] = []
    for _, name in columns:
        if name not in headers:
            headers.append(name)

    rows: list[dict[str, Cell]] = []
    for raw in data_rows:
        row: dict[str, Cell] = {}
        for idx, name in columns:
            if name in row:
                # Duplicate header: the first column wins.
                continue
            row[name] = type_cell(raw[idx]) if idx < len(raw) else None
        if any(v is not None for v in row.values()):
            rows.append(row)

    return TableData(headers=headers, rows=rows)
