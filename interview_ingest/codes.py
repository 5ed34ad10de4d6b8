# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Code (annotation) file parsing.

A code file labels parts of a transcript. Three shapes are supported and told
apart purely by their headers:

- Turn-based:  `code`, `turn`
- Turn range:  `code`, `turn_start`, `turn_end`
- Time-based:  `start`, `end` and optionally `code`

Turn-based and turn-range files produce `TurnCodes` (code -> sorted turn
numbers), time-based files produce `TimeCodes` (code -> time range). Time-based
files without a `code` column describe a single code named after the file.

Invalid rows are dropped and counted, never raised. Only a header set matching
none of the shapes is an error (`UnrecognizedFormatError`).
"""

from dataclasses import dataclass, field
from enum import Enum
import math
from pathlib import PurePath
import re
from typing import Any, Iterable, Literal, Mapping, Sequence, Union

from interview_ingest.string_utils import cell_text
from interview_ingest.time_utils import to_seconds


# Largest number of turns a single turn-range row may cover.
MAX_TURN_RANGE = 10_000

# Code name for single-code files whose name yields nothing usable.
DEFAULT_CODE_NAME = "code"


class CodeFormat(str, Enum):
    """Recognized code file shapes (value = human-readable label)."""

    TURN_BASED = "Turn-based"
    TURN_RANGE = "Turn range"
    TIME_BASED = "Time-based"
    UNKNOWN = "Unknown"


class UnrecognizedFormatError(RuntimeError):
    """Raised when a code file's headers match none of the supported shapes."""

    def __init__(self, headers: Sequence[str]) -> None:
        self.headers = list(headers)
        shown = ", ".join(self.headers) if self.headers else "(none)"
        super().__init__(f"Unrecognized code file format (headers: {shown})")


@dataclass(frozen=True)
class TurnCodeEntry:
    code: str
    turns: tuple[int, ...]


@dataclass(frozen=True)
class TimeCodeEntry:
    code: str
    start_time: float
    end_time: float


@dataclass(frozen=True)
class TurnCodes:
    """Result for turn-based and turn-range files."""

    entries: list[TurnCodeEntry] = field(default_factory=list)
    skipped_rows: int = 0
    kind: Literal["turn"] = "turn"


@dataclass(frozen=True)
class TimeCodes:
    """Result for time-based files."""

    entries: list[TimeCodeEntry] = field(default_factory=list)
    skipped_rows: int = 0
    kind: Literal["time"] = "time"


ParsedCodes = Union[TurnCodes, TimeCodes]


# ============ Detection ============


def collect_headers(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return the union of row keys in first-seen order."""

    headers: list[str] = []
    for row in rows:
        for key in row:
            if key not in headers:
                headers.append(key)
    return headers


def detect_code_format(headers: Iterable[str]) -> CodeFormat:
    """Classify a header set. Earlier shapes win if several match."""

    present = set(headers)
    if {"code", "turn"} <= present:
        return CodeFormat.TURN_BASED
    if {"code", "turn_start", "turn_end"} <= present:
        return CodeFormat.TURN_RANGE
    if {"start", "end"} <= present:
        return CodeFormat.TIME_BASED
    return CodeFormat.UNKNOWN


def get_code_format_label(headers: Iterable[str]) -> str:
    """Return `Turn-based`, `Turn range`, `Time-based` or `Unknown`."""

    return detect_code_format(headers).value


def test_code_file(
    rows: Sequence[Mapping[str, Any]],
    headers: Iterable[str] | None = None,
) -> bool:
    """Check whether a table is a usable code file.

    Args:
        rows:
            Table rows keyed by lower-cased headers.
        headers:
            Table headers. Defaults to the keys found in `rows`.

    Returns:
        True if the headers match one of the supported shapes and at least one
        row is valid for that shape.
    """

    header_list = list(headers) if headers is not None else collect_headers(rows)
    fmt = detect_code_format(header_list)

    if fmt is CodeFormat.TURN_BASED:
        return any(_turn_row(row) is not None for row in rows)
    if fmt is CodeFormat.TURN_RANGE:
        return any(_turn_range_row(row) is not None for row in rows)
    if fmt is CodeFormat.TIME_BASED:
        has_code_column = "code" in header_list
        return any(_is_valid_time_row(row, has_code_column) for row in rows)
    return False


# ============ Code names ============


_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def code_name_from_filename(filename: str) -> str:
    """Derive a code name from a file name.

    `Time_Based-Codes.csv` becomes `time based codes`. A name that is empty
    once the extension is gone (`.csv`) becomes `DEFAULT_CODE_NAME`.
    """

    name = PurePath(filename).name if filename else ""
    name = _EXTENSION_RE.sub("", name)
    name = re.sub(r"[_-]", " ", name)
    return name.strip().lower() or DEFAULT_CODE_NAME


def _code_text(value: Any) -> str:
    return cell_text(value).strip()


def extract_code_names(
    rows: Iterable[Mapping[str, Any]],
    headers: Iterable[str],
    filename: str,
) -> list[str]:
    """Return distinct code names in first-seen order.

    Files without a `code` column yield the filename-derived name.
    """

    if "code" not in set(headers):
        return [code_name_from_filename(filename)]

    names: list[str] = []
    for row in rows:
        name = _code_text(row.get("code"))
        if name and name not in names:
            names.append(name)
    return names


# ============ Row validation ============


def _turn_number(value: Any) -> int | None:
    """Interpret a cell as a turn number (integer >= 1)."""

    if value is None or isinstance(value, bool):
        return None

    number: float
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number) or not float(number).is_integer() or number < 1:
        return None
    return int(number)


def _turn_row(row: Mapping[str, Any]) -> tuple[str, int] | None:
    code = _code_text(row.get("code"))
    turn = _turn_number(row.get("turn"))
    if not code or turn is None:
        return None
    return code, turn


def _turn_range_row(row: Mapping[str, Any]) -> tuple[str, int, int] | None:
    code = _code_text(row.get("code"))
    start = _turn_number(row.get("turn_start"))
    end = _turn_number(row.get("turn_end"))
    if not code or start is None or end is None:
        return None
    if end < start:
        return None
    # Checked before expansion so a malformed row cannot allocate a huge range.
    if end - start + 1 > MAX_TURN_RANGE:
        return None
    return code, start, end


def _time_bounds(row: Mapping[str, Any]) -> tuple[float, float] | None:
    start = to_seconds(row.get("start"))
    end = to_seconds(row.get("end"))
    if start is None or end is None:
        return None
    if start < 0 or end < 0 or end < start:
        return None
    return start, end


def _is_valid_time_row(row: Mapping[str, Any], has_code_column: bool) -> bool:
    if _time_bounds(row) is None:
        return False
    return not has_code_column or bool(_code_text(row.get("code")))


def _time_row(row: Mapping[str, Any], fallback_code: str | None) -> TimeCodeEntry | None:
    bounds = _time_bounds(row)
    if bounds is None:
        return None

    code = fallback_code if fallback_code is not None else _code_text(row.get("code"))
    if not code:
        return None
    return TimeCodeEntry(code=code, start_time=bounds[0], end_time=bounds[1])


# ============ Parsing ============


def _turn_entries(turn_sets: dict[str, set[int]]) -> list[TurnCodeEntry]:
    return [TurnCodeEntry(code=code, turns=tuple(sorted(turns))) for code, turns in turn_sets.items()]


def parse_turn_code_rows(rows: Iterable[Mapping[str, Any]]) -> TurnCodes:
    turn_sets: dict[str, set[int]] = {}
    skipped = 0

    for row in rows:
        parsed = _turn_row(row)
        if parsed is None:
            skipped += 1
            continue
        code, turn = parsed
        turn_sets.setdefault(code, set()).add(turn)

    return TurnCodes(entries=_turn_entries(turn_sets), skipped_rows=skipped)


def parse_turn_range_code_rows(rows: Iterable[Mapping[str, Any]]) -> TurnCodes:
    turn_sets: dict[str, set[int]] = {}
    skipped = 0

    for row in rows:
        parsed = _turn_range_row(row)
        if parsed is None:
            skipped += 1
            continue
        code, start, end = parsed
        turn_sets.setdefault(code, set()).update(range(start, end + 1))

    return TurnCodes(entries=_turn_entries(turn_sets), skipped_rows=skipped)


def parse_time_code_rows(
    rows: Iterable[Mapping[str, Any]],
    has_code_column: bool,
    filename: str,
) -> TimeCodes:
    fallback = None if has_code_column else code_name_from_filename(filename)
    entries: list[TimeCodeEntry] = []
    skipped = 0

    for row in rows:
        entry = _time_row(row, fallback)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    return TimeCodes(entries=entries, skipped_rows=skipped)


def parse_code_file(
    rows: Sequence[Mapping[str, Any]],
    filename: str,
    headers: Iterable[str] | None = None,
) -> ParsedCodes:
    """Parse a code file into turn- or time-based entries.

    Args:
        rows:
            Table rows keyed by lower-cased headers.
        filename:
            Source file name; names the code of single-code time-based files.
        headers:
            Table headers. Defaults to the keys found in `rows`.

    Returns:
        `TurnCodes` for turn-based and turn-range files, `TimeCodes` for
        time-based files.

    Raises:
        UnrecognizedFormatError:
            If the headers match none of the supported shapes.
    """

    header_list = list(headers) if headers is not None else collect_headers(rows)
    fmt = detect_code_format(header_list)

    if fmt is CodeFormat.TURN_BASED:
        return parse_turn_code_rows(rows)
    if fmt is CodeFormat.TURN_RANGE:
        return parse_turn_range_code_rows(rows)
    if fmt is CodeFormat.TIME_BASED:
        return parse_time_code_rows(rows, "code" in header_list, filename)
    raise UnrecognizedFormatError(header_list)
