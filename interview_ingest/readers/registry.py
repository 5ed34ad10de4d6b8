# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Table reader registry."""

from pathlib import Path

from interview_ingest.config import ConfigError
from interview_ingest.readers.base import ParserError, TableData, TableReader
from interview_ingest.readers.csv_reader import CsvTableReader
from interview_ingest.readers.ods_reader import OdsTableReader


TEXT_SUFFIXES = {".txt", ".md"}
SUBTITLE_SUFFIXES = {".srt", ".vtt"}

_READERS: list[TableReader] = [
    CsvTableReader(),
    OdsTableReader(),
]


def get_table_reader(path: Path) -> TableReader:
    """Select a table reader based on the file.

    Args:
        path:
            Table file path.

    Returns:
        A reader instance.

    Raises:
        ConfigError:
            If no reader supports the file.
    """

    for reader in _READERS:
        if reader.can_read(path):
            return reader

    supported = ", ".join(sorted({".csv", ".tsv", ".ods"}))
    raise ConfigError(f"Unsupported table format: {path} (supported: {supported})")


def is_text_file(path: Path) -> bool:
    return path.suffix.lower() in TEXT_SUFFIXES


def is_subtitle_file(path: Path) -> bool:
    return path.suffix.lower() in SUBTITLE_SUFFIXES


def read_table(path: Path) -> TableData:
    """Read a table and normalize errors to ConfigError."""

    reader = get_table_reader(path)
    try:
        return reader.read_table(path)
    except ParserError as exc:
        raise ConfigError(str(exc)) from exc


def read_text(path: Path) -> str:
    """Read a UTF-8 text or subtitle file (a leading BOM is dropped)."""

    try:
        return path.read_text(encoding="utf-8-sig")
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(str(ParserError(f"Failed to read text file: {exc}", path=path))) from exc


def read_text_lines(path: Path) -> list[str]:
    """Read a UTF-8 text transcript as a list of lines."""

    raw = read_text(path)
    return raw.replace("\r\n", "\n").replace("\r", "\n").split("\n")
