"""File readers.

Readers turn files into the shapes the parsers consume:

- tables (`.csv`, `.tsv`, `.ods`) become `TableData` with lower-cased headers
  and dynamically typed cells,
- text transcripts (`.txt`, `.md`) and subtitles (`.srt`, `.vtt`) are read as
  text.
"""

from interview_ingest.readers.base import ParserError, TableData, TableReader
from interview_ingest.readers.registry import (
    get_table_reader,
    is_subtitle_file,
    is_text_file,
    read_table,
    read_text,
    read_text_lines,
)

__all__ = [
    "ParserError",
    "TableData",
    "TableReader",
    "get_table_reader",
    "is_subtitle_file",
    "is_text_file",
    "read_table",
    "read_text",
    "read_text_lines",
]
