"""Transcript parsing.

Transcripts arrive as table rows (CSV/ODS exports), text lines or subtitle
files. All parsers produce the same `ParseResult`:

- `turns`: ordered `ParsedTurn` records (speaker, content, optional times)
- `speakers`: normalized speaker names in first-seen order
- `detected_timing_mode`: `untimed`, `startOnly` or `startEnd`

Column mapping for tables is handled in `interview_ingest.columns`.
"""

from interview_ingest.transcripts.base import (
    DEFAULT_SPEAKER,
    LINE_FORMATS,
    DetectedFormat,
    ParsedTurn,
    ParseResult,
    TimingMode,
)
from interview_ingest.transcripts.line_formats import get_format_description, parse_transcript_text
from interview_ingest.transcripts.merge import merge_same_speaker_turns
from interview_ingest.transcripts.subtitle_parser import parse_subtitle_text
from interview_ingest.transcripts.table_parser import parse_csv_rows
from interview_ingest.transcripts.text_parser import parse_txt_lines
from interview_ingest.transcripts.validation import has_speaker_name_and_content, test_transcript_rows

__all__ = [
    "DEFAULT_SPEAKER",
    "DetectedFormat",
    "LINE_FORMATS",
    "ParsedTurn",
    "ParseResult",
    "TimingMode",
    "get_format_description",
    "has_speaker_name_and_content",
    "merge_same_speaker_turns",
    "parse_csv_rows",
    "parse_subtitle_text",
    "parse_transcript_text",
    "parse_txt_lines",
    "test_transcript_rows",
]
