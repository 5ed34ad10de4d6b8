"""Shared test fixtures for the interview_ingest test suite."""

from typing import Any, Dict, List, Optional

import pytest

from interview_ingest.words import WordPoint


def make_row(
    speaker: Any,
    content: Any,
    start: Any = None,
    end: Any = None,
) -> Dict[str, Any]:
    """Build a canonical transcript row."""
    return {"speaker": speaker, "content": content, "start": start, "end": end}


def make_words(turns: List[tuple]) -> List[WordPoint]:
    """Build a word sequence from (speaker, turn_number, text, start, end) tuples."""
    words: List[WordPoint] = []
    for speaker, turn_number, text, start, end in turns:
        for token in text.split():
            words.append(
                WordPoint(
                    speaker=speaker,
                    turn_number=turn_number,
                    word=token,
                    start_time=start,
                    end_time=end,
                )
            )
    return words


@pytest.fixture
def untimed_rows():
    return [
        make_row("Alice", "Hello there, how are you?"),
        make_row("Bob", "Fine, thanks."),
        make_row(" alice ", "Good to hear."),
    ]


@pytest.fixture
def start_only_rows():
    """Start times only: every end must be inferred."""
    return [
        make_row("A", "hello world", 0),
        make_row("A", "foo", None),
        make_row("B", "bar", 10),
    ]


@pytest.fixture
def turn_code_rows():
    return [
        {"code": "question", "turn": 1},
        {"code": "answer", "turn": 2},
        {"code": "question", "turn": 3},
        {"code": "question", "turn": 1},
        {"code": "  answer  ", "turn": "4"},
    ]


@pytest.fixture
def write_file(tmp_path):
    """Write a text file into tmp_path and return its path."""

    def _write(name: str, content: str, encoding: Optional[str] = "utf-8"):
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path

    return _write
