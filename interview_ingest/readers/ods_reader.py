# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""ODS table reader."""

from pathlib import Path
from typing import Any

from odfdo import Document

from interview_ingest.readers.base import ParserError, TableData, build_table


class OdsTableReader:
    """Read the first sheet of an ODS spreadsheet (first row = headers)."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() == ".ods"

    def read_table(self, path: Path) -> TableData:
        """Extract the first sheet of an ODS document.

        Leading fully blank rows are skipped so the first non-blank row is used
        as the header row.
        """

        try:
            doc = Document(path)
            tables = list(doc.body.tables)
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to open ODS file: {exc}", path=path) from exc

        if not tables:
            return TableData()

        try:
            values: list[list[Any]] = tables[0].get_values()
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to read ODS sheet: {exc}", path=path) from exc

        records = [r for r in values if any(not _is_blank(v) for v in r)]
        if not records:
            return TableData()

        return build_table(records[0], records[1:])


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
