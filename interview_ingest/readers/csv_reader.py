# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""CSV/TSV table reader."""

import csv
from pathlib import Path

from interview_ingest.readers.base import ParserError, TableData, build_table


class CsvTableReader:
    """Read comma- or tab-separated files (first row = headers)."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() in {".csv", ".tsv"}

    def read_table(self, path: Path) -> TableData:
        delimiter = "\t" if path.suffix.lower() == ".tsv" else ","

        try:
            # utf-8-sig drops the BOM that spreadsheet exports like to add.
            with path.open("r", encoding="utf-8-sig", newline="") as handle:
                records = list(csv.reader(handle, delimiter=delimiter))
        except csv.Error as exc:
            raise ParserError(f"Malformed CSV: {exc}", path=path) from exc
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to read CSV file: {exc}", path=path) from exc

        records = [r for r in records if any(cell.strip() for cell in r)]
        if not records:
            return TableData()

        return build_table(records[0], records[1:])
