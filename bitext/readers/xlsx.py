#!/usr/bin/env python3
"""
Bilingual spreadsheet reader.

Layout of the first worksheet:

    | id  | en                        | fr                          |
    |-----|---------------------------|-----------------------------|
    | t1  | Hello <g id="1">world</g> | Bonjour <g id="1">monde</g> |

The header row is mandatory and supplies the source and target language
codes. Each source/target cell is parsed as a small inline-markup document.
Rows with an empty id are skipped.
"""

import logging

import openpyxl

from ..documents import Spreadsheet, TransUnit
from ..segment import parse_inline
from .base import FormatReader, MissingAttributeError, ReaderError

logger = logging.getLogger(__name__)


def cell_text(row, index: int) -> str:
    """Display string of a cell; missing and empty cells give ""."""
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index])


class XlsxReader(FormatReader):
    """Reader for three-column bilingual .xlsx tables."""

    @property
    def name(self) -> str:
        return "xlsx"

    @property
    def file_extensions(self) -> list[str]:
        return ["xlsx"]

    @property
    def description(self) -> str:
        return "Bilingual spreadsheet (id, source, target)"

    def read(self, path: str) -> Spreadsheet:
        try:
            workbook = openpyxl.load_workbook(filename=path, read_only=True, data_only=True)
        except Exception as e:
            raise ReaderError(f"Failed to open xlsx file {path}: {e}")

        try:
            if not workbook.worksheets:
                raise ReaderError(f"No worksheet found in {path}")
            sheet = workbook.worksheets[0]
            logger.info("Checking %s sheet: %s", path, sheet.title)
            rows = list(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

        return self.parse_rows(rows, path)

    def parse_rows(self, rows: list, path: str = "") -> Spreadsheet:
        """
        Build a spreadsheet document from row values.

        Args:
            rows: Row value tuples, header first
            path: Source file path for the document

        Returns:
            Spreadsheet document

        Raises:
            ReaderError: If the header row is missing
            MissingAttributeError: If a header language cell is blank
        """
        if not rows:
            raise ReaderError(f"Header row missing in {path or 'spreadsheet'}")

        header = rows[0]
        source_language = cell_text(header, 1).strip().lower()
        target_language = cell_text(header, 2).strip().lower()
        if not source_language:
            raise MissingAttributeError("header", "source language")
        if not target_language:
            raise MissingAttributeError("header", "target language")

        units = []
        for sequence_number, row in enumerate(rows[1:], start=1):
            unit_id = cell_text(row, 0)
            if not unit_id:
                continue
            units.append(TransUnit(
                id=unit_id,
                sequence_number=sequence_number,
                translate="yes",
                source=tuple(parse_inline(cell_text(row, 1))),
                target=tuple(parse_inline(cell_text(row, 2))),
            ))

        logger.debug("%s: %d rows kept of %d", path, len(units), len(rows) - 1)
        return Spreadsheet(
            path=path,
            source_language=source_language,
            target_language=target_language,
            units=units,
        )
