"""
Workbook parsing for customer uploads.

Reads the first worksheet of an OOXML (.xlsx) workbook entirely from memory
via openpyxl and flattens every cell to text.
"""

from __future__ import annotations

import io
import zipfile
from datetime import date, datetime, time
from typing import Any
from xml.etree.ElementTree import ParseError as XMLParseError

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from customer_import.customers.schemas import ParseError, ParseErrorKind, RawRow
from customer_import.shared.logging import get_logger

logger = get_logger(__name__)

_XLSX_MAGIC = b"PK\x03\x04"  # ZIP archive (OOXML)
_XLS_MAGIC = b"\xd0\xcf\x11\xe0"  # OLE2 Compound Document

# Errors openpyxl surfaces for damaged or non-workbook archives
_LOAD_ERRORS = (
    zipfile.BadZipFile,
    InvalidFileException,
    XMLParseError,
    KeyError,
    ValueError,
    TypeError,
    OSError,
)


def cell_to_text(value: Any) -> str:
    """Coerce a native cell value to the text a user would expect to see.

    Numbers typed into a phone column come back as floats or ints, so
    integral floats lose their ``.0`` suffix.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


class SpreadsheetParser:
    """Parser for the first worksheet of an .xlsx workbook."""

    def parse(self, content: bytes) -> list[RawRow] | ParseError:
        """Extract rows of cell text from a workbook.

        Args:
            content: Raw workbook bytes.

        Returns:
            Rows including the header row, or a ParseError.
        """
        if not content:
            return ParseError(ParseErrorKind.EMPTY_WORKBOOK, "file is empty")

        if content.startswith(_XLS_MAGIC):
            return ParseError(
                ParseErrorKind.UNSUPPORTED_FORMAT,
                "legacy .xls workbooks are not supported, save the file as .xlsx",
            )

        if not content.startswith(_XLSX_MAGIC):
            return ParseError(ParseErrorKind.CORRUPT, "file is not an .xlsx workbook")

        try:
            wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        except _LOAD_ERRORS as exc:
            logger.debug("openpyxl load failed", exc_info=True)
            return ParseError(ParseErrorKind.CORRUPT, f"workbook could not be opened ({exc})")

        try:
            if not wb.worksheets:
                return ParseError(ParseErrorKind.NO_WORKSHEET, "workbook contains no worksheet")

            ws = wb.worksheets[0]
            rows: list[RawRow] = []
            for row_idx, values in enumerate(ws.iter_rows(values_only=True), start=1):
                cells = tuple(cell_to_text(v) for v in values)
                if not any(cell.strip() for cell in cells):
                    continue
                rows.append(RawRow(line_number=row_idx, cells=cells))
        except _LOAD_ERRORS as exc:
            logger.debug("openpyxl row read failed", exc_info=True)
            return ParseError(ParseErrorKind.CORRUPT, f"worksheet could not be read ({exc})")
        finally:
            wb.close()

        if len(rows) <= 1:
            return ParseError(
                ParseErrorKind.EMPTY_WORKBOOK,
                f"worksheet '{ws.title}' has no data rows",
            )

        logger.debug(
            "Workbook parsed",
            extra={"sheet": ws.title, "row_count": len(rows) - 1},
        )
        return rows
