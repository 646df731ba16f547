"""
Plain delimited-text parsing for customer uploads.

This is the fallback used when a file does not open as a workbook. It splits
on a single delimiter and does not understand quoting, so a value containing
the delimiter shifts the remaining cells of its row.
"""

from customer_import.customers.schemas import ParseError, ParseErrorKind, RawRow
from customer_import.shared.logging import get_logger

logger = get_logger(__name__)


class CSVParser:
    """Parser for plain comma-separated customer files."""

    def __init__(
        self,
        delimiter: str = ",",
        encoding: str = "utf-8-sig",
    ) -> None:
        """Initialize CSV parser.

        Args:
            delimiter: Field delimiter.
            encoding: Text encoding; the default accepts an optional UTF-8 BOM.
        """
        self.delimiter = delimiter
        self.encoding = encoding

    def parse(self, content: bytes) -> list[RawRow] | ParseError:
        """Split raw bytes into rows of cell text.

        Args:
            content: Raw file content.

        Returns:
            Rows including the header row, or a ParseError describing why the
            content is unusable.
        """
        try:
            text = content.decode(self.encoding)
        except UnicodeDecodeError as e:
            return ParseError(
                ParseErrorKind.ENCODING,
                f"file is not valid {self.encoding} text ({e.reason} at byte {e.start})",
            )

        if not text.strip():
            return ParseError(ParseErrorKind.EMPTY_FILE, "file is empty")

        # Only LF and CRLF end a line; other Unicode separators stay in the cell
        lines = text.replace("\r\n", "\n").split("\n")
        rows = [
            RawRow(line_number=line_num, cells=tuple(line.split(self.delimiter)))
            for line_num, line in enumerate(lines, start=1)
            if line.strip()
        ]

        if len(rows) < 2:
            return ParseError(
                ParseErrorKind.NO_DATA_ROWS,
                "file has a header line but no data rows",
            )

        logger.debug(
            "Delimited text parsed",
            extra={"row_count": len(rows) - 1, "header_width": len(rows[0].cells)},
        )
        return rows
