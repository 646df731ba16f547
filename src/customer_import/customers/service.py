"""
Customer list import pipeline.

A file is first opened as a workbook; if that fails for any reason the same
bytes are read as delimited text. Users regularly upload CSV exports renamed
to .xlsx and vice versa, so the extension is never consulted. Once one parser
succeeds the header row is resolved and every data row is validated.
"""

from __future__ import annotations

from customer_import.customers.csv_parser import CSVParser
from customer_import.customers.fields import CUSTOMER_SCHEMA, Schema
from customer_import.customers.headers import resolve_headers
from customer_import.customers.schemas import (
    HeaderError,
    ImportFailure,
    ImportOutcome,
    ImportPartialSuccess,
    ImportRequest,
    ImportSuccess,
    ParseError,
    RawRow,
    RowError,
    SourceFormat,
    ValidatedRecord,
)
from customer_import.customers.spreadsheet_parser import SpreadsheetParser
from customer_import.customers.validator import normalize_phone, validate_row
from customer_import.shared.logging import get_logger

logger = get_logger(__name__)


def import_customers(
    request: ImportRequest,
    *,
    schema: Schema = CUSTOMER_SCHEMA,
    text_parser: CSVParser | None = None,
    max_bytes: int | None = None,
    reject_duplicate_phones: bool = False,
) -> ImportOutcome:
    """Turn an uploaded customer file into a classified import outcome.

    Expected bad input (unreadable file, missing header, invalid rows) is
    reported through the returned value; nothing is raised for it.

    Args:
        request: Uploaded file.
        schema: Field definitions the header and rows are checked against.
        text_parser: Delimited-text parser used as the fallback.
        max_bytes: Optional size ceiling checked before any parsing.
        reject_duplicate_phones: Treat a repeated phone number as a row error.

    Returns:
        ImportSuccess, ImportPartialSuccess or ImportFailure.
    """
    size = max(request.size, len(request.content))
    if max_bytes is not None and size > max_bytes:
        logger.info(
            "Customer import rejected: file too large",
            extra={"upload_filename": request.filename, "size": size, "limit": max_bytes},
        )
        return ImportFailure(
            reasons=(f"file too large: {size} bytes exceeds limit of {max_bytes} bytes",)
        )

    parsed = SpreadsheetParser().parse(request.content)
    source = SourceFormat.SPREADSHEET

    if isinstance(parsed, ParseError):
        spreadsheet_error = parsed
        logger.warning(
            "Workbook parse failed, falling back to delimited text",
            extra={"upload_filename": request.filename, "parse_error": str(spreadsheet_error)},
        )
        parsed = (text_parser or CSVParser()).parse(request.content)
        source = SourceFormat.TEXT

        if isinstance(parsed, ParseError):
            logger.info(
                "Customer import failed: no parser could read the file",
                extra={
                    "upload_filename": request.filename,
                    "spreadsheet_error": str(spreadsheet_error),
                    "text_error": str(parsed),
                },
            )
            return ImportFailure(
                reasons=(f"spreadsheet: {spreadsheet_error}", f"text: {parsed}")
            )

    header, data_rows = parsed[0], parsed[1:]
    mapping = resolve_headers(header, schema)
    if isinstance(mapping, HeaderError):
        logger.info(
            "Customer import failed: required headers missing",
            extra={
                "upload_filename": request.filename,
                "source_format": source.value,
                "missing": list(mapping.missing),
                "found_headers": list(mapping.found_headers),
            },
        )
        return ImportFailure(reasons=tuple(f"missing header: {key}" for key in mapping.missing))

    records: list[ValidatedRecord] = []
    errors: list[RowError] = []
    seen_phones: set[str] = set()

    for row_number, row in enumerate(data_rows, start=1):
        record, error = validate_row(row, row_number, mapping, schema)
        if error is not None:
            errors.append(error)
            continue

        if reject_duplicate_phones:
            key = normalize_phone(record.phone_number)
            if key in seen_phones:
                errors.append(
                    RowError(
                        row_number=row_number,
                        line_number=row.line_number,
                        reasons=("duplicate phone_number",),
                    )
                )
                continue
            seen_phones.add(key)

        records.append(record)

    warnings = _column_count_warnings(data_rows, mapping.width) if source is SourceFormat.TEXT else []

    logger.info(
        "Customer import completed",
        extra={
            "upload_filename": request.filename,
            "source_format": source.value,
            "total_rows": len(data_rows),
            "accepted_count": len(records),
            "rejected_count": len(errors),
            "warning_count": len(warnings),
        },
    )

    return _classify(records, errors, source, warnings)


def _column_count_warnings(rows: list[RawRow], width: int) -> list[str]:
    """Flag text rows whose cell count disagrees with the header.

    The text fallback does not handle quoting, so a comma inside a value
    shows up as an extra column.
    """
    return [
        f"row {row_number}: expected {width} columns, found {len(row.cells)} "
        "(commas inside values are not supported)"
        for row_number, row in enumerate(rows, start=1)
        if len(row.cells) != width
    ]


def _classify(
    records: list[ValidatedRecord],
    errors: list[RowError],
    source: SourceFormat,
    warnings: list[str],
) -> ImportOutcome:
    if not records:
        reasons = ["no valid customer rows found"]
        reasons.extend(error.render() for error in errors)
        return ImportFailure(reasons=tuple(reasons))

    if errors:
        return ImportPartialSuccess(
            records=tuple(records),
            errors=tuple(errors),
            source_format_used=source,
            warnings=tuple(warnings),
        )

    return ImportSuccess(
        records=tuple(records),
        source_format_used=source,
        warnings=tuple(warnings),
    )
