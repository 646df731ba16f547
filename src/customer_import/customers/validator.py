"""
Per-row validation of customer data.
"""

from __future__ import annotations

import re

from customer_import.customers.fields import Schema
from customer_import.customers.schemas import HeaderMapping, RawRow, RowError, ValidatedRecord

_NON_DIGITS = re.compile(r"\D")
_VN_COUNTRY_PREFIX = re.compile(r"^84(?=\d{8,})")


def normalize_phone(phone: str) -> str:
    """Reduce a phone number to a comparison key.

    Keeps digits only and rewrites a leading ``84`` country code to the
    domestic ``0`` prefix, so ``+84 901 234 567`` and ``0901234567`` match.
    """
    digits = _NON_DIGITS.sub("", phone or "")
    return _VN_COUNTRY_PREFIX.sub("0", digits)


def validate_row(
    row: RawRow,
    row_number: int,
    mapping: HeaderMapping,
    schema: Schema,
) -> tuple[ValidatedRecord | None, RowError | None]:
    """Validate one data row against the schema.

    Every field is checked so the error lists all problems with the row,
    not just the first.

    Args:
        row: Parsed data row.
        row_number: 1-based position among data rows.
        mapping: Resolved header mapping.
        schema: Field definitions.

    Returns:
        Tuple of (record or None, error or None); exactly one is set.
    """
    values: dict[str, str] = {}
    reasons: list[str] = []

    for spec in schema:
        value = mapping.value_for(row, spec.key).strip()
        values[spec.key] = value

        if not value:
            if spec.required:
                reasons.append(f"missing {spec.key}")
            continue

        if spec.validate is not None and not spec.validate(value):
            reasons.append(f"invalid {spec.key}")

    if reasons:
        return None, RowError(
            row_number=row_number,
            line_number=row.line_number,
            reasons=tuple(reasons),
        )

    record = ValidatedRecord(
        phone_number=values["phone_number"],
        full_name=values["full_name"],
        salutation=values.get("salutation") or None,
    )
    return record, None
