"""
Header row resolution.
"""

from __future__ import annotations

from customer_import.customers.fields import Schema, normalize_label
from customer_import.customers.schemas import HeaderError, HeaderMapping, RawRow


def resolve_headers(header: RawRow, schema: Schema) -> HeaderMapping | HeaderError:
    """Map canonical fields to column indices using the header row.

    Column order, letter case and surrounding whitespace do not matter, and
    unrecognised columns are ignored. Fields are resolved in schema order and
    each takes the first unclaimed column whose label is one of its synonyms.

    Args:
        header: First parsed row of the file.
        schema: Field definitions to resolve.

    Returns:
        HeaderMapping, or HeaderError listing every required field with no
        matching column.
    """
    labels = [normalize_label(cell) for cell in header.cells]
    claimed: set[int] = set()
    columns: dict[str, int | None] = {}
    missing: list[str] = []

    for spec in schema:
        index = next(
            (
                idx
                for idx, label in enumerate(labels)
                if idx not in claimed and spec.matches(label)
            ),
            None,
        )
        columns[spec.key] = index
        if index is None:
            if spec.required:
                missing.append(spec.key)
        else:
            claimed.add(index)

    if missing:
        return HeaderError(missing=tuple(missing), found_headers=tuple(labels))

    return HeaderMapping(columns=columns, width=len(header.cells))
