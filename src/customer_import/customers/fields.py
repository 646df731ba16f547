"""
Canonical customer fields and their header synonyms.

The reference import template ships these exact header labels; keep the
synonym sets below in sync with it.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from customer_import.shared.exceptions import SchemaDefinitionError

# Digits, plus sign, hyphen, whitespace and parentheses; 8 to 15 characters
PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]{8,15}$")

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    """Normalize a header label for synonym lookup.

    Labels are NFC-normalized (spreadsheet tools sometimes store Vietnamese
    diacritics decomposed), trimmed, whitespace-collapsed and uppercased.

    Args:
        label: Raw header cell text.

    Returns:
        Normalized label.
    """
    text = unicodedata.normalize("NFC", label or "")
    text = _WHITESPACE_RUN.sub(" ", text.strip())
    return text.upper()


def validate_phone_number(value: str) -> bool:
    """Check the phone-number shape after stripping surrounding whitespace."""
    return bool(PHONE_PATTERN.match(value.strip()))


@dataclass(frozen=True)
class FieldSpec:
    """One canonical field of the import schema."""

    key: str
    required: bool
    synonyms: frozenset[str] = field(default_factory=frozenset)
    validate: Callable[[str], bool] | None = None

    def __post_init__(self) -> None:
        normalized = frozenset(normalize_label(s) for s in self.synonyms)
        object.__setattr__(self, "synonyms", normalized)

    def matches(self, label: str) -> bool:
        return normalize_label(label) in self.synonyms


class Schema:
    """Ordered, immutable collection of FieldSpec.

    Raises:
        SchemaDefinitionError: If two fields share a key or a synonym, since
            a header cell could then resolve to either field.
    """

    def __init__(self, fields: Iterable[FieldSpec]) -> None:
        self._fields: tuple[FieldSpec, ...] = tuple(fields)

        seen_keys: set[str] = set()
        owner: dict[str, str] = {}
        for spec in self._fields:
            if spec.key in seen_keys:
                raise SchemaDefinitionError(f"Duplicate field key '{spec.key}'")
            seen_keys.add(spec.key)
            for synonym in spec.synonyms:
                if synonym in owner:
                    raise SchemaDefinitionError(
                        f"Header '{synonym}' is ambiguous between "
                        f"'{owner[synonym]}' and '{spec.key}'",
                        details={"synonym": synonym},
                    )
                owner[synonym] = spec.key

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, key: str) -> FieldSpec:
        for spec in self._fields:
            if spec.key == key:
                return spec
        raise KeyError(key)


CUSTOMER_SCHEMA = Schema(
    [
        FieldSpec(
            key="full_name",
            required=True,
            synonyms=frozenset({"TÊN KHÁCH HÀNG", "FULL NAME", "NAME"}),
        ),
        FieldSpec(
            key="phone_number",
            required=True,
            synonyms=frozenset({"SỐ ĐIỆN THOẠI", "PHONE", "PHONE NUMBER"}),
            validate=validate_phone_number,
        ),
        FieldSpec(
            key="salutation",
            required=False,
            synonyms=frozenset({"NGƯỜI LIÊN HỆ", "SALUTATION"}),
        ),
    ]
)
