"""
Data model for customer list imports.

Pydantic models are the public, immutable values handed back to callers;
the small dataclasses are intermediate results passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SourceFormat(str, Enum):
    """Parser that produced the imported rows."""

    SPREADSHEET = "spreadsheet"
    TEXT = "text"


class ParseErrorKind(str, Enum):
    """Why a parser gave up on the input."""

    CORRUPT = "corrupt"
    EMPTY_WORKBOOK = "empty_workbook"
    NO_WORKSHEET = "no_worksheet"
    UNSUPPORTED_FORMAT = "unsupported_format"
    EMPTY_FILE = "empty_file"
    NO_DATA_ROWS = "no_data_rows"
    ENCODING = "encoding"


class ImportRequest(BaseModel):
    """Uploaded file handed to the import pipeline."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., repr=False, description="Raw file bytes")
    filename: str = Field(default="", description="Declared file name")
    size: int = Field(..., ge=0, description="Declared size in bytes")

    @classmethod
    def from_bytes(cls, content: bytes, filename: str = "") -> ImportRequest:
        return cls(content=content, filename=filename, size=len(content))


@dataclass(frozen=True)
class RawRow:
    """One parsed row of cell text with its 1-based source line number."""

    line_number: int
    cells: tuple[str, ...]


@dataclass(frozen=True)
class ParseError:
    kind: ParseErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class HeaderMapping:
    """Canonical field key -> 0-based column index (None when absent)."""

    columns: dict[str, int | None]
    width: int

    def index_of(self, key: str) -> int | None:
        return self.columns.get(key)

    def value_for(self, row: RawRow, key: str) -> str:
        """Cell text for a field, or an empty string when the column is absent."""
        index = self.index_of(key)
        if index is None or index >= len(row.cells):
            return ""
        return row.cells[index]


@dataclass(frozen=True)
class HeaderError:
    missing: tuple[str, ...]
    found_headers: tuple[str, ...] = field(default_factory=tuple)


class ValidatedRecord(BaseModel):
    """A customer row that passed every field rule."""

    model_config = ConfigDict(frozen=True)

    phone_number: str
    full_name: str
    salutation: str | None = None


class RowError(BaseModel):
    """Field violations for a single data row."""

    model_config = ConfigDict(frozen=True)

    row_number: int = Field(..., ge=1, description="1-based data row (header excluded)")
    line_number: int = Field(..., ge=1, description="1-based line or sheet row in the file")
    reasons: tuple[str, ...] = Field(..., min_length=1)

    def render(self) -> str:
        return f"row {self.row_number}: {', '.join(self.reasons)}"


class ImportSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    records: tuple[ValidatedRecord, ...]
    source_format_used: SourceFormat
    warnings: tuple[str, ...] = ()


class ImportPartialSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["partial_success"] = "partial_success"
    records: tuple[ValidatedRecord, ...]
    errors: tuple[RowError, ...]
    source_format_used: SourceFormat
    warnings: tuple[str, ...] = ()

    def error_preview(self, limit: int = 5) -> list[str]:
        """First ``limit`` row errors rendered for display."""
        return [error.render() for error in self.errors[:limit]]


class ImportFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failure"] = "failure"
    reasons: tuple[str, ...]


ImportOutcome = Annotated[
    Union[ImportSuccess, ImportPartialSuccess, ImportFailure],
    Field(discriminator="status"),
]
