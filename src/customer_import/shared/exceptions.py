"""
Shared exceptions.

Expected bad input inside the import pipeline is returned as data; these
exceptions cover the surrounding application (HTTP surface, schema setup).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class AppError(Exception):
    message: str = "Application error"
    details: Optional[dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


class PayloadTooLargeError(AppError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            message=f"File too large: {size} bytes exceeds limit of {limit} bytes",
            details={"size": size, "limit": limit},
        )


class SchemaDefinitionError(AppError):
    """Raised when a field schema is internally inconsistent."""
