"""
Customer list import and validation.
"""

from customer_import.customers.schemas import (
    ImportFailure,
    ImportOutcome,
    ImportPartialSuccess,
    ImportRequest,
    ImportSuccess,
    RowError,
    SourceFormat,
    ValidatedRecord,
)
from customer_import.customers.service import import_customers

__all__ = [
    "ImportFailure",
    "ImportOutcome",
    "ImportPartialSuccess",
    "ImportRequest",
    "ImportSuccess",
    "RowError",
    "SourceFormat",
    "ValidatedRecord",
    "import_customers",
]
