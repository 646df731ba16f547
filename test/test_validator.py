"""
Unit tests for per-row validation.
"""

import pytest

from customer_import.customers.fields import CUSTOMER_SCHEMA
from customer_import.customers.schemas import HeaderMapping, RawRow
from customer_import.customers.validator import normalize_phone, validate_row


@pytest.fixture
def mapping() -> HeaderMapping:
    return HeaderMapping(
        columns={"full_name": 0, "phone_number": 1, "salutation": 2},
        width=3,
    )


def _row(*cells: str, line_number: int = 2) -> RawRow:
    return RawRow(line_number=line_number, cells=tuple(cells))


class TestValidateRow:
    """Tests for validate_row."""

    def test_valid_row(self, mapping: HeaderMapping):
        record, error = validate_row(_row(" Nguyen Van A ", " 0901234567 ", "Anh A"), 1, mapping, CUSTOMER_SCHEMA)

        assert error is None
        assert record is not None
        assert record.full_name == "Nguyen Van A"
        assert record.phone_number == "0901234567"
        assert record.salutation == "Anh A"

    def test_empty_salutation_is_none(self, mapping: HeaderMapping):
        record, error = validate_row(_row("Nguyen Van A", "0901234567", "  "), 1, mapping, CUSTOMER_SCHEMA)

        assert error is None
        assert record.salutation is None

    def test_absent_salutation_column(self):
        mapping = HeaderMapping(columns={"full_name": 1, "phone_number": 0, "salutation": None}, width=2)
        record, error = validate_row(_row("0901234567", "Nguyen Van A"), 1, mapping, CUSTOMER_SCHEMA)

        assert error is None
        assert record.full_name == "Nguyen Van A"
        assert record.salutation is None

    def test_missing_name(self, mapping: HeaderMapping):
        record, error = validate_row(_row("", "0909999999", ""), 2, mapping, CUSTOMER_SCHEMA)

        assert record is None
        assert error.row_number == 2
        assert error.reasons == ("missing full_name",)

    def test_invalid_phone(self, mapping: HeaderMapping):
        record, error = validate_row(_row("Tran B", "abc", "", line_number=4), 3, mapping, CUSTOMER_SCHEMA)

        assert record is None
        assert error.row_number == 3
        assert error.line_number == 4
        assert error.reasons == ("invalid phone_number",)

    def test_all_failures_reported(self, mapping: HeaderMapping):
        record, error = validate_row(_row("", "", ""), 1, mapping, CUSTOMER_SCHEMA)

        assert record is None
        assert error.reasons == ("missing full_name", "missing phone_number")

    def test_short_row_reads_missing_cells_as_empty(self, mapping: HeaderMapping):
        record, error = validate_row(_row("Nguyen Van A"), 1, mapping, CUSTOMER_SCHEMA)

        assert record is None
        assert error.reasons == ("missing phone_number",)

    def test_error_render(self, mapping: HeaderMapping):
        _, error = validate_row(_row("", "abc", ""), 5, mapping, CUSTOMER_SCHEMA)

        assert error.render() == "row 5: missing full_name, invalid phone_number"


class TestNormalizePhone:
    """Tests for the duplicate-detection phone key."""

    def test_strips_formatting(self):
        assert normalize_phone("(090) 123-4567") == "0901234567"

    def test_country_code_rewritten(self):
        assert normalize_phone("+84 901 234 567") == "0901234567"
        assert normalize_phone("84901234567") == "0901234567"

    def test_short_84_prefix_kept(self):
        assert normalize_phone("8412345") == "8412345"

    def test_empty(self):
        assert normalize_phone("") == ""
