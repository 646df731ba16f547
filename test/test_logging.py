"""
Tests for structured logging.
"""

import json
import logging

from customer_import.shared.logging import StructuredFormatter, correlation_id_var, get_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="customer_import.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Customer import completed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_includes_extra_fields(self) -> None:
        payload = json.loads(StructuredFormatter().format(_record(accepted_count=3, upload_filename="a.xlsx")))

        assert payload["level"] == "INFO"
        assert payload["message"] == "Customer import completed"
        assert payload["accepted_count"] == 3
        assert payload["upload_filename"] == "a.xlsx"

    def test_includes_correlation_id(self) -> None:
        token = correlation_id_var.set("abc123")
        try:
            payload = json.loads(StructuredFormatter().format(_record()))
        finally:
            correlation_id_var.reset(token)

        assert payload["correlation_id"] == "abc123"

    def test_keeps_non_ascii_text(self) -> None:
        output = StructuredFormatter().format(_record(found_headers=["TÊN KHÁCH HÀNG"]))

        assert "TÊN KHÁCH HÀNG" in output


class TestGetLogger:
    def test_single_handler(self) -> None:
        logger = get_logger("customer_import.test.handlers")
        get_logger("customer_import.test.handlers")

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_does_not_propagate_to_root(self) -> None:
        logger = get_logger("customer_import.test.propagation")

        assert logger.propagate is False
