"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from openpyxl import Workbook


def build_workbook(rows: Sequence[Sequence[Any]], title: str = "Customers") -> bytes:
    """Serialize rows into an in-memory .xlsx workbook."""
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(list(row))
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build_chartsheet_workbook() -> bytes:
    """Serialize a workbook whose only sheet is a chartsheet."""
    wb = Workbook()
    wb.remove(wb.active)
    wb.create_chartsheet()
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def chartsheet_only_xlsx() -> bytes:
    return build_chartsheet_workbook()


@pytest.fixture
def make_xlsx() -> Callable[..., bytes]:
    """Factory fixture producing .xlsx bytes from a list of rows."""
    return build_workbook


@pytest.fixture
def sample_csv_content() -> bytes:
    """Well-formed text upload using the template headers."""
    return (
        "TÊN KHÁCH HÀNG,SỐ ĐIỆN THOẠI,NGƯỜI LIÊN HỆ\n"
        "Nguyen Van A,0901234567,Anh A\n"
        "Tran Thi B,0912345678,Chị B\n"
        "Le Van C,+84 987 654 321,\n"
    ).encode("utf-8")


@pytest.fixture
def mixed_validity_csv() -> bytes:
    """Text upload with one valid row, one missing name and one bad phone."""
    return (
        "TÊN KHÁCH HÀNG,SỐ ĐIỆN THOẠI\n"
        "Nguyen Van A,0901234567\n"
        ",0909999999\n"
        "Tran B,abc\n"
    ).encode("utf-8")
