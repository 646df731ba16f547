"""
Customer import API router.
"""

from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from customer_import.config import Settings, get_settings
from customer_import.customers.csv_parser import CSVParser
from customer_import.customers.schemas import ImportOutcome, ImportPartialSuccess, ImportRequest
from customer_import.customers.service import import_customers
from customer_import.shared.exceptions import PayloadTooLargeError
from customer_import.shared.logging import correlation_id_var, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post(
    "/import",
    response_model=ImportOutcome,
    status_code=status.HTTP_200_OK,
    summary="Import customer list",
    description=(
        "Upload an .xlsx workbook or comma-separated text file of customers. "
        "The response is a success, partial_success or failure outcome."
    ),
)
async def import_customer_file(
    file: Annotated[UploadFile, File(description="Workbook or CSV file with customers")],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ImportOutcome:
    """Import customers from an uploaded file.

    Required columns: TÊN KHÁCH HÀNG / FULL NAME / NAME and
    SỐ ĐIỆN THOẠI / PHONE / PHONE NUMBER. Optional: NGƯỜI LIÊN HỆ / SALUTATION.

    Raises:
        413: File exceeds the configured upload limit.
    """
    correlation_id_var.set(uuid4().hex)
    limit = settings.max_upload_bytes

    if file.size is not None and file.size > limit:
        raise PayloadTooLargeError(file.size, limit)

    content = await file.read()
    if len(content) > limit:
        raise PayloadTooLargeError(len(content), limit)

    logger.info(
        "Customer import started",
        extra={
            "upload_filename": file.filename,
            "content_type": file.content_type,
            "size": len(content),
        },
    )

    request = ImportRequest(content=content, filename=file.filename or "", size=len(content))
    outcome = await run_in_threadpool(
        import_customers,
        request,
        text_parser=CSVParser(
            delimiter=settings.text_delimiter,
            encoding=settings.text_encoding,
        ),
        max_bytes=limit,
        reject_duplicate_phones=settings.reject_duplicate_phones,
    )

    extra: dict[str, object] = {"status": outcome.status}
    if isinstance(outcome, ImportPartialSuccess):
        extra["error_preview"] = outcome.error_preview(settings.error_preview_limit)
    logger.info("Customer import finished", extra=extra)
    return outcome
