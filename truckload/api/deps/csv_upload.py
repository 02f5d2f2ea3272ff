from __future__ import annotations

import logging

from fastapi import UploadFile

from truckload.core.config import settings
from truckload.core.errors import UploadRejected

logger = logging.getLogger(__name__)

# Browsers on Windows commonly label .csv files as Excel.
CSV_MEDIA_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel"}


def is_csv_upload(file: UploadFile) -> bool:
    media_type = (file.content_type or "").split(";", 1)[0].strip().lower()
    filename = (file.filename or "").strip().lower()
    return media_type in CSV_MEDIA_TYPES or filename.endswith(".csv")


async def read_csv_upload(file: UploadFile | None, max_bytes: int | None = None) -> bytes:
    """
    Buffer an uploaded CSV file completely, rejecting wrong types and
    oversize payloads before any parsing happens.
    """
    if file is None:
        raise UploadRejected("No file uploaded")
    if not is_csv_upload(file):
        raise UploadRejected("Only CSV files are allowed")

    limit = max_bytes if max_bytes is not None else settings.CSV_UPLOAD_MAX_BYTES
    # Read one byte past the cap so oversize files are caught without buffering them whole.
    payload = await file.read(limit + 1)
    if len(payload) > limit:
        logger.warning(
            "csv_upload_rejected_oversize filename=%s limit=%s", file.filename, limit
        )
        raise UploadRejected(f"File exceeds the {limit} byte upload limit")
    return payload
