from fastapi import APIRouter, File, UploadFile

from truckload.api.deps.csv_upload import read_csv_upload
from truckload.schemas.shipment import CsvUploadResponse
from truckload.services.ingestion_service import IngestMode, ingest, parse_csv_payload

router = APIRouter(prefix="/csv", tags=["csv"])


@router.post("/upload", response_model=CsvUploadResponse)
async def upload_csv_api(csv_file: UploadFile | None = File(None, alias="csvFile")):
    payload = await read_csv_upload(csv_file)
    rows = parse_csv_payload(payload)
    # Validate-only: the store is not involved.
    result = ingest(None, rows, IngestMode.APPEND, from_file=True)
    return CsvUploadResponse(
        message="CSV file uploaded successfully",
        row_count=result.row_count,
        filename=csv_file.filename or "",
    )
