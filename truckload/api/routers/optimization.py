from fastapi import APIRouter, Depends, File, UploadFile

from truckload.api.deps.csv_upload import read_csv_upload
from truckload.api.deps.shipment_store import get_shipment_store
from truckload.crud.shipment_store import ShipmentStore
from truckload.schemas.shipment import OptimizationRunResponse
from truckload.services.ingestion_service import IngestMode, ingest, parse_csv_payload

router = APIRouter(prefix="/optimization", tags=["optimization"])


@router.post("/run", response_model=OptimizationRunResponse)
async def run_optimization_api(
    csv_file: UploadFile | None = File(None, alias="csvFile"),
    store: ShipmentStore = Depends(get_shipment_store),
):
    """Replace every stored shipment with the uploaded rows, or the sample set."""
    if csv_file is None:
        result = ingest(store, None, IngestMode.REPLACE)
        message = "Sample data loaded successfully"
    else:
        rows = parse_csv_payload(await read_csv_upload(csv_file))
        result = ingest(store, rows, IngestMode.REPLACE, from_file=True)
        message = "CSV file uploaded and processed successfully"
    return OptimizationRunResponse(
        message=message,
        shipments_count=result.inserted_count,
        records=result.records,
    )
