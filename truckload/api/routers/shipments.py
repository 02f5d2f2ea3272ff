from fastapi import APIRouter, Depends, Query, Response, status

from truckload.api.deps.shipment_store import get_shipment_store, get_status_gate
from truckload.core.config import settings
from truckload.core.errors import InvalidStatus, ShipmentNotFound
from truckload.crud.shipment_store import ShipmentStore
from truckload.schemas.shipment import (
    BulkStatusUpdate,
    ShipmentCreate,
    ShipmentRecord,
    ShipmentStatus,
    ShipmentStatusUpdate,
    ShipmentSummary,
)
from truckload.services.export_service import export_accepted_csv
from truckload.services.status_service import StatusMutationGate
from truckload.services.summary_service import summarize

router = APIRouter(prefix="/shipments", tags=["shipments"])


# Fixed paths are registered before "/{shipment_id}" so they are not captured by it.
@router.get("/export")
def export_shipments_api(
    quoted: bool = Query(False),
    store: ShipmentStore = Depends(get_shipment_store),
):
    content = export_accepted_csv(store, quoted=quoted)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={settings.EXPORT_FILENAME}"},
    )


@router.get("/summary", response_model=ShipmentSummary)
def shipment_summary_api(store: ShipmentStore = Depends(get_shipment_store)):
    return summarize(store)


@router.patch("/bulk-status", response_model=list[ShipmentRecord])
def bulk_update_status_api(
    payload: BulkStatusUpdate,
    gate: StatusMutationGate = Depends(get_status_gate),
):
    return gate.bulk_set_status(payload.ids, payload.status)


@router.get("", response_model=list[ShipmentRecord])
def list_shipments_api(
    status_filter: str | None = Query(None, alias="status"),
    store: ShipmentStore = Depends(get_shipment_store),
):
    if status_filter is None:
        return store.list()
    try:
        wanted = ShipmentStatus(status_filter)
    except ValueError as exc:
        raise InvalidStatus(f"Invalid status filter '{status_filter}'.") from exc
    return store.list_by_status(wanted)


@router.post("", response_model=ShipmentRecord, status_code=status.HTTP_201_CREATED)
def create_shipment_api(payload: ShipmentCreate, store: ShipmentStore = Depends(get_shipment_store)):
    return store.create(payload)


@router.get("/{shipment_id}", response_model=ShipmentRecord)
def get_shipment_api(shipment_id: int, store: ShipmentStore = Depends(get_shipment_store)):
    obj = store.get(shipment_id)
    if not obj:
        raise ShipmentNotFound()
    return obj


@router.patch("/{shipment_id}/status", response_model=ShipmentRecord)
def update_status_api(
    shipment_id: int,
    payload: ShipmentStatusUpdate,
    gate: StatusMutationGate = Depends(get_status_gate),
):
    return gate.set_status(shipment_id, payload.status)
