from fastapi import Depends, Request

from truckload.crud.shipment_store import ShipmentStore
from truckload.services.status_service import StatusMutationGate


def get_shipment_store(request: Request) -> ShipmentStore:
    """The store owned by the running app; see create_app()."""
    return request.app.state.shipment_store


def get_status_gate(store: ShipmentStore = Depends(get_shipment_store)) -> StatusMutationGate:
    return StatusMutationGate(store)
