from truckload.crud.shipment_store import ShipmentStore
from truckload.schemas.shipment import ShipmentStatus, ShipmentSummary


def summarize(store: ShipmentStore) -> ShipmentSummary:
    records = store.list()
    by_status = {s: 0 for s in ShipmentStatus}
    for r in records:
        by_status[r.status] += 1
    return ShipmentSummary(
        shipment_count=len(records),
        total_trucks=len({r.truck_number for r in records}),
        total_tons=sum(r.tons for r in records),
        total_rolls=sum(r.number_of_rolls for r in records),
        pending_count=by_status[ShipmentStatus.PENDING],
        accepted_count=by_status[ShipmentStatus.ACCEPTED],
        rejected_count=by_status[ShipmentStatus.REJECTED],
    )
