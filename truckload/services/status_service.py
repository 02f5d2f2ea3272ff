from __future__ import annotations

import logging
from typing import Any, Sequence

from truckload.core.errors import InvalidStatus, ShipmentNotFound, ValidationFailure
from truckload.crud.shipment_store import ShipmentStore
from truckload.schemas.shipment import BULK_STATUSES, ShipmentRecord, ShipmentStatus

logger = logging.getLogger(__name__)


def _coerce_status(value: Any, allowed: frozenset[ShipmentStatus] | None = None) -> ShipmentStatus:
    try:
        status = ShipmentStatus(value)
    except ValueError:
        status = None
    if status is None or (allowed is not None and status not in allowed):
        choices = sorted(s.value for s in (allowed or ShipmentStatus))
        raise InvalidStatus(
            f"Invalid status '{value}'. Expected one of: {', '.join(choices)}.",
            errors=[{"field": "status", "value": value, "allowed": choices}],
        )
    return status


class StatusMutationGate:
    """Checks requested review status changes before they reach the store."""

    def __init__(self, store: ShipmentStore):
        self.store = store

    def set_status(self, shipment_id: int, status: Any) -> ShipmentRecord:
        target = _coerce_status(status)
        updated = self.store.set_status(shipment_id, target)
        if updated is None:
            raise ShipmentNotFound()
        logger.debug("shipment_status_set id=%s status=%s", shipment_id, target.value)
        return updated

    def bulk_set_status(self, shipment_ids: Sequence[Any], status: Any) -> list[ShipmentRecord]:
        target = _coerce_status(status, BULK_STATUSES)
        if isinstance(shipment_ids, (str, bytes)) or not isinstance(shipment_ids, Sequence):
            raise ValidationFailure(
                "ids must be a list of integers.",
                errors=[{"field": "ids", "value": shipment_ids}],
            )
        bad = [v for v in shipment_ids if isinstance(v, bool) or not isinstance(v, int)]
        if bad:
            raise ValidationFailure(
                "ids must be a list of integers.",
                errors=[{"field": "ids", "invalid": bad}],
            )
        updated = self.store.bulk_set_status(list(shipment_ids), target)
        logger.info(
            "shipment_status_bulk_set requested=%s updated=%s status=%s",
            len(shipment_ids),
            len(updated),
            target.value,
        )
        return updated
