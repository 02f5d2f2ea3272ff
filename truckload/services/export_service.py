from __future__ import annotations

import logging

import pandas as pd

from truckload.core.errors import NothingToExport
from truckload.core.flow_logging import flow_info
from truckload.crud.shipment_store import ShipmentStore
from truckload.schemas.shipment import ShipmentRecord, ShipmentStatus
from truckload.services.ingestion_service import CSV_HEADERS

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "plant",
    "mill",
    "date",
    "day_of_week",
    "truck_number",
    "sku",
    "number_of_rolls",
    "tons",
]


def _row_values(record: ShipmentRecord) -> list[str]:
    return [str(getattr(record, attr)) for attr in EXPORT_COLUMNS]


def format_csv(records: list[ShipmentRecord], quoted: bool = False) -> str:
    """
    Render records with the fixed export header.

    The default output joins cells with bare commas and does not escape
    embedded commas or quotes. `quoted=True` applies standard CSV quoting.
    """
    header = [CSV_HEADERS[attr] for attr in EXPORT_COLUMNS]
    if quoted:
        df = pd.DataFrame([_row_values(r) for r in records], columns=header)
        return df.to_csv(index=False, lineterminator="\n").rstrip("\n")

    lines = [",".join(header)]
    lines.extend(",".join(_row_values(r)) for r in records)
    return "\n".join(lines)


def export_accepted_csv(store: ShipmentStore, quoted: bool = False) -> str:
    accepted = store.list_by_status(ShipmentStatus.ACCEPTED)
    if not accepted:
        raise NothingToExport()
    flow_info(
        logger,
        "export_accepted rows=%s quoted=%s",
        len(accepted),
        quoted,
        category="export",
    )
    return format_csv(accepted, quoted=quoted)
