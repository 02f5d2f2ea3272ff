from enum import Enum
from typing import List

from pydantic import ConfigDict, Field, StrictInt

from .base import CamelSchema


class ShipmentStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Bulk review can only accept or reject; reverting to pending is single-record only.
BULK_STATUSES = frozenset({ShipmentStatus.ACCEPTED, ShipmentStatus.REJECTED})


# Largest quantity the shipment_record integer columns hold.
MAX_QUANTITY = 2**31 - 1


class ShipmentFields(CamelSchema):
    # Lengths match the shipment_record column sizes.
    plant: str = Field(min_length=1, max_length=255)
    mill: str = Field(min_length=1, max_length=255)
    date: str = Field(min_length=1, max_length=32)
    day_of_week: str = Field(min_length=1, max_length=16)
    truck_number: str = Field(min_length=1, max_length=255)
    sku: str = Field(min_length=1, max_length=255)
    number_of_rolls: int = Field(default=0, ge=0, le=MAX_QUANTITY)
    tons: int = Field(default=0, ge=0, le=MAX_QUANTITY)


class ShipmentCreate(ShipmentFields):
    pass


class ShipmentRecord(ShipmentFields):
    model_config = ConfigDict(frozen=True)

    id: int
    status: ShipmentStatus = ShipmentStatus.PENDING


class ShipmentStatusUpdate(CamelSchema):
    # Checked against ShipmentStatus by the status gate, not here.
    status: str


class BulkStatusUpdate(CamelSchema):
    ids: List[StrictInt]
    status: str


class CsvUploadResponse(CamelSchema):
    message: str
    row_count: int
    filename: str


class OptimizationRunResponse(CamelSchema):
    message: str
    shipments_count: int
    records: List[ShipmentRecord] = []


class ShipmentSummary(CamelSchema):
    shipment_count: int = 0
    total_trucks: int = 0
    total_tons: int = 0
    total_rolls: int = 0
    pending_count: int = 0
    accepted_count: int = 0
    rejected_count: int = 0
