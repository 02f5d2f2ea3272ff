from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class ShipmentError(Exception):
    """Caller-correctable failure carrying its own HTTP mapping."""

    message: str
    code: str = "SHIPMENT_ERROR"
    status_code: int = 400
    errors: list[dict[str, Any]] = field(default_factory=list)

    def __str__(self) -> str:
        return self.message

    def to_detail(self) -> dict:
        detail: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.errors:
            detail["errors"] = self.errors
        return detail


@dataclass(eq=False)
class ValidationFailure(ShipmentError):
    code: str = "VALIDATION_ERROR"
    status_code: int = 400


@dataclass(eq=False)
class InvalidStatus(ValidationFailure):
    code: str = "INVALID_STATUS"


@dataclass(eq=False)
class ShipmentNotFound(ShipmentError):
    message: str = "Shipment not found"
    code: str = "NOT_FOUND"
    status_code: int = 404


@dataclass(eq=False)
class UnsupportedFormat(ShipmentError):
    code: str = "UNSUPPORTED_FORMAT"
    status_code: int = 400


@dataclass(eq=False)
class UploadRejected(ShipmentError):
    code: str = "UPLOAD_REJECTED"
    status_code: int = 400


@dataclass(eq=False)
class NothingToExport(ShipmentError):
    message: str = "No accepted shipments to export"
    code: str = "NOTHING_TO_EXPORT"
    status_code: int = 404
