from .shipment import ShipmentRecord  # noqa: F401
