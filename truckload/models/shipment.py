from sqlalchemy import CheckConstraint, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from truckload.db.base import Base


class ShipmentRecord(Base):
    """
    One shipment line item under review.
    Only `status` changes after insert; ids are handed out by the store.
    """

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_shipment_record_status",
        ),
        CheckConstraint("number_of_rolls >= 0", name="ck_shipment_record_rolls"),
        CheckConstraint("tons >= 0", name="ck_shipment_record_tons"),
    )

    # Assigned explicitly so numbering restarts at 1 after a clear.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    plant: Mapped[str] = mapped_column(String(255), nullable=False)
    mill: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[str] = mapped_column(String(32), nullable=False)
    day_of_week: Mapped[str] = mapped_column(String(16), nullable=False)
    truck_number: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    sku: Mapped[str] = mapped_column(String(255), nullable=False)
    number_of_rolls: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="pending",
        server_default=text("'pending'"),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<ShipmentRecord(id={self.id}, truck={self.truck_number}, status={self.status})>"
