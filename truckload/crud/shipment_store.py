from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from truckload.models.shipment import ShipmentRecord as ShipmentRecordModel
from truckload.schemas.shipment import ShipmentCreate, ShipmentRecord, ShipmentStatus


class ShipmentStore(ABC):
    """
    Keyed storage for shipment records.

    Ids come from a counter that starts at 1, only moves forward while the
    store holds data, and resets to 1 on `clear()`. Listings are always in
    ascending id order. Only `status` is writable after `create()`.
    """

    @abstractmethod
    def create(self, data: ShipmentCreate) -> ShipmentRecord: ...

    @abstractmethod
    def get(self, shipment_id: int) -> ShipmentRecord | None: ...

    @abstractmethod
    def list(self) -> list[ShipmentRecord]: ...

    @abstractmethod
    def list_by_status(self, status: ShipmentStatus) -> list[ShipmentRecord]: ...

    @abstractmethod
    def set_status(self, shipment_id: int, status: ShipmentStatus) -> ShipmentRecord | None: ...

    @abstractmethod
    def bulk_set_status(
        self, shipment_ids: Sequence[int], status: ShipmentStatus
    ) -> list[ShipmentRecord]:
        """Update every id that exists, in input order; unknown ids are skipped."""

    @abstractmethod
    def clear(self) -> None: ...

    def create_many(self, rows: Iterable[ShipmentCreate]) -> list[ShipmentRecord]:
        return [self.create(row) for row in rows]

    @abstractmethod
    def replace_all(self, rows: Iterable[ShipmentCreate]) -> list[ShipmentRecord]:
        """
        Swap the whole contents for `rows`, numbered from 1.

        All or nothing: if any row cannot be stored, the previous records stay.
        """


class InMemoryShipmentStore(ShipmentStore):
    """Process-local store. Not safe for concurrent writers."""

    def __init__(self) -> None:
        self._records: dict[int, ShipmentRecord] = {}
        self._next_id = 1

    def create(self, data: ShipmentCreate) -> ShipmentRecord:
        record = ShipmentRecord(
            id=self._next_id,
            status=ShipmentStatus.PENDING,
            **data.model_dump(by_alias=False),
        )
        self._records[record.id] = record
        self._next_id += 1
        return record

    def get(self, shipment_id: int) -> ShipmentRecord | None:
        return self._records.get(shipment_id)

    def list(self) -> list[ShipmentRecord]:
        return sorted(self._records.values(), key=lambda r: r.id)

    def list_by_status(self, status: ShipmentStatus) -> list[ShipmentRecord]:
        return [r for r in self.list() if r.status == status]

    def set_status(self, shipment_id: int, status: ShipmentStatus) -> ShipmentRecord | None:
        current = self._records.get(shipment_id)
        if current is None:
            return None
        updated = current.model_copy(update={"status": status})
        self._records[shipment_id] = updated
        return updated

    def bulk_set_status(
        self, shipment_ids: Sequence[int], status: ShipmentStatus
    ) -> list[ShipmentRecord]:
        updated: list[ShipmentRecord] = []
        for shipment_id in shipment_ids:
            record = self.set_status(shipment_id, status)
            if record is not None:
                updated.append(record)
        return updated

    def clear(self) -> None:
        self._records.clear()
        self._next_id = 1

    def replace_all(self, rows: Iterable[ShipmentCreate]) -> list[ShipmentRecord]:
        fresh = {
            idx: ShipmentRecord(
                id=idx,
                status=ShipmentStatus.PENDING,
                **data.model_dump(by_alias=False),
            )
            for idx, data in enumerate(rows, start=1)
        }
        self._records = fresh
        self._next_id = len(fresh) + 1
        return list(fresh.values())


class SqlShipmentStore(ShipmentStore):
    """
    SQLAlchemy-backed store. Every mutating call runs in its own transaction.

    The next id is max(id) + 1: rows are only ever removed by `clear()`, so
    this is monotonic between clears and restarts at 1 after one.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    @staticmethod
    def _to_record(row: ShipmentRecordModel) -> ShipmentRecord:
        return ShipmentRecord.model_validate(row)

    @staticmethod
    def _next_id(db: Session) -> int:
        current = db.execute(select(func.max(ShipmentRecordModel.id))).scalar()
        return int(current or 0) + 1

    @staticmethod
    def _insert(db: Session, shipment_id: int, data: ShipmentCreate) -> ShipmentRecordModel:
        row = ShipmentRecordModel(
            id=shipment_id,
            status=ShipmentStatus.PENDING.value,
            **data.model_dump(by_alias=False),
        )
        db.add(row)
        return row

    def create(self, data: ShipmentCreate) -> ShipmentRecord:
        with self._session_factory.begin() as db:
            row = self._insert(db, self._next_id(db), data)
            db.flush()
            return self._to_record(row)

    def create_many(self, rows: Iterable[ShipmentCreate]) -> list[ShipmentRecord]:
        with self._session_factory.begin() as db:
            next_id = self._next_id(db)
            created = []
            for offset, data in enumerate(rows):
                created.append(self._insert(db, next_id + offset, data))
            db.flush()
            return [self._to_record(row) for row in created]

    def get(self, shipment_id: int) -> ShipmentRecord | None:
        with self._session_factory() as db:
            row = db.get(ShipmentRecordModel, shipment_id)
            return self._to_record(row) if row else None

    def list(self) -> list[ShipmentRecord]:
        stmt = select(ShipmentRecordModel).order_by(ShipmentRecordModel.id.asc())
        with self._session_factory() as db:
            return [self._to_record(row) for row in db.execute(stmt).scalars().all()]

    def list_by_status(self, status: ShipmentStatus) -> list[ShipmentRecord]:
        stmt = (
            select(ShipmentRecordModel)
            .where(ShipmentRecordModel.status == ShipmentStatus(status).value)
            .order_by(ShipmentRecordModel.id.asc())
        )
        with self._session_factory() as db:
            return [self._to_record(row) for row in db.execute(stmt).scalars().all()]

    def set_status(self, shipment_id: int, status: ShipmentStatus) -> ShipmentRecord | None:
        with self._session_factory.begin() as db:
            row = db.get(ShipmentRecordModel, shipment_id)
            if row is None:
                return None
            row.status = ShipmentStatus(status).value
            db.flush()
            return self._to_record(row)

    def bulk_set_status(
        self, shipment_ids: Sequence[int], status: ShipmentStatus
    ) -> list[ShipmentRecord]:
        value = ShipmentStatus(status).value
        updated: list[ShipmentRecord] = []
        with self._session_factory.begin() as db:
            for shipment_id in shipment_ids:
                row = db.get(ShipmentRecordModel, shipment_id)
                if row is None:
                    continue
                row.status = value
                db.flush()
                updated.append(self._to_record(row))
        return updated

    def clear(self) -> None:
        with self._session_factory.begin() as db:
            db.execute(delete(ShipmentRecordModel))

    def replace_all(self, rows: Iterable[ShipmentCreate]) -> list[ShipmentRecord]:
        with self._session_factory.begin() as db:
            db.execute(delete(ShipmentRecordModel))
            created = [
                self._insert(db, idx, data) for idx, data in enumerate(rows, start=1)
            ]
            db.flush()
            return [self._to_record(row) for row in created]
