from __future__ import annotations

import pytest

from truckload.core.errors import InvalidStatus, ShipmentNotFound, ValidationFailure
from truckload.schemas.shipment import ShipmentCreate, ShipmentStatus
from truckload.services.status_service import StatusMutationGate


def _seed(store, count: int = 2) -> None:
    for idx in range(count):
        store.create(
            ShipmentCreate(
                plant="P1",
                mill="M1",
                date="2025-01-01",
                day_of_week="Wednesday",
                truck_number=f"T{idx}",
                sku="S1",
                number_of_rolls=2,
                tons=6,
            )
        )


@pytest.mark.parametrize("value", ["pending", "accepted", "rejected"])
def test_set_status_accepts_each_known_status(store, value):
    _seed(store)
    gate = StatusMutationGate(store)

    updated = gate.set_status(1, value)

    assert updated.status == ShipmentStatus(value)
    assert store.get(1).status == ShipmentStatus(value)


def test_set_status_rejects_unknown_status_without_touching_store(store):
    _seed(store)
    gate = StatusMutationGate(store)
    before = store.list()

    with pytest.raises(InvalidStatus) as exc_info:
        gate.set_status(1, "bogus")

    assert exc_info.value.status_code == 400
    assert store.list() == before


def test_invalid_status_wins_over_unknown_id(store):
    gate = StatusMutationGate(store)

    with pytest.raises(InvalidStatus):
        gate.set_status(999, "bogus")


def test_set_status_unknown_id_raises_not_found(store):
    gate = StatusMutationGate(store)

    with pytest.raises(ShipmentNotFound) as exc_info:
        gate.set_status(999, "accepted")

    assert exc_info.value.status_code == 404


def test_bulk_set_status_tolerates_missing_ids(store):
    _seed(store, 1)
    gate = StatusMutationGate(store)

    updated = gate.bulk_set_status([1, 50], "accepted")

    assert len(updated) == 1
    assert updated[0].id == 1
    assert updated[0].status == ShipmentStatus.ACCEPTED


def test_bulk_set_status_refuses_pending(store):
    _seed(store)
    store.set_status(1, ShipmentStatus.ACCEPTED)
    gate = StatusMutationGate(store)

    with pytest.raises(InvalidStatus):
        gate.bulk_set_status([1, 2], "pending")

    assert store.get(1).status == ShipmentStatus.ACCEPTED


@pytest.mark.parametrize("ids", [["1"], [1.5], [True], "12", None])
def test_bulk_set_status_requires_integer_ids(store, ids):
    _seed(store)
    gate = StatusMutationGate(store)

    with pytest.raises(ValidationFailure):
        gate.bulk_set_status(ids, "rejected")

    assert {r.status for r in store.list()} == {ShipmentStatus.PENDING}


def test_bulk_set_status_empty_ids_is_a_no_op(store):
    _seed(store)

    assert StatusMutationGate(store).bulk_set_status([], "accepted") == []
