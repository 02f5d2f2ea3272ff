from __future__ import annotations

import pytest

from truckload.schemas.shipment import ShipmentCreate, ShipmentStatus


def _shipment(**overrides) -> ShipmentCreate:
    data = {
        "plant": "P1",
        "mill": "M1",
        "date": "2025-01-01",
        "day_of_week": "Wednesday",
        "truck_number": "T1",
        "sku": "S1",
        "number_of_rolls": 2,
        "tons": 6,
    }
    data.update(overrides)
    return ShipmentCreate(**data)


def test_create_assigns_increasing_ids_and_pending_status(store):
    first = store.create(_shipment(sku="A"))
    second = store.create(_shipment(sku="B"))
    third = store.create(_shipment(sku="C"))

    assert [first.id, second.id, third.id] == [1, 2, 3]
    assert all(r.status == ShipmentStatus.PENDING for r in (first, second, third))
    assert [r.sku for r in store.list()] == ["A", "B", "C"]


def test_get_returns_none_for_unknown_id(store):
    created = store.create(_shipment())

    assert store.get(created.id) == created
    assert store.get(999) is None


def test_clear_empties_store_and_restarts_numbering(store):
    for _ in range(5):
        store.create(_shipment())

    store.clear()

    assert store.list() == []
    assert store.get(1) is None
    assert store.create(_shipment()).id == 1


def test_set_status_changes_only_status(store):
    created = store.create(_shipment(plant="Plant-9", tons=12))

    updated = store.set_status(created.id, ShipmentStatus.ACCEPTED)

    assert updated.status == ShipmentStatus.ACCEPTED
    assert updated.model_dump(exclude={"status"}) == created.model_dump(exclude={"status"})
    assert store.get(created.id).status == ShipmentStatus.ACCEPTED
    # Earlier snapshots are not mutated in place.
    assert created.status == ShipmentStatus.PENDING


def test_set_status_unknown_id_returns_none(store):
    assert store.set_status(42, ShipmentStatus.REJECTED) is None
    assert store.list() == []


def test_bulk_set_status_skips_missing_ids(store):
    existing = store.create(_shipment())

    updated = store.bulk_set_status([existing.id, 77], ShipmentStatus.ACCEPTED)

    assert [r.id for r in updated] == [existing.id]
    assert updated[0].status == ShipmentStatus.ACCEPTED


def test_bulk_set_status_keeps_input_order(store):
    for _ in range(3):
        store.create(_shipment())

    updated = store.bulk_set_status([3, 1, 2], ShipmentStatus.REJECTED)

    assert [r.id for r in updated] == [3, 1, 2]
    assert {r.status for r in store.list()} == {ShipmentStatus.REJECTED}


def test_list_by_status_filters_in_id_order(store):
    for _ in range(4):
        store.create(_shipment())
    store.bulk_set_status([4, 2], ShipmentStatus.ACCEPTED)

    accepted = store.list_by_status(ShipmentStatus.ACCEPTED)
    pending = store.list_by_status(ShipmentStatus.PENDING)

    assert [r.id for r in accepted] == [2, 4]
    assert [r.id for r in pending] == [1, 3]
    assert store.list_by_status(ShipmentStatus.REJECTED) == []


def test_create_many_continues_numbering(store):
    store.create(_shipment())

    created = store.create_many([_shipment(sku="X"), _shipment(sku="Y")])

    assert [r.id for r in created] == [2, 3]
    assert [r.sku for r in store.list()] == ["S1", "X", "Y"]


def test_replace_all_swaps_contents_and_restarts_numbering(store):
    store.create_many([_shipment(sku="A"), _shipment(sku="B"), _shipment(sku="C")])
    store.set_status(2, ShipmentStatus.ACCEPTED)

    replaced = store.replace_all([_shipment(sku="X"), _shipment(sku="Y")])

    assert [r.id for r in replaced] == [1, 2]
    assert [(r.sku, r.status) for r in store.list()] == [
        ("X", ShipmentStatus.PENDING),
        ("Y", ShipmentStatus.PENDING),
    ]
    assert store.create(_shipment(sku="Z")).id == 3


def test_replace_all_failure_keeps_previous_rows(store):
    store.create_many([_shipment(sku="A"), _shipment(sku="B")])
    # Skips validation so the bad value reaches the store itself.
    unstorable = ShipmentCreate.model_construct(**{**_shipment().model_dump(by_alias=False), "tons": 10**20})

    with pytest.raises(Exception):
        store.replace_all([_shipment(sku="X"), unstorable])

    assert [r.sku for r in store.list()] == ["A", "B"]
    assert store.create(_shipment(sku="C")).id == 3
