"""Tests for InventoryDB persistence."""

from datetime import date

import pytest

from cookly.fridge.db.inventory import InventoryDB
from cookly.fridge.models import FoodCategory, FoodItem, FreshStatus
from cookly.fridge.store import InventoryStore


@pytest.fixture
def db(tmp_path):
    inventory = InventoryDB(db_path=tmp_path / "test.db")
    yield inventory
    inventory.close()


@pytest.fixture
def sample_items():
    return [
        FoodItem(
            name="Tomato",
            category=FoodCategory.VEGETABLES,
            expiration_date=date(2026, 1, 17),
            id="t1",
            fresh_status=FreshStatus.FRESH,
        ),
        FoodItem(
            name="Chicken thigh",
            category=FoodCategory.PROTEINS,
            expiration_date=None,
            image_url="https://img.test/chicken.jpg",
            id="c1",
        ),
    ]


def test_load_empty(db):
    assert db.load_items() == []


def test_save_snapshot_round_trip(db, sample_items):
    db.save_snapshot(sample_items)
    assert db.load_items() == sample_items


def test_save_snapshot_replaces_previous(db, sample_items):
    db.save_snapshot(sample_items)
    db.save_snapshot(sample_items[1:])
    assert [i.id for i in db.load_items()] == ["c1"]


def test_save_item_upserts(db, sample_items):
    db.save_snapshot(sample_items)
    db.save_item(FoodItem(name="Cherry tomato", category=FoodCategory.VEGETABLES, id="t1"))
    db.save_item(FoodItem(name="Milk", category=FoodCategory.DAIRY, id="m1"))

    items = db.load_items()
    assert [i.id for i in items] == ["t1", "c1", "m1"]
    assert items[0].name == "Cherry tomato"
    assert items[0].expiration_date is None


def test_delete_item(db, sample_items):
    db.save_snapshot(sample_items)
    db.delete_item("t1")
    db.delete_item("missing")
    assert [i.id for i in db.load_items()] == ["c1"]


def test_unreadable_rows_are_skipped(db, sample_items):
    db.save_snapshot(sample_items)
    conn = db._get_conn()
    conn.execute(
        "INSERT INTO fridge_items (id, name, category) VALUES ('bad', '', 'LEGACY')"
    )
    conn.execute(
        "INSERT INTO fridge_items (id, name, category, fresh_status) "
        "VALUES ('old', 'Pickles', 'CONDIMENTS', 'STALE')"
    )
    conn.commit()

    items = db.load_items()
    assert [i.id for i in items] == ["t1", "c1", "old"]
    assert items[2].category == FoodCategory.SAUCES_CONDIMENTS
    assert items[2].fresh_status == FreshStatus.GOOD


def test_store_snapshot_persists(db):
    today = date(2026, 1, 10)
    store = InventoryStore(clock=lambda: today)
    store.add_items([
        FoodItem(name="Spinach", category="VEGETABLES", expiration_date=date(2026, 1, 15)),
        FoodItem(name="Milk", category="DAIRY", expiration_date=date(2026, 1, 11)),
    ])
    db.save_snapshot(store.get_all_items())

    reloaded = InventoryStore(clock=lambda: today)
    reloaded.set_items(db.load_items())
    assert reloaded.get_all_items() == store.get_all_items()
