import pytest

from greatwok.core import inventory_service
from greatwok.core.errors import ConflictError


@pytest.fixture
def stock(client, admin_headers, dishes):
    res = client.post("/api/inventory", json={"dish_id": dishes[0].dish_id, "quantity_in_stock": 10},
                      headers=admin_headers)
    assert res.status_code == 201
    return res.json()


def test_create_and_lookup(client, stock, dishes):
    assert stock["dish_name"] == "Kung Pao Chicken"
    assert stock["version"] == 1

    by_dish = client.get(f"/api/inventory/dish/{dishes[0].dish_id}")
    assert by_dish.json()["inventory_id"] == stock["inventory_id"]

    missing = client.get(f"/api/inventory/dish/{dishes[1].dish_id}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "No inventory found for the provided dish ID"


def test_second_row_for_same_dish_conflicts(client, admin_headers, stock, dishes):
    res = client.post("/api/inventory", json={"dish_id": dishes[0].dish_id, "quantity_in_stock": 3},
                      headers=admin_headers)
    assert res.status_code == 409


def test_unknown_dish_and_negative_stock_rejected(client, admin_headers, dishes):
    assert client.post("/api/inventory", json={"dish_id": 999, "quantity_in_stock": 1},
                       headers=admin_headers).status_code == 400
    assert client.post("/api/inventory", json={"dish_id": dishes[0].dish_id, "quantity_in_stock": -1},
                       headers=admin_headers).status_code == 400


def test_update_with_stale_version_conflicts(client, admin_headers, stock):
    iid = stock["inventory_id"]
    first = client.put(f"/api/inventory/{iid}", json={"quantity_in_stock": 7, "version": 1}, headers=admin_headers)
    assert first.status_code == 200
    assert first.json()["quantity_in_stock"] == 7
    assert first.json()["version"] == 2

    stale = client.put(f"/api/inventory/{iid}", json={"quantity_in_stock": 99, "version": 1}, headers=admin_headers)
    assert stale.status_code == 409
    assert client.get(f"/api/inventory/{iid}").json()["quantity_in_stock"] == 7


def test_restock_adds_to_current_level(client, admin_headers, stock):
    iid = stock["inventory_id"]
    res = client.post(f"/api/inventory/{iid}/restock", json={"quantity": 5}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["quantity_in_stock"] == 15
    assert res.json()["version"] == 2

    assert client.post(f"/api/inventory/{iid}/restock", json={"quantity": 0},
                       headers=admin_headers).status_code == 400
    assert client.post("/api/inventory/999/restock", json={"quantity": 1},
                       headers=admin_headers).status_code == 404


def test_concurrent_writer_loses(session_factory, stock):
    first, second = session_factory(), session_factory()
    try:
        mine = inventory_service.get_inventory(first, stock["inventory_id"])
        theirs = inventory_service.get_inventory(second, stock["inventory_id"])
        assert mine.version == theirs.version == 1

        inventory_service.update_inventory(first, mine.inventory_id, quantity_in_stock=4)
        with pytest.raises(ConflictError):
            inventory_service.update_inventory(second, theirs.inventory_id, quantity_in_stock=8)
    finally:
        first.close()
        second.close()


def test_inventory_requires_admin(client, user_headers, stock):
    iid = stock["inventory_id"]
    assert client.put(f"/api/inventory/{iid}", json={"quantity_in_stock": 1}, headers=user_headers).status_code == 403
    assert client.delete(f"/api/inventory/{iid}", headers=user_headers).status_code == 403


def test_delete_inventory(client, admin_headers, stock):
    iid = stock["inventory_id"]
    assert client.delete(f"/api/inventory/{iid}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/inventory/{iid}").status_code == 404
