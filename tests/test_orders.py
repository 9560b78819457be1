import pytest

from greatwok.core import order_service
from greatwok.models.cart import CartItem
from greatwok.models.order import Order, OrderItem, OrderStatus, can_transition


@pytest.fixture
def cart(db_session, customer, dishes):
    db_session.add_all([
        CartItem(user_id=customer.user_id, dish_id=dishes[0].dish_id, quantity=2),
        CartItem(user_id=customer.user_id, dish_id=dishes[1].dish_id, quantity=1),
    ])
    db_session.commit()


@pytest.fixture
def order_body(customer, address, dishes):
    return {
        "user_id": customer.user_id,
        "address_id": address.address_id,
        "total_price": "33.50",
        "delivery_type": "delivery",
        "cart_items": [
            {"dish_id": dishes[0].dish_id, "quantity": 2, "price": "13.50"},
            {"dish_id": dishes[1].dish_id, "quantity": 1, "price": 6.5},
        ],
    }


def place(client, body, headers, key=None):
    if key:
        headers = {**headers, "Idempotency-Key": key}
    return client.post("/api/orders", json=body, headers=headers)


def test_place_order_creates_items_and_clears_cart(client, db_session, user_headers, cart, order_body):
    res = place(client, order_body, user_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Order placed successfully!"
    assert body["order"]["status"] == "Pending"
    assert body["order"]["total_price"] == 33.5
    assert len(body["order"]["items"]) == 2

    assert db_session.query(Order).count() == 1
    assert db_session.query(OrderItem).count() == 2
    assert db_session.query(CartItem).count() == 0


def test_cart_can_be_kept(client, db_session, user_headers, cart, order_body):
    res = place(client, {**order_body, "clear_cart": False}, user_headers)
    assert res.status_code == 201
    assert db_session.query(CartItem).count() == 2


def test_failure_mid_placement_leaves_nothing_behind(client, db_session, user_headers, cart, order_body, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(order_service, "clear_user_cart", explode)
    res = place(client, order_body, user_headers)
    assert res.status_code == 500
    assert res.json() == {"error": "Internal Server Error"}

    assert db_session.query(Order).count() == 0
    assert db_session.query(OrderItem).count() == 0
    assert db_session.query(CartItem).count() == 2


def test_idempotent_replay_returns_original_order(client, db_session, user_headers, cart, order_body):
    first = place(client, order_body, user_headers, key="checkout-1")
    again = place(client, order_body, user_headers, key="checkout-1")
    assert first.status_code == 201
    assert again.status_code == 200
    assert again.json()["order"]["order_id"] == first.json()["order"]["order_id"]
    assert db_session.query(Order).count() == 1

    other = place(client, order_body, user_headers, key="checkout-2")
    assert other.status_code == 201
    assert db_session.query(Order).count() == 2


def test_overlong_idempotency_key_is_rejected(client, db_session, user_headers, order_body):
    res = place(client, order_body, user_headers, key="k" * 129)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "Idempotency-Key"
    assert db_session.query(Order).count() == 0

    assert place(client, order_body, user_headers, key="k" * 128).status_code == 201


def test_order_validation(client, user_headers, order_body, other_customer, db_session):
    assert place(client, {**order_body, "cart_items": []}, user_headers).status_code == 400
    assert place(client, {**order_body, "total_price": "0"}, user_headers).status_code == 400
    assert place(client, {**order_body, "delivery_type": "drone"}, user_headers).status_code == 400

    bad_dish = {**order_body, "cart_items": [{"dish_id": 999, "quantity": 1, "price": 1}]}
    res = place(client, bad_dish, user_headers)
    assert res.status_code == 400
    assert "999" in res.json()["error"]
    assert db_session.query(Order).count() == 0


def test_cannot_order_to_someone_elses_address(client, headers_for, other_customer, order_body):
    body = {**order_body, "user_id": other_customer.user_id}
    res = place(client, body, headers_for(other_customer))
    assert res.status_code == 400


def test_cannot_order_for_another_user(client, headers_for, other_customer, order_body):
    assert place(client, order_body, headers_for(other_customer)).status_code == 403


def test_order_reads(client, customer, user_headers, admin_headers, order_body, headers_for, other_customer):
    assert client.get(f"/api/orders/user/{customer.user_id}", headers=user_headers).json() == []

    order_id = place(client, order_body, user_headers).json()["order"]["order_id"]

    mine = client.get(f"/api/orders/user/{customer.user_id}", headers=user_headers).json()
    assert [o["order_id"] for o in mine] == [order_id]

    detail = client.get(f"/api/orders/{order_id}", headers=user_headers).json()
    assert detail["order"]["order_id"] == order_id
    assert {i["dish_name"] for i in detail["items"]} == {"Kung Pao Chicken", "Spring Rolls"}

    items = client.get(f"/api/orders/{order_id}/items", headers=user_headers).json()
    assert len(items) == 2

    assert client.get(f"/api/orders/{order_id}", headers=headers_for(other_customer)).status_code == 403
    assert client.get("/api/orders", headers=user_headers).status_code == 403

    everything = client.get("/api/orders", headers=admin_headers).json()
    assert everything[0]["username"] == "alice"
    assert everything[0]["address"].startswith("1 Harbour St")


def test_status_transitions(client, user_headers, admin_headers, order_body):
    order_id = place(client, order_body, user_headers).json()["order"]["order_id"]

    assert client.put(f"/api/orders/{order_id}/status", headers=user_headers).status_code == 403

    moved = client.put(f"/api/orders/{order_id}/status", json={"status": "In Progress"}, headers=admin_headers)
    assert moved.json()["order"]["status"] == "In Progress"

    backwards = client.put(f"/api/orders/{order_id}/status", json={"status": "Pending"}, headers=admin_headers)
    assert backwards.status_code == 409

    done = client.put(f"/api/orders/{order_id}/status", headers=admin_headers)
    assert done.json()["order"]["status"] == "Done Preparing"

    assert client.put(f"/api/orders/{order_id}/status", headers=admin_headers).status_code == 409
    assert client.put(f"/api/orders/{order_id}/status", json={"status": "Cooking"},
                      headers=admin_headers).status_code == 400
    assert client.put("/api/orders/999/status", headers=admin_headers).status_code == 404


def test_order_item_status(client, user_headers, admin_headers, order_body):
    place(client, order_body, user_headers)
    items = client.get("/api/order-items", headers=admin_headers).json()
    assert len(items) == 2

    item_id = items[0]["order_item_id"]
    res = client.put(f"/api/order-items/{item_id}/status", headers=admin_headers)
    assert res.json()["order_item"]["status"] == "Done Preparing"
    assert client.put(f"/api/order-items/{item_id}/status", json={"status": "In Progress"},
                      headers=admin_headers).status_code == 409


@pytest.mark.parametrize("current,target,allowed", [
    ("Pending", "In Progress", True),
    ("Pending", "Done Preparing", True),
    ("In Progress", "Done Preparing", True),
    ("In Progress", "Pending", False),
    ("Done Preparing", "Pending", False),
    ("Pending", "Pending", False),
    ("Cancelled", "Pending", False),
])
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_status_enum_values():
    assert [s.value for s in OrderStatus] == ["Pending", "In Progress", "Done Preparing"]
