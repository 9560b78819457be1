from greatwok.models.cart import CartItem
from greatwok.models.dish import Dish
from greatwok.models.inventory import Inventory
from greatwok.models.order import Order, OrderItem


def test_categories_crud(client, admin_headers):
    res = client.post("/api/categories", json={"category_name": "  Noodles  "}, headers=admin_headers)
    assert res.status_code == 201
    category = res.json()
    assert category["category_name"] == "Noodles"

    cid = category["category_id"]
    renamed = client.put(f"/api/categories/{cid}", json={"category_name": "Noodles and Rice"}, headers=admin_headers)
    assert renamed.json()["category_name"] == "Noodles and Rice"

    assert [c["category_id"] for c in client.get("/api/categories").json()] == [cid]
    assert client.delete(f"/api/categories/{cid}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/categories/{cid}").status_code == 404


def test_short_category_name_is_rejected(client, admin_headers):
    res = client.post("/api/categories", json={"category_name": "ab"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["errors"] == [
        {"field": "category_name", "msg": "Category name must be at least 3 characters long"}
    ]


def test_deleting_category_keeps_dishes(client, db_session, admin_headers, category, dishes):
    assert client.delete(f"/api/categories/{category.category_id}", headers=admin_headers).status_code == 200
    db_session.expire_all()
    assert all(d.category_id is None for d in db_session.query(Dish).all())


def test_dish_price_round_trip(client, admin_headers, category):
    res = client.post("/api/dishes", json={
        "dish_name": "Mapo Tofu", "price": "12.50", "category_id": category.category_id,
    }, headers=admin_headers)
    assert res.status_code == 201
    dish_id = res.json()["dish_id"]

    fetched = client.get(f"/api/dishes/{dish_id}").json()
    assert fetched["price"] == 12.5
    assert fetched["is_available"] is True


def test_dish_validation(client, admin_headers, category):
    too_precise = client.post("/api/dishes", json={"dish_name": "Mapo Tofu", "price": "1.999"}, headers=admin_headers)
    assert too_precise.status_code == 400

    negative = client.post("/api/dishes", json={"dish_name": "Mapo Tofu", "price": -1}, headers=admin_headers)
    assert negative.status_code == 400

    bad_category = client.post("/api/dishes", json={"dish_name": "Mapo Tofu", "price": 3, "category_id": 999},
                               headers=admin_headers)
    assert bad_category.status_code == 400
    assert bad_category.json()["error"] == "Invalid category_id. The category does not exist."


def test_missing_dish_is_404(client):
    assert client.get("/api/dishes/12345").status_code == 404


def test_list_dishes_filters(client, db_session, dishes):
    dishes[1].is_available = False
    db_session.commit()
    available = client.get("/api/dishes", params={"available": "true"}).json()
    assert [d["dish_name"] for d in available] == ["Kung Pao Chicken"]


def test_partial_dish_update(client, admin_headers, dishes):
    dish_id = dishes[0].dish_id
    res = client.put(f"/api/dishes/{dish_id}", json={"price": "14.00", "image_url": "https://cdn.example.com/a.png"},
                     headers=admin_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["price"] == 14.0
    assert body["dish_name"] == "Kung Pao Chicken"

    bad_url = client.put(f"/api/dishes/{dish_id}", json={"image_url": "not a url"}, headers=admin_headers)
    assert bad_url.status_code == 400


def test_dish_update_can_clear_optional_fields(client, admin_headers, dishes):
    dish_id = dishes[0].dish_id
    client.put(f"/api/dishes/{dish_id}", json={"description": "Numbing and hot"}, headers=admin_headers)

    res = client.put(f"/api/dishes/{dish_id}", json={"description": None, "category_id": None, "price": None},
                     headers=admin_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["description"] is None
    assert body["category_id"] is None
    assert body["price"] == 13.5


def test_non_admin_cannot_delete_dish(client, db_session, user_headers, dishes):
    dish_id = dishes[0].dish_id
    res = client.delete(f"/api/dishes/{dish_id}", headers=user_headers)
    assert res.status_code == 403
    db_session.expire_all()
    assert db_session.get(Dish, dish_id).dish_name == "Kung Pao Chicken"


def test_delete_dish_removes_dependents(client, db_session, admin_headers, customer, dishes):
    dish_id = dishes[0].dish_id
    db_session.add_all([
        Inventory(dish_id=dish_id, quantity_in_stock=5),
        CartItem(user_id=customer.user_id, dish_id=dish_id, quantity=2),
    ])
    db_session.commit()

    assert client.delete(f"/api/dishes/{dish_id}", headers=admin_headers).status_code == 200
    db_session.expire_all()
    assert db_session.get(Dish, dish_id) is None
    assert db_session.query(CartItem).count() == 0
    assert db_session.query(Inventory).count() == 0


def test_delete_ordered_dish_conflicts(client, db_session, admin_headers, customer, dishes):
    order = Order(user_id=customer.user_id, total_price=13.5)
    order.items.append(OrderItem(dish_id=dishes[0].dish_id, quantity=1, price=13.5))
    db_session.add(order)
    db_session.commit()

    res = client.delete(f"/api/dishes/{dishes[0].dish_id}", headers=admin_headers)
    assert res.status_code == 409


def test_admin_actions_are_audited(client, admin_headers, user_headers):
    client.post("/api/categories", json={"category_name": "Desserts"}, headers=admin_headers)

    assert client.get("/api/audit-logs", headers=user_headers).status_code == 403
    logs = client.get("/api/audit-logs", headers=admin_headers).json()
    assert logs[0]["user_email"] == "admin@greatwok.com"
    assert "Desserts" in logs[0]["action"]
