from greatwok.models.category import Category
from greatwok.models.dish import Dish


def test_add_merges_quantity_for_same_dish(client, customer, user_headers, dishes):
    body = {"user_id": customer.user_id, "dish_id": dishes[0].dish_id, "quantity": 1}
    first = client.post("/api/cart", json=body, headers=user_headers)
    assert first.status_code == 201

    second = client.post("/api/cart", json={**body, "quantity": 2}, headers=user_headers)
    assert second.status_code == 200
    assert second.json()["quantity"] == 3

    cart = client.get(f"/api/cart/{customer.user_id}", headers=user_headers).json()
    assert len(cart) == 1
    assert cart[0]["quantity"] == 3
    assert cart[0]["dish_name"] == "Kung Pao Chicken"
    assert cart[0]["price"] == 13.5


def test_guest_can_fill_a_cart(client, db_session):
    category = Category(category_name="Specials")
    db_session.add(category)
    db_session.commit()
    db_session.add_all([Dish(dish_name=f"Special {n}", price=n + 0.5, category_id=category.category_id)
                        for n in range(1, 8)])
    db_session.commit()
    assert db_session.get(Dish, 7) is not None

    guest = client.post("/api/guest").json()
    headers = {"Authorization": f"Bearer {guest['token']}"}
    user_id = guest["user"]["user_id"]

    added = client.post("/api/cart", json={"user_id": user_id, "dish_id": 7, "quantity": 1}, headers=headers)
    assert added.status_code == 201

    cart = client.get(f"/api/cart/{user_id}", headers=headers).json()
    assert len(cart) == 1
    assert cart[0]["dish_id"] == 7
    assert cart[0]["quantity"] == 1
    assert cart[0]["price"] is not None


def test_unknown_dish_is_404(client, customer, user_headers):
    res = client.post("/api/cart", json={"user_id": customer.user_id, "dish_id": 404}, headers=user_headers)
    assert res.status_code == 404


def test_update_and_remove(client, customer, user_headers, dishes):
    item = client.post("/api/cart", json={"user_id": customer.user_id, "dish_id": dishes[0].dish_id},
                       headers=user_headers).json()
    client.post("/api/cart", json={"user_id": customer.user_id, "dish_id": dishes[1].dish_id, "quantity": 2},
                headers=user_headers)

    updated = client.put(f"/api/cart/item/{item['cart_item_id']}", json={"quantity": 4}, headers=user_headers)
    assert updated.json()["quantity"] == 4
    assert client.put(f"/api/cart/item/{item['cart_item_id']}", json={"quantity": 0},
                      headers=user_headers).status_code == 400

    lines = client.get(f"/api/cart/{customer.user_id}", headers=user_headers).json()
    assert sum(line["quantity"] for line in lines) == 6

    assert client.delete(f"/api/cart/item/{item['cart_item_id']}", headers=user_headers).status_code == 200
    assert client.get(f"/api/cart/item/{item['cart_item_id']}", headers=user_headers).status_code == 404

    cleared = client.delete(f"/api/cart/{customer.user_id}", headers=user_headers)
    assert cleared.json()["removed"] == 1
    assert client.get(f"/api/cart/{customer.user_id}", headers=user_headers).json() == []


def test_cart_is_private(client, customer, other_customer, headers_for, user_headers, dishes):
    item = client.post("/api/cart", json={"user_id": customer.user_id, "dish_id": dishes[0].dish_id},
                       headers=user_headers).json()
    intruder = headers_for(other_customer)

    assert client.get(f"/api/cart/{customer.user_id}", headers=intruder).status_code == 403
    assert client.delete(f"/api/cart/item/{item['cart_item_id']}", headers=intruder).status_code == 403
    assert client.post("/api/cart", json={"user_id": customer.user_id, "dish_id": dishes[0].dish_id},
                       headers=intruder).status_code == 403
    assert client.get(f"/api/cart/{customer.user_id}").status_code == 401
