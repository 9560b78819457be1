from greatwok.models.order import Order


ADDRESS = {
    "address_line": "8 Dragon Lane",
    "city": "Melbourne",
    "state": "VIC",
    "country": "Australia",
    "postal_code": "3000",
}


def test_address_crud(client, customer, user_headers):
    created = client.post("/api/address", json={"user_id": customer.user_id, **ADDRESS}, headers=user_headers)
    assert created.status_code == 201
    address_id = created.json()["address_id"]

    listed = client.get(f"/api/addresses/{customer.user_id}", headers=user_headers).json()
    assert [a["address_id"] for a in listed] == [address_id]

    updated = client.put(f"/api/address/{address_id}", json={"city": "Geelong"}, headers=user_headers)
    assert updated.json()["city"] == "Geelong"
    assert updated.json()["postal_code"] == "3000"

    assert client.delete(f"/api/address/{address_id}", headers=user_headers).status_code == 200
    assert client.get(f"/api/address/{address_id}", headers=user_headers).status_code == 404


def test_blank_fields_rejected(client, customer, user_headers):
    res = client.post("/api/address", json={"user_id": customer.user_id, **ADDRESS, "city": "   "},
                      headers=user_headers)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "city"


def test_addresses_are_private(client, address, other_customer, headers_for, customer):
    intruder = headers_for(other_customer)
    assert client.get(f"/api/addresses/{customer.user_id}", headers=intruder).status_code == 403
    assert client.put(f"/api/address/{address.address_id}", json={"city": "X"}, headers=intruder).status_code == 403


def test_address_used_by_order_cannot_be_deleted(client, db_session, customer, user_headers, address):
    db_session.add(Order(user_id=customer.user_id, address_id=address.address_id, total_price=10))
    db_session.commit()
    assert client.delete(f"/api/address/{address.address_id}", headers=user_headers).status_code == 409
