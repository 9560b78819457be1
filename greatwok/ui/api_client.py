# ui/api_client.py
import logging
import uuid
from decimal import Decimal, ROUND_HALF_UP

import requests

from greatwok.core import config

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
CENTS = Decimal("0.01")


class ApiError(Exception):
    """The API answered with an error status (status 0 means it could not be reached)."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if body.get("error"):
            return str(body["error"])
        if body.get("errors"):
            return "; ".join(e.get("msg", "") for e in body["errors"] if e.get("msg"))
    return f"Request failed ({response.status_code})"


def cart_total(cart_items) -> Decimal:
    total = sum((Decimal(str(i["price"])) * i["quantity"] for i in cart_items), Decimal("0"))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def build_order_payload(user_id, address_id, cart_items, delivery_type="delivery"):
    """Snapshot the cart lines into the body POST /api/orders expects."""
    return {
        "user_id": user_id,
        "address_id": address_id,
        "delivery_type": delivery_type,
        "total_price": str(cart_total(cart_items)),
        "cart_items": [
            {"dish_id": i["dish_id"], "quantity": i["quantity"], "price": str(i["price"])}
            for i in cart_items
        ],
    }


def new_idempotency_key() -> str:
    return uuid.uuid4().hex


class ApiClient:
    def __init__(self, store, base_url: str = None, session=None, timeout: int = DEFAULT_TIMEOUT):
        self.store = store
        self.base_url = (base_url or config.BACKEND_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ===================== PLUMBING =====================

    def _request(self, method, path, json=None, files=None, headers=None, auth=True):
        headers = dict(headers or {})
        if auth and self.store.token:
            headers["Authorization"] = f"Bearer {self.store.token}"

        try:
            response = self.session.request(method, f"{self.base_url}/api{path}", json=json,
                                            files=files, headers=headers, timeout=self.timeout)
        except requests.RequestException as ex:
            logger.error("%s %s failed: %s", method, path, ex)
            raise ApiError(0, "Could not reach the server. Please try again.") from ex

        if response.status_code == 401 and auth:
            self.store.clear()
        if not response.ok:
            raise ApiError(response.status_code, error_message(response))
        return response.json() if response.content else None

    def _start_session(self, data):
        self.store.save_session(data["user"], data["token"])
        return data["user"]

    # ===================== AUTH & PROFILE =====================

    def signup(self, username, email, password, phone=None):
        body = {"username": username, "email": email, "password": password}
        if phone:
            body["phone"] = phone
        return self._start_session(self._request("POST", "/users", json=body, auth=False))

    def login(self, email, password):
        data = self._request("POST", "/login", json={"email": email, "password": password}, auth=False)
        return self._start_session(data)

    def guest_login(self):
        return self._start_session(self._request("POST", "/guest", auth=False))

    def logout(self):
        self.store.clear()

    def get_profile(self):
        return self._request("GET", "/profile")["user"]

    def update_phone(self, phone):
        return self._request("PUT", "/profile/phone", json={"phone": phone})

    def list_users(self):
        return self._request("GET", "/users")

    # ===================== CATALOG =====================

    def list_categories(self):
        return self._request("GET", "/categories", auth=False)

    def create_category(self, name):
        return self._request("POST", "/categories", json={"category_name": name})

    def update_category(self, category_id, name):
        return self._request("PUT", f"/categories/{category_id}", json={"category_name": name})

    def delete_category(self, category_id):
        return self._request("DELETE", f"/categories/{category_id}")

    def list_dishes(self):
        return self._request("GET", "/dishes", auth=False)

    def create_dish(self, data: dict):
        return self._request("POST", "/dishes", json=data)

    def update_dish(self, dish_id, data: dict):
        return self._request("PUT", f"/dishes/{dish_id}", json=data)

    def delete_dish(self, dish_id):
        return self._request("DELETE", f"/dishes/{dish_id}")

    def upload_image(self, filename, data: bytes, content_type="application/octet-stream"):
        result = self._request("POST", "/upload", files={"file": (filename, data, content_type)})
        return result["imageUrl"]

    def list_inventory(self):
        return self._request("GET", "/inventory", auth=False)

    def create_inventory(self, dish_id, quantity):
        return self._request("POST", "/inventory", json={"dish_id": dish_id, "quantity_in_stock": quantity})

    def update_inventory(self, inventory_id, quantity, version=None):
        body = {"quantity_in_stock": quantity}
        if version is not None:
            body["version"] = version
        return self._request("PUT", f"/inventory/{inventory_id}", json=body)

    def restock(self, inventory_id, quantity):
        return self._request("POST", f"/inventory/{inventory_id}/restock", json={"quantity": quantity})

    def delete_inventory(self, inventory_id):
        return self._request("DELETE", f"/inventory/{inventory_id}")

    # ===================== CART =====================

    def get_cart(self, refresh=False):
        if self.store.cart is not None and not refresh:
            return self.store.cart
        items = self._request("GET", f"/cart/{self.store.user_id}")
        self.store.set_cart(items)
        return items

    def add_to_cart(self, dish_id, quantity=1):
        body = {"user_id": self.store.user_id, "dish_id": dish_id, "quantity": quantity}
        result = self._request("POST", "/cart", json=body)
        self.store.invalidate_cart()
        return result

    def update_cart_item(self, cart_item_id, quantity):
        result = self._request("PUT", f"/cart/item/{cart_item_id}", json={"quantity": quantity})
        self.store.invalidate_cart()
        return result

    def remove_cart_item(self, cart_item_id):
        result = self._request("DELETE", f"/cart/item/{cart_item_id}")
        self.store.invalidate_cart()
        return result

    def clear_cart(self):
        result = self._request("DELETE", f"/cart/{self.store.user_id}")
        self.store.invalidate_cart()
        return result

    # ===================== ADDRESSES =====================

    def list_addresses(self):
        return self._request("GET", f"/addresses/{self.store.user_id}")

    def create_address(self, address_line, city, state, country, postal_code):
        body = {
            "user_id": self.store.user_id,
            "address_line": address_line,
            "city": city,
            "state": state,
            "country": country,
            "postal_code": postal_code,
        }
        return self._request("POST", "/address", json=body)

    def delete_address(self, address_id):
        return self._request("DELETE", f"/address/{address_id}")

    # ===================== ORDERS =====================

    def place_order(self, address_id, cart_items, delivery_type="delivery", idempotency_key=None):
        """
        Submit the cart snapshot as an order.

        Pass the same ``idempotency_key`` when retrying one checkout attempt so
        the server never books it twice.
        """
        payload = build_order_payload(self.store.user_id, address_id, cart_items, delivery_type)
        headers = {"Idempotency-Key": idempotency_key or new_idempotency_key()}
        result = self._request("POST", "/orders", json=payload, headers=headers)
        self.store.invalidate_cart()
        return result["order"]

    def my_orders(self):
        return self._request("GET", f"/orders/user/{self.store.user_id}")

    def order_items(self, order_id):
        return self._request("GET", f"/orders/{order_id}/items")

    def all_orders(self):
        return self._request("GET", "/orders")

    def all_order_items(self):
        return self._request("GET", "/order-items")

    def set_order_status(self, order_id, status=None):
        return self._request("PUT", f"/orders/{order_id}/status", json={"status": status} if status else None)

    def set_order_item_status(self, order_item_id, status=None):
        return self._request("PUT", f"/order-items/{order_item_id}/status",
                             json={"status": status} if status else None)

    # ===================== REVIEWS =====================

    def list_reviews(self):
        return self._request("GET", "/reviews", auth=False)

    def create_review(self, dish_id, rating, comment=None):
        body = {"user_id": self.store.user_id, "dish_id": dish_id, "rating": rating, "comment": comment}
        return self._request("POST", "/reviews", json=body)

    def delete_review(self, review_id):
        return self._request("DELETE", f"/reviews/{review_id}")
