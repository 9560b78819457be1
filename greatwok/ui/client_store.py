"""
Client-side session state

Everything the client remembers between launches (token, who is logged in,
a cached copy of the cart) lives here and is mirrored into flet's client
storage under ``greatwok.*`` keys. Views read it from the store instead of
poking at storage directly.
"""
import logging
import time

import jwt

logger = logging.getLogger(__name__)

KEY_PREFIX = "greatwok."
TOKEN_KEY = KEY_PREFIX + "token"
USER_ID_KEY = KEY_PREFIX + "user_id"
USERNAME_KEY = KEY_PREFIX + "username"
ROLE_KEY = KEY_PREFIX + "role"
CART_KEY = KEY_PREFIX + "cart"

ALL_KEYS = (TOKEN_KEY, USER_ID_KEY, USERNAME_KEY, ROLE_KEY, CART_KEY)


def token_expired(token: str, now: float = None) -> bool:
    """Read ``exp`` without checking the signature; the server still verifies it."""
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return True
    exp = payload.get("exp")
    if exp is None:
        return False
    return (now if now is not None else time.time()) >= exp


class ClientStore:
    def __init__(self, storage):
        # ``storage`` is page.client_storage or anything with get/set/remove
        self._storage = storage
        self.token = None
        self.user_id = None
        self.username = None
        self.role = None
        self.cart = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def hydrate(self) -> bool:
        """Load a saved session; drops it if the token is missing or expired."""
        token = self._storage.get(TOKEN_KEY)
        if not token or token_expired(token):
            if token:
                logger.info("Saved session expired, clearing it")
            self.clear()
            return False

        self.token = token
        self.user_id = self._storage.get(USER_ID_KEY)
        self.username = self._storage.get(USERNAME_KEY)
        self.role = self._storage.get(ROLE_KEY)
        self.cart = self._storage.get(CART_KEY)
        return True

    def save_session(self, user: dict, token: str):
        self.token = token
        self.user_id = user.get("user_id")
        self.username = user.get("username")
        self.role = user.get("role")
        self.cart = None

        self._storage.set(TOKEN_KEY, token)
        self._storage.set(USER_ID_KEY, self.user_id)
        self._storage.set(USERNAME_KEY, self.username)
        self._storage.set(ROLE_KEY, self.role)
        self._storage.remove(CART_KEY)

    def set_cart(self, items: list):
        self.cart = items
        self._storage.set(CART_KEY, items)

    def invalidate_cart(self):
        self.cart = None
        self._storage.remove(CART_KEY)

    def clear(self):
        self.token = None
        self.user_id = None
        self.username = None
        self.role = None
        self.cart = None
        for key in ALL_KEYS:
            self._storage.remove(key)
