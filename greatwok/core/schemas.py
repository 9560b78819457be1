"""
Request schemas

Pydantic models validating every JSON body the API accepts. A failing model
short-circuits the request with 400 and a list of field errors (see core/errors.py).
"""
import re
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from greatwok.models.order import OrderStatus

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
PHONE_PATTERN = r'^\+?\d[\d\s-]{5,18}\d$'
URL_PATTERN = r'^https?://[^\s/$.?#].[^\s]*$'


def is_valid_email(email_str: str) -> bool:
    """Check if email format is valid"""
    return re.match(EMAIL_PATTERN, email_str or "") is not None


def is_valid_phone(phone: str) -> bool:
    return re.match(PHONE_PATTERN, phone or "") is not None


def _min_length(value: str, length: int, message: str) -> str:
    value = (value or "").strip()
    if len(value) < length:
        raise ValueError(message)
    return value


def _required(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


# ===================== USERS =====================

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def _check_password(value: str) -> str:
    if len(value) < 6:
        raise ValueError("Password must be at least 6 characters long")
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return value


class SignupRequest(BaseModel):
    username: str
    email: str
    password: str
    phone: Optional[str] = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        return _min_length(v, 3, "Username must be at least 3 characters long")

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        v = v.strip().lower()
        if not is_valid_email(v):
            raise ValueError("Please enter a valid email")
        return v

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return _check_password(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v in (None, ""):
            return None
        if not is_valid_phone(v):
            raise ValueError("Please enter a valid phone number")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        v = v.strip().lower()
        if not is_valid_email(v):
            raise ValueError("Please enter a valid email")
        return v

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return _check_password(v)


class PhoneUpdate(BaseModel):
    phone: str

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if not is_valid_phone(v):
            raise ValueError("Please enter a valid phone number")
        return v


# ===================== CATALOG =====================

class CategoryIn(BaseModel):
    category_name: str

    @field_validator("category_name")
    @classmethod
    def check_name(cls, v):
        return _min_length(v, 3, "Category name must be at least 3 characters long")


class DishCreate(BaseModel):
    dish_name: str
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category_id: Optional[int] = None
    image_url: Optional[str] = None
    is_available: bool = True

    @field_validator("dish_name")
    @classmethod
    def check_name(cls, v):
        return _min_length(v, 3, "Dish name must be at least 3 characters long")


# explicit null clears these; for the other dish fields null means "leave as is"
CLEARABLE_DISH_FIELDS = ("description", "category_id", "image_url")


class DishUpdate(BaseModel):
    dish_name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category_id: Optional[int] = None
    image_url: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("dish_name")
    @classmethod
    def check_name(cls, v):
        if v is None:
            return v
        return _min_length(v, 3, "Dish name must be at least 3 characters long.")

    @field_validator("image_url")
    @classmethod
    def check_url(cls, v):
        if v is not None and not re.match(URL_PATTERN, v):
            raise ValueError("Image URL must be a valid URL.")
        return v

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k in CLEARABLE_DISH_FIELDS}


class InventoryCreate(BaseModel):
    dish_id: int = Field(..., ge=1)
    quantity_in_stock: int = Field(..., ge=0)


class InventoryUpdate(BaseModel):
    quantity_in_stock: Optional[int] = Field(None, ge=0)
    # optimistic concurrency token; omit to overwrite unconditionally
    version: Optional[int] = None


class RestockRequest(BaseModel):
    quantity: int = Field(..., ge=1)


# ===================== CART & ADDRESSES =====================

class CartAdd(BaseModel):
    user_id: int = Field(..., ge=1)
    dish_id: int = Field(..., ge=1)
    quantity: int = Field(1, ge=1)


class CartUpdate(BaseModel):
    quantity: int = Field(..., ge=1)


class AddressCreate(BaseModel):
    user_id: int = Field(..., ge=1)
    address_line: str
    city: str
    state: str
    country: str
    postal_code: str

    @field_validator("address_line", "city", "state", "country", "postal_code")
    @classmethod
    def check_required(cls, v, info):
        return _required(v, info.field_name.replace("_", " ").capitalize())


class AddressUpdate(BaseModel):
    address_line: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None

    @field_validator("address_line", "city", "state", "country", "postal_code")
    @classmethod
    def check_required(cls, v, info):
        return _required(v, info.field_name.replace("_", " ").capitalize())


# ===================== ORDERS =====================

class OrderLine(BaseModel):
    dish_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class OrderCreate(BaseModel):
    user_id: int = Field(..., ge=1)
    total_price: Decimal = Field(..., ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    address_id: int = Field(..., ge=1)
    delivery_type: Literal["delivery", "pickup"] = "delivery"
    cart_items: List[OrderLine] = Field(..., min_length=1)
    clear_cart: bool = True


class StatusUpdate(BaseModel):
    status: OrderStatus = OrderStatus.DONE_PREPARING


# ===================== REVIEWS =====================

class ReviewCreate(BaseModel):
    user_id: int = Field(..., ge=1)
    dish_id: int = Field(..., ge=1)
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = None
