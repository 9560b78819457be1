import os

# configuration is read at import time, so it has to be in place first
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("LOG_DIR", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from greatwok.app import create_app
from greatwok.core.auth_service import hash_password, create_token
from greatwok.core.db import Base, get_db
from greatwok.core.storage_service import get_uploader, public_url, object_name_for
from greatwok.models.user import User, ROLE_ADMIN, ROLE_USER
from greatwok.models.category import Category
from greatwok.models.dish import Dish
from greatwok.models.address import Address


class FakeUploader:
    bucket_name = "test-bucket"

    def __init__(self):
        self.uploads = []
        self.fail = False

    def upload(self, filename, data, content_type=None):
        if self.fail:
            raise RuntimeError("storage unavailable")
        name = object_name_for(filename)
        self.uploads.append((name, data, content_type))
        return public_url(self.bucket_name, name)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(session_factory, uploader):
    app = create_app(create_tables=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_uploader] = lambda: uploader
    return app


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def make_user(db, username="alice", email="alice@example.com", password="secret1", role=ROLE_USER):
    user = User(username=username, email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth(user):
    return {"Authorization": f"Bearer {create_token(user)}"}


@pytest.fixture
def user_factory(db_session):
    return lambda *args, **kwargs: make_user(db_session, *args, **kwargs)


@pytest.fixture
def headers_for():
    return auth


@pytest.fixture
def admin(db_session):
    return make_user(db_session, "admin", "admin@greatwok.com", "admin123", role=ROLE_ADMIN)


@pytest.fixture
def customer(db_session):
    return make_user(db_session)


@pytest.fixture
def other_customer(db_session):
    return make_user(db_session, "bob", "bob@example.com")


@pytest.fixture
def admin_headers(admin):
    return auth(admin)


@pytest.fixture
def user_headers(customer):
    return auth(customer)


@pytest.fixture
def category(db_session):
    category = Category(category_name="Wok Classics")
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture
def dishes(db_session, category):
    rows = [
        Dish(dish_name="Kung Pao Chicken", price="13.50", category_id=category.category_id),
        Dish(dish_name="Spring Rolls", price="6.50", category_id=category.category_id),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture
def address(db_session, customer):
    address = Address(user_id=customer.user_id, address_line="1 Harbour St", city="Sydney",
                      state="NSW", country="Australia", postal_code="2000")
    db_session.add(address)
    db_session.commit()
    return address
