import pytest

from storemanager import create_app
from storemanager.auth import issue_token
from storemanager.db import QueryResult
from storemanager.helpers import CategoryHelper, ProductHelper, UserHelper

JWT_KEY = "storemanager-test-signing-key-0123456789"


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "DATABASE_URL": f"sqlite:///{tmp_path / 'store.db'}",
        "JWT_KEY": JWT_KEY,
        "LOG_LEVEL": "WARNING",
    })
    yield app
    app.extensions["store"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions["store"]


@pytest.fixture
def users(store):
    helper = UserHelper(store)
    owner = helper.create_owner("Olu Owner", "owner@shop.test", "owner-pass")
    admin = helper.create_user(
        {"name": "Ada Admin", "email": "admin@shop.test", "password": "admin-pass", "role": "Admin"}
    )
    attendant = helper.create_user(
        {"name": "Tayo Attendant", "email": "attendant@shop.test", "password": "attendant-pass"}
    )
    return {"Owner": owner, "Admin": admin, "Attendant": attendant}


@pytest.fixture
def headers(users):
    def _headers(role="Admin"):
        return {"Authorization": f"Bearer {issue_token(users[role], JWT_KEY)}"}
    return _headers


@pytest.fixture
def category(store):
    return CategoryHelper(store).create_category({"name": "Beverages"})


@pytest.fixture
def product_helper(store):
    return ProductHelper(store)


@pytest.fixture
def make_products(product_helper, category):
    def _make(count, **overrides):
        created = []
        for i in range(count):
            product = {
                "name": f"Product {i + 1:02d}",
                "categoryid": category["category_id"],
                "price": 100.0 + i,
                "quantity": 20 + i,
                "description": None,
            }
            product.update(overrides)
            created.append(product_helper.create_product(product))
        return created
    return _make


class RecordingStore:
    """Answers every query with the same count and remembers what was asked."""

    def __init__(self, count):
        self.count = count
        self.queries = []

    def execute(self, query):
        self.queries.append(query)
        return QueryResult(1, [{"count": self.count}])


@pytest.fixture
def recording_store():
    return RecordingStore
