import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from protean import current_domain

# Keep password hashing cheap in tests; settings are read on every access.
os.environ.setdefault("BCRYPT_ROUNDS", "4")


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    from storefront.catalogue.product import Product

    def _make(name="Widget", description="A dependable widget", price=10.0, **attributes):
        product = Product.create(name=name, description=description, price=price, **attributes)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def make_user():
    from storefront.account.user import Role, User

    counter = {"n": 0}

    def _make(name="Test Shopper", email=None, role=Role.USER.value):
        counter["n"] += 1
        user = User.register(
            name=name,
            email=email or f"shopper{counter['n']}@example.com",
            password_hash="not-a-real-hash",
            role=role,
        )
        current_domain.repository_for(User).add(user)
        return user

    return _make


@pytest.fixture()
def customer(make_user):
    return make_user(name="Casey Customer", email="casey@example.com")


@pytest.fixture()
def other_customer(make_user):
    return make_user(name="Olive Other", email="olive@example.com")


@pytest.fixture()
def admin(make_user):
    from storefront.account.user import Role

    return make_user(name="Ada Admin", email="ada@example.com", role=Role.ADMIN.value)


@pytest.fixture()
def product(make_product):
    return make_product(name="Notebook", price=12.5, image="https://img.example.com/notebook.png")


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client(_storefront_domain):
    from storefront.api.app import build_app

    return TestClient(build_app())


@pytest.fixture()
def auth_headers():
    from storefront.account.auth import issue_token

    def _headers(user):
        return {"Authorization": f"Bearer {issue_token(user.id)}"}

    return _headers
