import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the domain and push its context so it can be referred to
    elsewhere as `current_domain`.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from agrigo.domain import agrigo

    agrigo.init()
    agrigo.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from agrigo.domain import agrigo
    from agrigo.utils.db import drop_db, setup_db

    setup_db(agrigo)

    yield

    drop_db(agrigo)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    from agrigo.identity.provider import reset_identity_provider

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_identity_provider()


# ---------------------------------------------------------------------------
# Shared marketplace fixtures
# ---------------------------------------------------------------------------
def _register(name, email, role, farm_name=None):
    from protean import current_domain

    from agrigo.identity.registration import RegisterUser
    from agrigo.identity.user import User

    user_id = current_domain.process(
        RegisterUser(
            name=name,
            email=email,
            password="harvest-123",
            phone="9800000000",
            role=role,
            farm_name=farm_name,
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(User).get(user_id)


@pytest.fixture()
def farmer():
    return _register("Asha Patil", "asha@greenacres.test", "farmer", farm_name="Green Acres")


@pytest.fixture()
def other_farmer():
    return _register("Ravi Kumar", "ravi@sunfields.test", "farmer", farm_name="Sun Fields")


@pytest.fixture()
def consumer():
    return _register("Meera Shah", "meera@example.test", "consumer")


@pytest.fixture()
def other_consumer():
    return _register("Dev Rao", "dev@example.test", "consumer")


@pytest.fixture()
def list_product():
    """Factory listing a product for a farmer and returning its id."""
    from protean import current_domain

    from agrigo.catalogue.listing import ListProduct

    def _list(owner, name="Tomatoes", price=40.0, quantity=10, unit="kg"):
        return current_domain.process(
            ListProduct(
                farmer_id=str(owner.id),
                name=name,
                description=f"Fresh {name.lower()}",
                price=price,
                quantity=quantity,
                unit=unit,
                category="vegetables",
            ),
            asynchronous=False,
        )

    return _list


@pytest.fixture()
def stock_of():
    """Current quantity-on-hand of a product."""
    from protean import current_domain

    from agrigo.catalogue.product import Product

    def _stock(product_id):
        return current_domain.repository_for(Product).get(product_id).quantity

    return _stock


@pytest.fixture()
def auth_headers():
    """Factory building a bearer header for a registered, logged-in user."""
    from protean import current_domain

    from agrigo.identity.port import Principal
    from agrigo.identity.provider import get_identity_provider
    from agrigo.identity.token_record import RecordTokens

    def _headers(user):
        principal = Principal(user_id=str(user.id), role=user.role, name=user.name)
        provider = get_identity_provider()
        token = provider.issue_access_token(principal)
        current_domain.process(
            RecordTokens(
                user_id=principal.user_id,
                access_token=token,
                refresh_token=provider.issue_refresh_token(principal),
            ),
            asynchronous=False,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from agrigo.app import create_app

    return TestClient(create_app(init_domain=False))
