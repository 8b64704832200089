import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.presentation.dependencies import (
    get_email_port,
    get_multipass_secret,
    get_sessions,
    get_shop_domain,
    get_storefront,
)
from tests.fakes import FakeEmailOK, FakeSessions, FakeStorefront


@pytest.fixture()
def app_and_deps(existing_customer):
    app = create_app()
    email = FakeEmailOK()
    storefront = FakeStorefront([existing_customer])
    sessions = FakeSessions()

    app.dependency_overrides[get_email_port] = lambda: email
    app.dependency_overrides[get_storefront] = lambda: storefront
    app.dependency_overrides[get_sessions] = lambda: sessions
    app.dependency_overrides[get_multipass_secret] = lambda: "s"
    app.dependency_overrides[get_shop_domain] = lambda: "shop.example.com"

    try:
        yield app, {"email": email, "storefront": storefront, "sessions": sessions}
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def deps(app_and_deps):
    _, deps = app_and_deps
    return deps


@pytest.fixture()
def signed_in_token(deps, existing_customer) -> str:
    """A live session for the seeded customer."""
    sessions: FakeSessions = deps["sessions"]
    sessions._store["tok-seeded"] = existing_customer
    return "tok-seeded"
