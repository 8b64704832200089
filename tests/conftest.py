import pytest

from app.application.passcodes import PasscodeService
from app.domain.entities import Customer
from app.infrastructure.memory.verification_store import InMemoryVerificationStore
from tests.fakes import (
    FIXED_CODE,
    FakeClock,
    FakeEmailOK,
    FakeSessions,
    FakeStorefront,
)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store():
    return InMemoryVerificationStore()


@pytest.fixture()
def email():
    return FakeEmailOK()


@pytest.fixture()
def passcodes(store, email, clock):
    return PasscodeService(store, email, ttl_seconds=600, clock=clock)


@pytest.fixture()
def existing_customer() -> Customer:
    return Customer(id="42", email="a@example.com", first_name="Ada", last_name="L")


@pytest.fixture()
def storefront(existing_customer):
    return FakeStorefront([existing_customer])


@pytest.fixture()
def sessions():
    return FakeSessions()


@pytest.fixture(autouse=True)
def patch_code(monkeypatch):
    """
    Make the 6-digit code deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from app.domain import services as domain_services

    monkeypatch.setattr(domain_services, "generate_6digit_code", lambda: FIXED_CODE)
    yield
