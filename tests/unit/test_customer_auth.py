import pytest

from app.application.customer_auth import complete_login, complete_registration
from app.domain.entities import PendingIdentity, Purpose
from app.domain.errors import (
    CodeMismatch,
    CustomerAlreadyExists,
    CustomerNotFound,
    PurposeMismatch,
    UpstreamFailure,
)
from tests.fakes import FIXED_CODE


@pytest.mark.asyncio
async def test_complete_login_opens_session(
    passcodes, storefront, sessions, existing_customer
):
    await passcodes.issue_code("A@example.com", Purpose.LOGIN)

    signed_in = await complete_login(
        passcodes, storefront, sessions, email="a@example.com", code=FIXED_CODE
    )

    assert signed_in.customer == existing_customer
    assert await sessions.get(signed_in.session_token) == existing_customer


@pytest.mark.asyncio
async def test_complete_login_unknown_customer(passcodes, storefront, sessions, store):
    await passcodes.issue_code("ghost@example.com", Purpose.LOGIN)

    with pytest.raises(CustomerNotFound):
        await complete_login(
            passcodes, storefront, sessions, email="ghost@example.com", code=FIXED_CODE
        )
    # the code was still consumed
    assert await store.get("ghost@example.com") is None


@pytest.mark.asyncio
async def test_complete_login_wrong_code_touches_nothing(
    passcodes, storefront, sessions
):
    await passcodes.issue_code("a@example.com", Purpose.LOGIN)

    with pytest.raises(CodeMismatch):
        await complete_login(
            passcodes, storefront, sessions, email="a@example.com", code="000000"
        )
    assert sessions._store == {}


@pytest.mark.asyncio
async def test_complete_registration_uses_pending_identity(
    passcodes, storefront, sessions
):
    await passcodes.issue_code(
        "new@example.com",
        Purpose.REGISTRATION,
        PendingIdentity(first_name="New", last_name="Person"),
    )

    signed_in = await complete_registration(
        passcodes, storefront, sessions, email="new@example.com", code=FIXED_CODE
    )

    assert storefront.created_customers == [
        {"email": "new@example.com", "first_name": "New", "last_name": "Person"}
    ]
    assert signed_in.customer.email == "new@example.com"
    assert await sessions.get(signed_in.session_token) == signed_in.customer


@pytest.mark.asyncio
async def test_complete_registration_prefers_submitted_names(
    passcodes, storefront, sessions
):
    await passcodes.issue_code(
        "new@example.com",
        Purpose.REGISTRATION,
        PendingIdentity(first_name="Old", last_name="Name"),
    )

    await complete_registration(
        passcodes,
        storefront,
        sessions,
        email="new@example.com",
        code=FIXED_CODE,
        first_name="Fresh",
    )

    created = storefront.created_customers[0]
    assert created["first_name"] == "Fresh"
    assert created["last_name"] == "Name"


@pytest.mark.asyncio
async def test_complete_registration_existing_customer(
    passcodes, storefront, sessions
):
    await passcodes.issue_code("a@example.com", Purpose.REGISTRATION)

    with pytest.raises(CustomerAlreadyExists):
        await complete_registration(
            passcodes, storefront, sessions, email="a@example.com", code=FIXED_CODE
        )
    assert storefront.created_customers == []


@pytest.mark.asyncio
async def test_registration_with_login_code_is_rejected(
    passcodes, storefront, sessions
):
    await passcodes.issue_code("new@example.com", Purpose.LOGIN)

    with pytest.raises(PurposeMismatch):
        await complete_registration(
            passcodes, storefront, sessions, email="new@example.com", code=FIXED_CODE
        )
    assert storefront.created_customers == []


@pytest.mark.asyncio
async def test_registration_keeps_code_when_platform_fails(
    passcodes, storefront, sessions, store, monkeypatch
):
    await passcodes.issue_code("new@example.com", Purpose.REGISTRATION)

    async def create_customer_down(**_kwargs):
        raise UpstreamFailure("platform responded 503", status_code=503)

    with monkeypatch.context() as m:
        m.setattr(storefront, "create_customer", create_customer_down)
        with pytest.raises(UpstreamFailure):
            await complete_registration(
                passcodes, storefront, sessions, email="new@example.com", code=FIXED_CODE
            )

    assert await store.get("new@example.com") is not None
    assert sessions._store == {}

    # the same code works once the platform is back
    signed_in = await complete_registration(
        passcodes, storefront, sessions, email="new@example.com", code=FIXED_CODE
    )
    assert signed_in.customer.email == "new@example.com"
    assert await store.get("new@example.com") is None


@pytest.mark.asyncio
async def test_registration_for_existing_customer_keeps_code(
    passcodes, storefront, sessions, store
):
    await passcodes.issue_code("a@example.com", Purpose.REGISTRATION)

    with pytest.raises(CustomerAlreadyExists):
        await complete_registration(
            passcodes, storefront, sessions, email="a@example.com", code=FIXED_CODE
        )
    assert await store.get("a@example.com") is not None
