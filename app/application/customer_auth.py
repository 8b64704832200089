import logging
from dataclasses import dataclass

from app.application.passcodes import PasscodeService
from app.domain.entities import Customer, Purpose
from app.domain.errors import CustomerAlreadyExists, CustomerNotFound
from app.domain.ports.session_store import SessionStorePort
from app.domain.ports.storefront import StorefrontPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedInCustomer:
    customer: Customer
    session_token: str


async def complete_login(
    passcodes: PasscodeService,
    storefront: StorefrontPort,
    sessions: SessionStorePort,
    email: str,
    code: str,
) -> SignedInCustomer:
    identity = await passcodes.verify_code(email, code, Purpose.LOGIN)

    customer = await storefront.find_customer_by_email(identity.email)
    if customer is None:
        raise CustomerNotFound()

    token = await sessions.create(customer)
    logger.info("customer signed in", extra={"customer_id": customer.id})
    return SignedInCustomer(customer=customer, session_token=token)


async def complete_registration(
    passcodes: PasscodeService,
    storefront: StorefrontPort,
    sessions: SessionStorePort,
    email: str,
    code: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> SignedInCustomer:
    # the code stays redeemable until the platform has created the customer
    async with passcodes.redeem(email, code, Purpose.REGISTRATION) as identity:
        if await storefront.find_customer_by_email(identity.email) is not None:
            raise CustomerAlreadyExists()

        customer = await storefront.create_customer(
            email=identity.email,
            first_name=first_name or identity.first_name,
            last_name=last_name or identity.last_name,
        )

    token = await sessions.create(customer)
    logger.info("customer registered", extra={"customer_id": customer.id})
    return SignedInCustomer(customer=customer, session_token=token)
