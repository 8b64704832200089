from typing import Annotated

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.passcodes import PasscodeService
from app.domain.entities import Customer
from app.domain.ports.email_port import EmailPort
from app.domain.ports.session_store import SessionStorePort
from app.domain.ports.storefront import StorefrontPort
from app.domain.ports.verification_store import VerificationStorePort
from app.infrastructure.redis_cache.pool import get_redis
from app.infrastructure.redis_cache.sessions import RedisSessions
from app.settings import get_settings

bearer_scheme = HTTPBearer()


def get_verification_store(request: Request) -> VerificationStorePort:
    # Created once in app.main create_app()
    return request.app.state.verification_store


def get_email_port(request: Request) -> EmailPort:
    # This is set in app.main lifespan()
    return request.app.state.email_adapter


def get_storefront(request: Request) -> StorefrontPort:
    # This is set in app.main lifespan()
    return request.app.state.storefront


def get_code_ttl_seconds() -> int:
    return get_settings().code_ttl_seconds


def get_passcode_service(
    store: Annotated[VerificationStorePort, Depends(get_verification_store)],
    email_port: Annotated[EmailPort, Depends(get_email_port)],
    ttl_seconds: Annotated[int, Depends(get_code_ttl_seconds)],
) -> PasscodeService:
    return PasscodeService(store, email_port, ttl_seconds=ttl_seconds)


def get_sessions() -> SessionStorePort:
    return RedisSessions(get_redis(), ttl_seconds=get_settings().session_ttl_seconds)


def get_multipass_secret() -> str | None:
    return get_settings().multipass_secret


def get_shop_domain() -> str:
    return get_settings().shop_domain


async def get_current_customer(
    auth: Annotated[HTTPAuthorizationCredentials, Security(bearer_scheme)],
    sessions: Annotated[SessionStorePort, Depends(get_sessions)],
) -> Customer:
    customer = await sessions.get(auth.credentials)
    if customer is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid or expired token"
        )
    return customer
