from typing import Annotated

from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPAuthorizationCredentials

from app.domain.entities import Customer
from app.domain.ports.session_store import SessionStorePort
from app.presentation.dependencies import (
    bearer_scheme,
    get_current_customer,
    get_sessions,
)
from app.schemas.responses import CustomerOut, OkOut

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("", response_model=CustomerOut)
async def get_session(
    customer: Annotated[Customer, Depends(get_current_customer)],
):
    return CustomerOut.from_customer(customer)


@router.delete("", response_model=OkOut)
async def delete_session(
    auth: Annotated[HTTPAuthorizationCredentials, Security(bearer_scheme)],
    sessions: Annotated[SessionStorePort, Depends(get_sessions)],
):
    # logging out twice is not an error
    await sessions.revoke(auth.credentials)
    return OkOut()
