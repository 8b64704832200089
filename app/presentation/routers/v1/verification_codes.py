from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.customer_auth import complete_login, complete_registration
from app.application.passcodes import PasscodeService
from app.domain.entities import Purpose
from app.domain.errors import (
    CustomerAlreadyExists,
    CustomerNotFound,
    VerificationError,
)
from app.domain.ports.session_store import SessionStorePort
from app.domain.ports.storefront import StorefrontPort
from app.presentation.dependencies import (
    get_passcode_service,
    get_sessions,
    get_storefront,
)
from app.schemas.requests import VerificationCodeIn, VerifyCodeIn
from app.schemas.responses import CodeSentOut, CustomerOut, SignedInOut

router = APIRouter(prefix="/verification-codes", tags=["Verification codes"])


@router.post("", response_model=CodeSentOut)
async def post_issue_code(
    body: VerificationCodeIn,
    passcodes: Annotated[PasscodeService, Depends(get_passcode_service)],
):
    # DeliveryFailed -> 502 via the UpstreamFailure handler in app.main
    await passcodes.issue_code(
        body.email, body.purpose, pending_identity=body.pending_identity()
    )
    return CodeSentOut()


@router.post("/verify", response_model=SignedInOut)
async def post_verify_code(
    body: VerifyCodeIn,
    passcodes: Annotated[PasscodeService, Depends(get_passcode_service)],
    storefront: Annotated[StorefrontPort, Depends(get_storefront)],
    sessions: Annotated[SessionStorePort, Depends(get_sessions)],
):
    try:
        if body.purpose is Purpose.REGISTRATION:
            signed_in = await complete_registration(
                passcodes,
                storefront,
                sessions,
                email=body.email,
                code=body.code,
                first_name=body.first_name,
                last_name=body.last_name,
            )
        else:
            signed_in = await complete_login(
                passcodes, storefront, sessions, email=body.email, code=body.code
            )
    except VerificationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail={"reason": e.reason}
        )
    except CustomerNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"reason": "customer_not_found"},
        )
    except CustomerAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail={"reason": "customer_exists"}
        )

    customer = CustomerOut.from_customer(signed_in.customer)
    return SignedInOut(
        **customer.model_dump(), session_token=signed_in.session_token
    )
