import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.domain import sso
from app.domain.entities import SsoClaims
from app.domain.errors import ConfigurationError
from app.domain.services import utc_now
from app.presentation.dependencies import get_multipass_secret, get_shop_domain
from app.schemas.requests import SsoTokenIn
from app.schemas.responses import SsoTokenOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sso-tokens", tags=["SSO"])


@router.post("", response_model=SsoTokenOut)
async def post_sso_token(
    body: SsoTokenIn,
    secret: Annotated[str | None, Depends(get_multipass_secret)],
    shop_domain: Annotated[str, Depends(get_shop_domain)],
):
    claims = SsoClaims(
        email=body.email,
        created_at=utc_now(),
        first_name=body.first_name,
        last_name=body.last_name,
        return_to=body.return_to,
    )
    try:
        token = sso.build_token(claims, secret)
    except ConfigurationError:
        logger.error("SSO token requested but MULTIPASS_SECRET is not set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"reason": "configuration_error"},
        )
    return SsoTokenOut(token=token, login_url=sso.login_url(shop_domain, token))
