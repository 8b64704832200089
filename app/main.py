import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.domain.errors import UpstreamFailure, ValidationError
from app.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter
from app.infrastructure.http.client import (
    close_http_client,
    open_http_client,
    get_http_client,
)
from app.infrastructure.memory.verification_store import InMemoryVerificationStore
from app.infrastructure.redis_cache.pool import get_redis, close_redis
from app.infrastructure.shop.admin_client import ShopifyAdminClient
from app.logging import setup_logging
from app.presentation.api import api
from app.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    await open_http_client(settings.http_timeout_seconds)

    get_redis()

    # Adapters share the HTTP client and never close it themselves
    email_adapter = HttpSmtpEmailAdapter(
        base_url=settings.smtp_base_url,
        client=get_http_client(),
    )
    storefront = ShopifyAdminClient(
        settings.shop_domain,
        settings.shop_access_token,
        client=get_http_client(),
        api_version=settings.shop_api_version,
    )
    app.state.email_adapter = email_adapter  # expose to dependencies
    app.state.storefront = storefront

    if not settings.multipass_secret:
        logger.warning("MULTIPASS_SECRET is not set; SSO tokens are disabled")

    try:
        yield
    finally:
        # shutdown
        await email_adapter.aclose()
        await storefront.aclose()
        await close_http_client()
        await close_redis()


async def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "details": [
                {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
                for e in exc.errors()
            ],
        },
    )


async def domain_validation_handler(
    _request: Request, exc: ValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"error": "validation_error", "details": str(exc)}
    )


async def upstream_failure_handler(
    request: Request, exc: UpstreamFailure
) -> JSONResponse:
    logger.warning(
        "upstream failure",
        extra={
            "path": request.url.path,
            "upstream_status": exc.status_code,
            "error": str(exc),
        },
    )
    return JSONResponse(
        status_code=502,
        content={
            "error": "upstream_failure",
            "message": str(exc),
            "upstream_status": exc.status_code,
            "details": exc.detail,
        },
    )


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Storefront Gateway", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    # process-wide; pending passcodes do not survive a restart
    app.state.verification_store = InMemoryVerificationStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(UpstreamFailure, upstream_failure_handler)

    app.include_router(api)
    return app


app = create_app()
