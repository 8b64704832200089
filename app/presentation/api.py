from fastapi import APIRouter

from app.presentation.routers.v1.orders import router as orders_router
from app.presentation.routers.v1.products import router as products_router
from app.presentation.routers.v1.session import router as session_router
from app.presentation.routers.v1.sso import router as sso_router
from app.presentation.routers.v1.verification_codes import (
    router as verification_codes_router,
)
from app.presentation.routes.health import router as health_router

api = APIRouter()

# Add all v1 routers here
routers = (
    verification_codes_router,
    sso_router,
    session_router,
    orders_router,
    products_router,
)
for router in routers:
    api.include_router(router, prefix="/v1")

api.include_router(health_router)
