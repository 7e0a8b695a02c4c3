from fastapi import APIRouter
from camera_resolver.api.v1.endpoints import (
    health,
    store,
    catalog,
    devices,
    selection,
    capture,
)

api_router = APIRouter()

# --- HTTP API Endpoints ---
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(store.router, prefix="/store", tags=["Store"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
api_router.include_router(devices.router, prefix="/devices", tags=["Devices"])
api_router.include_router(selection.router, prefix="/selection", tags=["Selection"])
api_router.include_router(capture.router, prefix="/capture", tags=["Capture"])
