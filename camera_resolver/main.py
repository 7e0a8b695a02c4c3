from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import traceback

from camera_resolver.api.v1.router import api_router
from camera_resolver.websockets.v1.router import router as websocket_router
from camera_resolver.dependencies import get_selection_service, get_streaming_service
from camera_resolver.core.logging import logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    selection_service = get_selection_service()
    streaming_service = get_streaming_service()

    logger.info("Application startup: Starting background services...")

    # 스트리밍 구독을 먼저 등록해야 첫 스냅샷부터 클라이언트에 전달됩니다.
    await streaming_service.start()
    await selection_service.start()

    yield

    logger.info("Application shutdown: Stopping background services...")
    await selection_service.stop()
    await streaming_service.stop()

    logger.info("All background services have been stopped.")


app = FastAPI(title="Camera Resolver", lifespan=lifespan)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    error_details = traceback.format_exc()
    logger.error(f"Unhandled exception for request {request.method} {request.url}:\n{error_details}")
    return JSONResponse(status_code=500, content={"detail": "An internal server error occurred."})

# HTTP API 라우터 등록
app.include_router(api_router, prefix="/api")

# WebSocket 라우터 등록
app.include_router(websocket_router)
