from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends
from camera_resolver.websockets.connection_manager import ConnectionManager
from camera_resolver.websockets.streaming_service import DEVICES_STREAM, SELECTION_STREAM
from camera_resolver.dependencies import get_connection_manager
from camera_resolver.core.logging import logger

router = APIRouter()

async def _websocket_handler(websocket: WebSocket, stream_id: str, manager: ConnectionManager):
    """
    웹소켓 연결을 처리하는 공통 핸들러 함수입니다.
    - 클라이언트가 접속하면 ConnectionManager에 등록합니다.
    - 연결이 끊어지면 자동으로 등록을 해제합니다.
    """
    await manager.connect(stream_id, websocket)
    try:
        # 클라이언트 메시지는 사용하지 않으며, 연결 유지를 위해서만 수신합니다.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info(f"Client at {websocket.client} disconnected from stream '{stream_id}'.")
    finally:
        await manager.disconnect(stream_id, websocket)


@router.websocket("/ws/selection")
async def ws_selection(
    websocket: WebSocket,
    manager: ConnectionManager = Depends(get_connection_manager)
):
    """SelectionState 변경 및 엔진 오류 결과를 구독합니다."""
    await _websocket_handler(websocket, SELECTION_STREAM, manager)

@router.websocket("/ws/devices")
async def ws_devices(
    websocket: WebSocket,
    manager: ConnectionManager = Depends(get_connection_manager)
):
    """분류/중복제거된 디바이스 목록 갱신을 구독합니다."""
    await _websocket_handler(websocket, DEVICES_STREAM, manager)
