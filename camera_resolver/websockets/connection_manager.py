from typing import Dict, Set
import asyncio
from fastapi import WebSocket
from starlette.websockets import WebSocketState

from camera_resolver.core.logging import logger

class ConnectionManager:
    """
    웹소켓 연결을 중앙에서 관리하는 클래스입니다.
    - 스트림 ID(selection, devices)별로 렌더링 클라이언트 구독을 관리합니다.
    - 전송에 실패한 클라이언트는 자동으로 정리되어 다른 구독자에게 영향을 주지 않습니다.
    """
    def __init__(self):
        self.subscriptions: Dict[str, Set[WebSocket]] = {}
        self._lock = asyncio.Lock()

    async def connect(self, stream_id: str, websocket: WebSocket):
        """클라이언트를 특정 스트림의 구독자로 추가합니다."""
        await websocket.accept()
        async with self._lock:
            self.subscriptions.setdefault(stream_id, set()).add(websocket)
            logger.info(f"Client connected to stream '{stream_id}'. Total subscribers: {len(self.subscriptions[stream_id])}")

    async def disconnect(self, stream_id: str, websocket: WebSocket):
        """클라이언트 연결을 해제하고 구독자 목록에서 제거합니다."""
        async with self._lock:
            self._remove(stream_id, websocket)

    def has_subscribers(self, stream_id: str) -> bool:
        return len(self.subscriptions.get(stream_id, ())) > 0

    async def broadcast_text(self, stream_id: str, data: str):
        """특정 스트림의 모든 구독자에게 JSON 텍스트를 순서대로 전송합니다."""
        async with self._lock:
            subscribers = list(self.subscriptions.get(stream_id, ()))

        failed = []
        for websocket in subscribers:
            if not await self._send_text_safely(websocket, data):
                failed.append(websocket)

        if failed:
            async with self._lock:
                for websocket in failed:
                    self._remove(stream_id, websocket)
                    logger.info(f"Removed failed client from stream '{stream_id}'.")

    async def _send_text_safely(self, websocket: WebSocket, data: str) -> bool:
        if websocket.client_state != WebSocketState.CONNECTED:
            return False
        try:
            await websocket.send_text(data)
            return True
        except Exception as e:
            logger.warning(f"Failed to send text to client {websocket.client}: {e}. Disconnecting.")
            return False

    def _remove(self, stream_id: str, websocket: WebSocket):
        subscribers = self.subscriptions.get(stream_id)
        if subscribers and websocket in subscribers:
            subscribers.remove(websocket)
            if not subscribers:
                del self.subscriptions[stream_id]
            logger.info(f"Client disconnected from stream '{stream_id}'.")
