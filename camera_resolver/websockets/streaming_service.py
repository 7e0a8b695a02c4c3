import json

from camera_resolver.core.event_bus import EventBus
from camera_resolver.core.logging import logger
from camera_resolver.core.event_type import EventType
from camera_resolver.websockets.connection_manager import ConnectionManager
from camera_resolver.schemas.events import (
    DevicesUpdatedPayload, EngineErrorPayload, SelectionChangedPayload
)

SELECTION_STREAM = "selection"
DEVICES_STREAM = "devices"

class StreamingService:
    """
    Subscribes to engine events and pushes them as JSON to the rendering
    clients connected to the matching WebSocket stream.
    """
    def __init__(self, connection_manager: ConnectionManager, event_bus: EventBus):
        self.manager = connection_manager
        self.event_bus = event_bus
        self._is_running = False

    async def start(self):
        if self._is_running: return
        self._is_running = True
        await self.event_bus.subscribe(EventType.SELECTION_CHANGED, self.handle_selection_changed)
        await self.event_bus.subscribe(EventType.ENGINE_ERROR, self.handle_engine_error)
        await self.event_bus.subscribe(EventType.DEVICES_UPDATED, self.handle_devices_updated)
        logger.info("StreamingService started and subscribed to engine events.")

    async def stop(self):
        if not self._is_running: return
        self._is_running = False
        await self.event_bus.unsubscribe(EventType.SELECTION_CHANGED, self.handle_selection_changed)
        await self.event_bus.unsubscribe(EventType.ENGINE_ERROR, self.handle_engine_error)
        await self.event_bus.unsubscribe(EventType.DEVICES_UPDATED, self.handle_devices_updated)
        logger.info("StreamingService stopped and unsubscribed from events.")

    # --- Event Handlers ---

    async def handle_selection_changed(self, event_name: str, payload: SelectionChangedPayload):
        if self.manager.has_subscribers(SELECTION_STREAM):
            await self.manager.broadcast_text(SELECTION_STREAM, self._envelope(event_name, payload))

    async def handle_engine_error(self, event_name: str, payload: EngineErrorPayload):
        if self.manager.has_subscribers(SELECTION_STREAM):
            await self.manager.broadcast_text(SELECTION_STREAM, self._envelope(event_name, payload))

    async def handle_devices_updated(self, event_name: str, payload: DevicesUpdatedPayload):
        if self.manager.has_subscribers(DEVICES_STREAM):
            await self.manager.broadcast_text(DEVICES_STREAM, self._envelope(event_name, payload))

    @staticmethod
    def _envelope(event_name: str, payload) -> str:
        return json.dumps({"event": event_name, "payload": payload.model_dump(mode="json")})
