import asyncio
import json

from starlette.websockets import WebSocketState

from camera_resolver.core.event_bus import EventBus
from camera_resolver.core.event_type import EventType
from camera_resolver.schemas.events import EngineErrorPayload
from camera_resolver.schemas.selection import EngineError, EngineErrorKind
from camera_resolver.websockets.connection_manager import ConnectionManager
from camera_resolver.websockets.streaming_service import DEVICES_STREAM, SELECTION_STREAM, StreamingService


class _FakeWebSocket:
    def __init__(self, fail: bool = False):
        self.client = "fake"
        self.client_state = WebSocketState.CONNECTED
        self.sent = []
        self._fail = fail

    async def accept(self):
        return None

    async def send_text(self, data: str):
        if self._fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


def test_engine_events_are_pushed_to_selection_stream_in_order():
    manager = ConnectionManager()
    bus = EventBus()
    streaming = StreamingService(connection_manager=manager, event_bus=bus)
    healthy, broken = _FakeWebSocket(), _FakeWebSocket(fail=True)
    devices_client = _FakeWebSocket()

    async def scenario():
        await streaming.start()
        await manager.connect(SELECTION_STREAM, healthy)
        await manager.connect(SELECTION_STREAM, broken)
        await manager.connect(DEVICES_STREAM, devices_client)
        for revision in (1, 2):
            await bus.publish(
                EventType.ENGINE_ERROR.value,
                EngineErrorPayload(
                    timestamp=0.0,
                    revision=revision,
                    error=EngineError.of(EngineErrorKind.NO_COUNTERPART_DEVICE),
                    action="toggle_position",
                ),
            )
        await streaming.stop()

    asyncio.run(scenario())

    messages = [json.loads(text) for text in healthy.sent]
    assert [m["event"] for m in messages] == ["ENGINE_ERROR", "ENGINE_ERROR"]
    assert [m["payload"]["revision"] for m in messages] == [1, 2]
    assert messages[0]["payload"]["error"]["kind"] == "NoCounterpartDevice"
    assert devices_client.sent == []
    assert manager.subscriptions[SELECTION_STREAM] == {healthy}
    assert bus.subscriber_count(EventType.ENGINE_ERROR.value) == 0
