import asyncio
import inspect
import time
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from loguru import logger

from camera_resolver.core.event_type import EventType

# 순환 참조를 피하기 위해 TYPE_CHECKING에서만 EventHandler를 임포트
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from camera_resolver.stores.handlers.event_handler import EventHandler

EventCallback = Callable[[str, Any], Awaitable[None]]
EventKey = Union[EventType, str]


def _event_key(event: EventKey) -> str:
    return event.value if isinstance(event, EventType) else event


class EventBus:
    """
    선택 엔진의 결과를 렌더링/촬영 협력자에게 전달하는 비동기 이벤트 버스입니다.

    구독자는 등록 순서대로 하나씩 호출됩니다. 상태 스냅샷이 발행된 순서 그대로
    도착해야 하므로 병렬 실행(gather)은 사용하지 않습니다.
    이벤트 이름은 `EventType` 또는 그 문자열 값 중 어느 것으로든 지정할 수 있습니다.
    """
    def __init__(self, event_handler: Optional['EventHandler'] = None):
        self._subscribers: Dict[str, List[EventCallback]] = defaultdict(list)
        self._lock = asyncio.Lock()
        self._event_handler = event_handler
        self._published = 0
        self._delivered = 0
        self._failed = 0
        self._started_at = time.time()

    def set_event_handler(self, event_handler: 'EventHandler'):
        """발행 기록을 남길 EventHandler를 주입합니다."""
        self._event_handler = event_handler

    async def subscribe(self, event: EventKey, callback: EventCallback):
        if not inspect.iscoroutinefunction(callback):
            raise ValueError(f"콜백 함수는 async 함수여야 합니다: {callback}")

        name = _event_key(event)
        async with self._lock:
            self._subscribers[name].append(callback)
            logger.debug(f"'{name}' 구독 추가. 구독자 수: {len(self._subscribers[name])}")

    async def unsubscribe(self, event: EventKey, callback: EventCallback):
        name = _event_key(event)
        async with self._lock:
            callbacks = self._subscribers.get(name)
            if not callbacks or callback not in callbacks:
                logger.warning(f"'{name}' 구독 해제 실패: 등록되지 않은 콜백입니다.")
                return
            callbacks.remove(callback)
            logger.debug(f"'{name}' 구독 해제. 남은 구독자 수: {len(callbacks)}")

    async def publish(self, event: EventKey, data: Any = None):
        """
        이벤트를 발행합니다. EventHandler에 발행을 기록한 뒤 구독자를 순서대로 호출합니다.
        구독자 오류는 기록만 하고 발행자에게 전파하지 않습니다.
        """
        name = _event_key(event)
        if self._event_handler:
            self._event_handler.record_event(name)

        async with self._lock:
            subscribers = list(self._subscribers.get(name, ()))

        self._published += 1
        if not subscribers:
            logger.trace(f"'{name}' 이벤트에 구독자가 없습니다")
            return

        logger.debug(f"'{name}' 발행 중... 구독자 수: {len(subscribers)}")
        for callback in subscribers:
            await self._deliver(callback, name, data)

    def subscriber_count(self, event: EventKey) -> int:
        return len(self._subscribers.get(_event_key(event), ()))

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "total_events_published": self._published,
            "total_callbacks_executed": self._delivered,
            "total_errors": self._failed,
            "subscribers": {name: len(cbs) for name, cbs in self._subscribers.items() if cbs},
            "uptime_seconds": round(time.time() - self._started_at, 3),
        }

    async def _deliver(self, callback: EventCallback, event_name: str, data: Any):
        try:
            await callback(event_name, data)
            self._delivered += 1
        except Exception as e:
            logger.opt(exception=e).error(f"콜백 실행 중 오류 발생 (이벤트: {event_name}): {e}")
            self._failed += 1
