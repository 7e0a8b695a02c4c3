from fastapi import APIRouter, Depends

from camera_resolver.core.event_bus import EventBus
from camera_resolver.stores.application_store import ApplicationStore
from camera_resolver.dependencies import get_event_bus, get_store

router = APIRouter()

@router.get("/status", summary="Get the combined status of all stores")
def get_store_status(store: ApplicationStore = Depends(get_store)):
    """
    디바이스 스냅샷, 선택 상태, 이벤트 발행 통계를 한 번에 조회합니다.
    """
    return store.get_status()

@router.get("/events/status", summary="Get the status of all event publications")
def get_event_status(
    store: ApplicationStore = Depends(get_store),
    event_bus: EventBus = Depends(get_event_bus),
):
    """
    이벤트별 상세 정보와 이벤트 버스 전체 지표를 반환합니다:
    - 마지막 발행 시간 (ISO 8601 형식)
    - 총 발행 횟수
    - 분당 발행 횟수 (최근 윈도우 기준)
    """
    return {
        "events": store.events.get_status(),
        "bus": event_bus.get_metrics(),
    }
