"""
애플리케이션의 의존성(dependency)을 생성하고 관리합니다.
"""
from camera_resolver.core.config import settings
from camera_resolver.core.event_bus import EventBus

from camera_resolver.stores.application_store import ApplicationStore
from camera_resolver.services.resolution_catalog import ResolutionCatalog
from camera_resolver.services.device_classifier import DeviceClassifier
from camera_resolver.services.capability_filter import CapabilityFilter
from camera_resolver.services.format_scorer import FormatScorer
from camera_resolver.services.zoom_policy import ZoomPolicy
from camera_resolver.services.selection_reducer import SelectionReducer
from camera_resolver.services.selection_service import SelectionService
from camera_resolver.services.capture_service import CaptureService
from camera_resolver.websockets.connection_manager import ConnectionManager
from camera_resolver.websockets.streaming_service import StreamingService


# --- 단일 인스턴스 생성 (의존성 순서에 주의) ---

# 1. 의존성이 없는 기본 구성 요소들
_store = ApplicationStore()
_event_bus = EventBus()
_connection_manager = ConnectionManager()
_catalog = ResolutionCatalog()

# 의존성 연결: EventBus가 Store의 EventHandler를 사용하도록 설정
_event_bus.set_event_handler(_store.events)


# 2. 설정값으로 구성되는 순수 엔진 구성 요소들
_classifier = DeviceClassifier(depth_marker_token=settings.DEPTH_MARKER_TOKEN)
_capability_filter = CapabilityFilter(
    catalog=_catalog,
    mode=settings.AVAILABILITY_MATCH_MODE,
    ceiling=settings.resolution_ceiling,
    cache_size=settings.AVAILABILITY_CACHE_SIZE,
)
_scorer = FormatScorer(
    aspect_weight=settings.SCORER_ASPECT_WEIGHT,
    resolution_weight=settings.SCORER_RESOLUTION_WEIGHT,
    area_scale=settings.SCORER_AREA_SCALE,
    wide_fov_range=settings.wide_fov_range,
    wide_fov_boost=settings.SCORER_WIDE_FOV_BOOST,
    off_wide_penalty=settings.SCORER_OFF_WIDE_PENALTY,
)
_zoom_policy = ZoomPolicy(policy=settings.ZOOM_POLICY)
_reducer = SelectionReducer(
    catalog=_catalog,
    scorer=_scorer,
    zoom_policy=_zoom_policy,
    default_format_ceiling=settings.resolution_ceiling,
)

# 3. 저장소/이벤트 버스에 의존하는 서비스들
_selection_service = SelectionService(
    store=_store,
    event_bus=_event_bus,
    reducer=_reducer,
    classifier=_classifier,
    capability_filter=_capability_filter,
)
_capture_service = CaptureService(store=_store, event_bus=_event_bus, selection_service=_selection_service)
_streaming_service = StreamingService(connection_manager=_connection_manager, event_bus=_event_bus)


# --- 의존성 공급자(Provider) 함수 ---
def get_store() -> ApplicationStore: return _store
def get_event_bus() -> EventBus: return _event_bus
def get_catalog() -> ResolutionCatalog: return _catalog
def get_capability_filter() -> CapabilityFilter: return _capability_filter
def get_selection_service() -> SelectionService: return _selection_service
def get_capture_service() -> CaptureService: return _capture_service
def get_connection_manager() -> ConnectionManager: return _connection_manager
def get_streaming_service() -> StreamingService: return _streaming_service
