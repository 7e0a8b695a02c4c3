from fastapi import APIRouter, Depends

from camera_resolver.dependencies import get_selection_service
from camera_resolver.services.selection_service import SelectionService

router = APIRouter()

@router.get(
    "/",
    summary="Simple health check"
)
def health_check(service: SelectionService = Depends(get_selection_service)):
    """
    서버 동작 여부와 현재 선택 상태 머신의 단계를 반환합니다.
    """
    return {
        "status": "ok",
        "phase": service.get_state().phase.value,
        "queue_running": service.is_running,
    }
