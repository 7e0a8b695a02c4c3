from typing import List

from fastapi import APIRouter, Depends, HTTPException

from camera_resolver.dependencies import get_selection_service, get_store
from camera_resolver.schemas.camera import CameraDevice, DeviceSummary
from camera_resolver.schemas.selection import TransitionResponse
from camera_resolver.services.selection_service import SelectionService
from camera_resolver.stores.application_store import ApplicationStore

router = APIRouter()

@router.get(
    "",
    summary="List classified devices",
    description="Returns the de-duplicated, classified device list with representative max video/photo resolutions.",
    response_model=List[DeviceSummary],
)
def list_devices(store: ApplicationStore = Depends(get_store)):
    return store.devices.get_summaries()


@router.get(
    "/{device_id}",
    summary="Get one classified device",
    response_model=DeviceSummary,
)
def get_device(device_id: str, store: ApplicationStore = Depends(get_store)):
    entry = store.devices.get_classified_by_id(device_id)
    if entry is None:
        raise HTTPException(
            status_code=404,
            detail=f"Device '{device_id}' is not part of the current snapshot.",
        )
    return DeviceSummary.from_classified(entry)


@router.post(
    "/snapshot",
    summary="Replace the device snapshot",
    description="Called by the device-discovery collaborator on every enumeration event. The body fully replaces the previous snapshot.",
    response_model=TransitionResponse,
)
async def post_snapshot(
    devices: List[CameraDevice],
    service: SelectionService = Depends(get_selection_service),
):
    """
    디바이스 스냅샷을 받아 분류/중복제거 후 선택 상태를 갱신합니다.
    빈 스냅샷은 NoDeviceAvailable 결과와 함께 idle 상태로 돌아갑니다.
    """
    transition = await service.ingest_snapshot(devices)
    return TransitionResponse.from_transition(transition)
