from typing import Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from camera_resolver.dependencies import get_catalog, get_selection_service
from camera_resolver.schemas.selection import (
    SelectAspectRatioRequest,
    SelectDeviceRequest,
    SelectResolutionRequest,
    SelectionState,
    TransitionResponse,
)
from camera_resolver.services.resolution_catalog import ResolutionCatalog
from camera_resolver.services.selection_service import SelectionService

router = APIRouter()

@router.get("", summary="Current selection state", response_model=SelectionState)
def get_selection(service: SelectionService = Depends(get_selection_service)):
    return service.get_state()


@router.get(
    "/resolutions",
    summary="Resolutions the selected device supports for a label",
    response_model=List[str],
)
def get_available_resolutions(
    label: str = Query(..., description="화면비 라벨"),
    mode: Optional[Literal["video_exact", "bounding"]] = Query(None, description="매칭 방식 (생략 시 설정값)"),
    service: SelectionService = Depends(get_selection_service),
    catalog: ResolutionCatalog = Depends(get_catalog),
):
    if not catalog.has_label(label):
        raise HTTPException(status_code=404, detail=f"Unknown aspect ratio label '{label}'.")
    return service.available_resolutions(label, mode)


@router.get(
    "/resolutions/all",
    summary="Supported resolutions for every label",
    response_model=Dict[str, List[str]],
)
def get_all_available_resolutions(
    mode: Optional[Literal["video_exact", "bounding"]] = Query(None),
    service: SelectionService = Depends(get_selection_service),
):
    return dict(service.available_by_label(mode))


@router.post("/device", summary="Select a device", response_model=TransitionResponse)
async def select_device(request: SelectDeviceRequest, service: SelectionService = Depends(get_selection_service)):
    return TransitionResponse.from_transition(await service.select_device(request.device_id))


@router.post("/toggle", summary="Switch to a device facing the other way", response_model=TransitionResponse)
async def toggle_position(service: SelectionService = Depends(get_selection_service)):
    return TransitionResponse.from_transition(await service.toggle_position())


@router.post("/aspect-ratio", summary="Select an aspect-ratio label", response_model=TransitionResponse)
async def select_aspect_ratio(request: SelectAspectRatioRequest, service: SelectionService = Depends(get_selection_service)):
    return TransitionResponse.from_transition(await service.select_aspect_ratio(request.label))


@router.post("/resolution", summary="Select a target resolution", response_model=TransitionResponse)
async def select_resolution(request: SelectResolutionRequest, service: SelectionService = Depends(get_selection_service)):
    """
    FormatScorer로 요청 해상도에 가장 적합한 포맷을 선택합니다.
    실패하면 이전 선택이 그대로 유지되고 UnsupportedResolution 결과가 반환됩니다.
    """
    transition = await service.select_resolution(request.resolution, request.aspect_ratio_label)
    return TransitionResponse.from_transition(transition)
