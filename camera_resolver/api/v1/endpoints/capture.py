from fastapi import APIRouter, Depends, HTTPException

from camera_resolver.dependencies import get_capture_service
from camera_resolver.schemas.camera import CameraFormat
from camera_resolver.schemas.capture import (
    CaptureConfiguration, CaptureOutcome, CaptureResult, FormatRequest
)
from camera_resolver.schemas.selection import EngineError, EngineErrorKind
from camera_resolver.services.capture_service import CaptureService

router = APIRouter()

_STATUS_BY_KIND = {
    EngineErrorKind.NO_DEVICE_AVAILABLE: 409,
    EngineErrorKind.NO_FORMAT_AVAILABLE: 409,
    EngineErrorKind.UNSUPPORTED_RESOLUTION: 422,
    EngineErrorKind.SUPERSEDED: 409,
}


def _raise_for_error(error: EngineError):
    raise HTTPException(
        status_code=_STATUS_BY_KIND.get(error.kind, 400),
        detail=error.model_dump(mode="json"),
    )


@router.get(
    "/configuration",
    summary="Resolved (device, format, zoom) triple",
    response_model=CaptureConfiguration,
)
def get_capture_configuration(service: CaptureService = Depends(get_capture_service)):
    """
    촬영 세션 구성에 사용할 디바이스/포맷/줌을 반환합니다.
    format_resolved 단계가 아니면 409를 반환합니다.
    """
    configuration, error = service.get_configuration()
    if error is not None:
        _raise_for_error(error)
    return configuration


@router.post(
    "/format",
    summary="Request the format for a resolution string",
    response_model=CameraFormat,
)
async def request_format(request: FormatRequest, service: CaptureService = Depends(get_capture_service)):
    fmt, error = await service.request_format_for(request.resolution, request.aspect_ratio_label)
    if error is not None:
        _raise_for_error(error)
    return fmt


@router.post(
    "/result",
    summary="Report a capture result",
    description="Accepts the captured-asset descriptor (or a failure message) and returns the post-processing plan.",
    response_model=CaptureOutcome,
)
async def post_capture_result(result: CaptureResult, service: CaptureService = Depends(get_capture_service)):
    return await service.handle_capture_result(result)
