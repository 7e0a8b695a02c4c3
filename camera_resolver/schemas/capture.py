"""
촬영 협력자와 주고받는 DTO를 정의합니다.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from camera_resolver.schemas.camera import CameraDevice, CameraFormat
from camera_resolver.schemas.selection import EngineError


class CaptureConfiguration(BaseModel):
    """촬영 세션 구성을 위한 (device, format, zoom) 묶음."""
    device: CameraDevice
    format: CameraFormat
    zoom: float


class CapturedAsset(BaseModel):
    path: str = Field(..., min_length=1, description="저장된 파일 경로")
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    byte_size: int = Field(..., ge=0)


class CaptureResult(BaseModel):
    """촬영 완료 보고. 성공 시 asset, 실패 시 error 중 정확히 하나를 담습니다."""
    asset: Optional[CapturedAsset] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "CaptureResult":
        if (self.asset is None) == (self.error is None):
            raise ValueError("Exactly one of 'asset' or 'error' must be provided.")
        return self


class PostProcessingPlan(BaseModel):
    action: Literal["skip", "process"]
    asset: CapturedAsset
    target_resolution: Optional[str] = None
    reason: str


class CaptureOutcome(BaseModel):
    plan: Optional[PostProcessingPlan] = None
    error: Optional[EngineError] = None


class FormatRequest(BaseModel):
    resolution: str = Field(..., description="'WxH' 형식의 해상도 문자열")
    aspect_ratio_label: Optional[str] = None
