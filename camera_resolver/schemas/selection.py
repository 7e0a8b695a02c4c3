"""
선택 상태 머신의 상태, 오류 결과, 사용자/탐색 액션 모델을 정의합니다.
엔진의 모든 실패는 예외가 아닌 `EngineError` 값으로 반환됩니다.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from camera_resolver.schemas.camera import CameraDevice, CameraFormat


class SelectionPhase(str, Enum):
    IDLE = "idle"
    DEVICES_DISCOVERED = "devices_discovered"
    DEVICE_SELECTED = "device_selected"
    FORMAT_RESOLVED = "format_resolved"


class EngineErrorKind(str, Enum):
    NO_DEVICE_AVAILABLE = "NoDeviceAvailable"
    NO_FORMAT_AVAILABLE = "NoFormatAvailable"
    UNSUPPORTED_RESOLUTION = "UnsupportedResolution"
    NO_COUNTERPART_DEVICE = "NoCounterpartDevice"
    CAPTURE_FAILED = "CaptureFailed"
    DEVICE_NOT_FOUND = "DeviceNotFound"
    UNKNOWN_ASPECT_RATIO = "UnknownAspectRatio"
    SUPERSEDED = "Superseded"


_DEFAULT_MESSAGES = {
    EngineErrorKind.NO_DEVICE_AVAILABLE: "No camera device is available.",
    EngineErrorKind.NO_FORMAT_AVAILABLE: "The selected camera does not expose any capture format.",
    EngineErrorKind.UNSUPPORTED_RESOLUTION: "No supported format was found for this resolution.",
    EngineErrorKind.NO_COUNTERPART_DEVICE: "No camera facing the other way was found on this device.",
    EngineErrorKind.CAPTURE_FAILED: "Capture failed.",
    EngineErrorKind.DEVICE_NOT_FOUND: "The requested camera is not part of the current device list.",
    EngineErrorKind.UNKNOWN_ASPECT_RATIO: "Unknown aspect ratio.",
    EngineErrorKind.SUPERSEDED: "A newer request replaced this one before it was applied.",
}


class EngineError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: EngineErrorKind
    message: str

    @classmethod
    def of(cls, kind: EngineErrorKind, detail: Optional[str] = None) -> "EngineError":
        message = _DEFAULT_MESSAGES[kind]
        if detail:
            message = f"{message} ({detail})"
        return cls(kind=kind, message=message)


class SelectionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: SelectionPhase = SelectionPhase.IDLE
    selected_device: Optional[CameraDevice] = None
    selected_format: Optional[CameraFormat] = None
    selected_zoom: float = 1.0
    selected_aspect_ratio_label: Optional[str] = None
    selected_resolution_string: Optional[str] = None

    @model_validator(mode="after")
    def _downstream_requires_device(self) -> "SelectionState":
        if self.selected_device is None:
            if self.selected_format is not None or self.selected_resolution_string is not None:
                raise ValueError("Downstream fields require a selected device.")
        elif self.selected_format is not None and self.selected_format not in self.selected_device.formats:
            raise ValueError("selected_format must belong to selected_device.")
        return self

    @property
    def selected_device_id(self) -> Optional[str]:
        return self.selected_device.id if self.selected_device else None


class Transition(BaseModel):
    """Result of applying one action: the resulting state and an optional error."""
    model_config = ConfigDict(frozen=True)

    state: SelectionState
    error: Optional[EngineError] = None
    superseded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.superseded


# --- Actions ---

class DiscoverDevices(BaseModel):
    kind: Literal["discover"] = "discover"
    devices: Tuple[CameraDevice, ...] = ()


class SelectDevice(BaseModel):
    kind: Literal["select_device"] = "select_device"
    device_id: str


class TogglePosition(BaseModel):
    kind: Literal["toggle_position"] = "toggle_position"


class SelectAspectRatio(BaseModel):
    kind: Literal["select_aspect_ratio"] = "select_aspect_ratio"
    label: str


class SelectResolution(BaseModel):
    kind: Literal["select_resolution"] = "select_resolution"
    resolution: str
    aspect_ratio_label: Optional[str] = None


SelectionAction = Union[DiscoverDevices, SelectDevice, TogglePosition, SelectAspectRatio, SelectResolution]

USER_ACTION_KINDS = frozenset({"select_device", "toggle_position", "select_aspect_ratio", "select_resolution"})
DEVICE_CHANGE_KINDS = frozenset({"select_device", "toggle_position"})


# --- API request/response models ---

class SelectDeviceRequest(BaseModel):
    device_id: str = Field(..., min_length=1)


class SelectAspectRatioRequest(BaseModel):
    label: str = Field(..., min_length=1)


class SelectResolutionRequest(BaseModel):
    resolution: str = Field(..., description="'WxH' 형식의 해상도 문자열")
    aspect_ratio_label: Optional[str] = Field(default=None, description="화면비 힌트로 사용할 카탈로그 라벨")


class TransitionResponse(BaseModel):
    state: SelectionState
    error: Optional[EngineError] = None
    superseded: bool = False

    @classmethod
    def from_transition(cls, transition: Transition) -> "TransitionResponse":
        return cls(state=transition.state, error=transition.error, superseded=transition.superseded)
