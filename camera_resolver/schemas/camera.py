"""
디바이스 탐색 협력자가 전달하는 카메라/포맷 레코드와 해상도 타입을 정의합니다.
Pydantic의 BaseModel(frozen)을 사용하여 스냅샷이 한 번 만들어지면 변경되지 않도록 하고,
해시 가능하게 만들어 계산 결과 캐싱의 키로 사용할 수 있게 합니다.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


_RESOLUTION_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


class Facing(str, Enum):
    FRONT = "front"
    BACK = "back"


class LensTag(str, Enum):
    WIDE_ANGLE = "wide-angle"
    ULTRA_WIDE_ANGLE = "ultra-wide-angle"
    TELEPHOTO = "telephoto"


class Resolution(BaseModel):
    """A width x height pair. Renders and parses as ``"WxH"``."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @classmethod
    def parse(cls, text: str) -> Optional["Resolution"]:
        """Returns None for anything that isn't a positive ``WxH`` pair."""
        if not text:
            return None
        match = _RESOLUTION_PATTERN.match(text)
        if not match:
            return None
        width, height = int(match.group(1)), int(match.group(2))
        if width <= 0 or height <= 0:
            return None
        return cls(width=width, height=height)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def fits_within(self, max_width: int, max_height: int) -> bool:
        return self.width <= max_width and self.height <= max_height

    def covers(self, other: "Resolution") -> bool:
        return self.width >= other.width and self.height >= other.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class CameraFormat(BaseModel):
    model_config = ConfigDict(frozen=True)

    video_width: int = Field(..., gt=0)
    video_height: int = Field(..., gt=0)
    photo_width: Optional[int] = Field(default=None, gt=0)
    photo_height: Optional[int] = Field(default=None, gt=0)
    max_fps: float = Field(0.0, ge=0.0, description="최대 프레임 레이트")
    field_of_view: float = Field(..., gt=0.0, description="시야각 (도)")

    @model_validator(mode="after")
    def _photo_dimensions_paired(self) -> "CameraFormat":
        if (self.photo_width is None) != (self.photo_height is None):
            raise ValueError("photo_width and photo_height must be given together.")
        return self

    @property
    def video_resolution(self) -> Resolution:
        return Resolution(width=self.video_width, height=self.video_height)

    @property
    def photo_resolution(self) -> Optional[Resolution]:
        if self.photo_width is None or self.photo_height is None:
            return None
        return Resolution(width=self.photo_width, height=self.photo_height)


class CameraDevice(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="디바이스 고유 식별자")
    name: str = Field("", description="분류 전 원본 표시 이름")
    facing: Facing
    physical_devices: FrozenSet[LensTag] = Field(default_factory=frozenset)
    formats: Tuple[CameraFormat, ...] = ()
    min_zoom: float = Field(1.0, gt=0.0)
    neutral_zoom: Optional[float] = None
    max_zoom: float = Field(1.0, gt=0.0)

    @field_validator("physical_devices", mode="before")
    @classmethod
    def _normalize_lens_tags(cls, value):
        # Mobile camera stacks report e.g. "wide-angle-camera".
        if value is None:
            return frozenset()
        normalized = []
        for tag in value:
            if isinstance(tag, str) and tag.endswith("-camera"):
                tag = tag[: -len("-camera")]
            normalized.append(tag)
        return frozenset(normalized)

    @model_validator(mode="after")
    def _zoom_range_ordered(self) -> "CameraDevice":
        if self.min_zoom > self.max_zoom:
            raise ValueError("min_zoom must not exceed max_zoom.")
        neutral = self.neutral_zoom
        if neutral is not None and neutral > 0 and not (self.min_zoom <= neutral <= self.max_zoom):
            raise ValueError("neutral_zoom must lie within [min_zoom, max_zoom].")
        return self

    def has_lens(self, tag: LensTag) -> bool:
        return tag in self.physical_devices


class ClassifiedDevice(BaseModel):
    """A device paired with its display label and representative resolutions."""
    model_config = ConfigDict(frozen=True)

    label: str
    device: CameraDevice
    max_video_resolution: Optional[str] = None
    max_photo_resolution: Optional[str] = None


class DeviceSummary(BaseModel):
    """렌더링 협력자에게 보여줄 디바이스 목록 항목."""
    id: str
    label: str
    raw_name: str
    facing: Facing
    physical_devices: list[LensTag]
    min_zoom: float
    max_zoom: float
    neutral_zoom: Optional[float]
    format_count: int
    max_video_resolution: Optional[str]
    max_photo_resolution: Optional[str]

    @classmethod
    def from_classified(cls, entry: ClassifiedDevice) -> "DeviceSummary":
        device = entry.device
        return cls(
            id=device.id,
            label=entry.label,
            raw_name=device.name,
            facing=device.facing,
            physical_devices=sorted(device.physical_devices, key=lambda tag: tag.value),
            min_zoom=device.min_zoom,
            max_zoom=device.max_zoom,
            neutral_zoom=device.neutral_zoom,
            format_count=len(device.formats),
            max_video_resolution=entry.max_video_resolution,
            max_photo_resolution=entry.max_photo_resolution,
        )
