"""
디바이스 분류기: 원본 디바이스 레코드를 사람이 읽을 수 있는 표준 이름으로 변환합니다.
규칙은 순서가 중요하며 처음 일치하는 규칙이 적용됩니다.
"""

from typing import Callable, Iterable, List, Optional

from camera_resolver.schemas.camera import (
    CameraDevice,
    CameraFormat,
    ClassifiedDevice,
    Facing,
    LensTag,
    Resolution,
)

FRONT_ULTRA_WIDE = "Front Ultra Wide Camera"
FRONT_TRUE_DEPTH = "Front TrueDepth Camera"
FRONT = "Front Camera"
BACK_TRIPLE = "Back Triple Camera"
BACK_DUAL_WIDE = "Back Dual Wide Camera"
BACK_DUAL = "Back Dual Camera"
BACK_TELEPHOTO = "Back Telephoto Camera"
BACK_ULTRA_WIDE = "Back Ultra Wide Camera"
BACK = "Back Camera"

ALL_LABELS = (
    FRONT_ULTRA_WIDE, FRONT_TRUE_DEPTH, FRONT,
    BACK_TRIPLE, BACK_DUAL_WIDE, BACK_DUAL, BACK_TELEPHOTO, BACK_ULTRA_WIDE, BACK,
)


def largest_format(
    formats: Iterable[CameraFormat],
    dimensions: Callable[[CameraFormat], Optional[Resolution]],
) -> Optional[CameraFormat]:
    """Format with the greatest area under `dimensions`, ties broken by frame rate."""
    best: Optional[CameraFormat] = None
    best_key = None
    for fmt in formats:
        resolution = dimensions(fmt)
        if resolution is None:
            continue
        key = (resolution.area, fmt.max_fps)
        if best_key is None or key > best_key:
            best, best_key = fmt, key
    return best


def is_dual_wide(device: CameraDevice) -> bool:
    return (
        device.has_lens(LensTag.ULTRA_WIDE_ANGLE)
        and device.has_lens(LensTag.WIDE_ANGLE)
        and not device.has_lens(LensTag.TELEPHOTO)
    )


class DeviceClassifier:
    def __init__(self, depth_marker_token: str = "TrueDepth"):
        self.depth_marker_token = depth_marker_token

    def classify(self, device: CameraDevice) -> str:
        if device.facing == Facing.FRONT:
            return self._classify_front(device)
        return self._classify_back(device)

    def _classify_front(self, device: CameraDevice) -> str:
        if device.has_lens(LensTag.ULTRA_WIDE_ANGLE):
            return FRONT_ULTRA_WIDE
        token = self.depth_marker_token
        if token and (token in device.name or token in device.id):
            return FRONT_TRUE_DEPTH
        return FRONT

    def _classify_back(self, device: CameraDevice) -> str:
        ultra_wide = device.has_lens(LensTag.ULTRA_WIDE_ANGLE)
        wide = device.has_lens(LensTag.WIDE_ANGLE)
        telephoto = device.has_lens(LensTag.TELEPHOTO)

        if ultra_wide and wide and telephoto:
            return BACK_TRIPLE
        if ultra_wide and wide:
            return BACK_DUAL_WIDE
        if wide and telephoto:
            return BACK_DUAL
        if telephoto:
            return BACK_TELEPHOTO
        if ultra_wide:
            return BACK_ULTRA_WIDE
        return BACK

    def describe(self, device: CameraDevice) -> ClassifiedDevice:
        max_video = largest_format(device.formats, lambda f: f.video_resolution)
        max_photo = largest_format(device.formats, lambda f: f.photo_resolution)
        return ClassifiedDevice(
            label=self.classify(device),
            device=device,
            max_video_resolution=str(max_video.video_resolution) if max_video else None,
            max_photo_resolution=str(max_photo.photo_resolution) if max_photo else None,
        )

    def classify_snapshot(self, devices: Iterable[CameraDevice]) -> List[ClassifiedDevice]:
        """
        Classifies a full snapshot, then collapses entries sharing an identity
        to the first occurrence. The label is never part of the dedup key.
        """
        classified = [self.describe(device) for device in devices]

        unique: List[ClassifiedDevice] = []
        seen_ids = set()
        for entry in classified:
            if entry.device.id in seen_ids:
                continue
            seen_ids.add(entry.device.id)
            unique.append(entry)
        return unique
